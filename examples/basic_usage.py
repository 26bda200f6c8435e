#!/usr/bin/env python3
"""Programmatic comment example.

This demonstrates using the components directly instead of the action entrypoint:

* load settings (`GITHUB_TOKEN` from the environment or `.env`)
* render a premade template
* post it, or replace the previous comment posted with the same token

Repository and issue are passed as arguments (not read from `INPUT_*`).
"""

from __future__ import annotations

import argparse
from typing import Sequence

from issue_commenter.config import ActionSettings
from issue_commenter.errors import MissingTargetError
from issue_commenter.github.client import GitHubClient, IssueRef
from issue_commenter.github.comment_service import CommentService, parse_repository
from issue_commenter.logging import configure_logging
from issue_commenter.templating.registry import TemplateRegistry
from issue_commenter.templating.resolver import NamedTemplate, TemplateResolver


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Post a templated comment (programmatic example).")
    parser.add_argument("--repo", required=True, help='Target repository in the form "owner/repo"')
    parser.add_argument("--issue", type=int, required=True, help="Issue number")
    parser.add_argument("--template", default="checking-work", help="Premade template name")
    parser.add_argument("--login", default="", help="Value for the {{login}} placeholder")
    parser.add_argument("--update", action="store_true", help="Replace our latest comment")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = ActionSettings()
    configure_logging(settings.log_level, "text")

    resolver = TemplateResolver(registry=TemplateRegistry.from_directory(settings.templates_dir))
    body = resolver.resolve(
        NamedTemplate(args.template),
        {"login": args.login, "repo_full_name": args.repo},
    )

    owner, repo = parse_repository(args.repo, None)
    github = GitHubClient(token=settings.github_token, base_url=settings.github_api_url)
    try:
        result = CommentService(github=github).upsert(
            IssueRef(owner=owner, repo=repo, number=args.issue), body, update_recent=args.update
        )
    except MissingTargetError as exc:
        print(str(exc))
        return 1
    finally:
        github.close()

    print(f"Comment {result.action}: #{result.comment_id}")
    print(f"URL: {result.html_url}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
