"""CLI entrypoint.

Inside GitHub Actions every input arrives as an `INPUT_*` environment variable and no
arguments are needed. The flags below override those values for local runs.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from issue_commenter import __version__
from issue_commenter.action import ActionInputs, run_action
from issue_commenter.config import ActionSettings
from issue_commenter.errors import CommentActionError, ConfigurationError
from issue_commenter.github.client import GitHubClient
from issue_commenter.github.comment_service import CommentResult
from issue_commenter.logging import configure_logging
from issue_commenter.templating.registry import TemplateRegistry

logger = logging.getLogger(__name__)

# Settings fields that CLI flags may override. Only flags actually passed take effect.
_OVERRIDABLE_FIELDS: tuple[str, ...] = (
    "repo_url",
    "issue_number",
    "comment_template",
    "comment_template_file",
    "comment_template_vars",
    "update_recent",
    "template_syntax",
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="issue-commenter",
        description="Post or update an issue comment rendered from a template",
    )
    parser.add_argument("--version", action="version", version=f"issue-commenter {__version__}")
    parser.add_argument(
        "--repo-url",
        default=None,
        help="Repository as 'https://github.com/owner/repo' or 'owner/repo' "
        "(defaults to GITHUB_REPOSITORY)",
    )
    parser.add_argument("--issue-number", type=int, default=None, help="Issue or PR number")
    parser.add_argument(
        "--comment-template",
        "--premade-comment-name",
        dest="comment_template",
        default=None,
        help="Name of a premade template",
    )
    parser.add_argument(
        "--comment-template-file",
        "--file-location",
        dest="comment_template_file",
        default=None,
        help="Path to a markdown template file",
    )
    parser.add_argument(
        "--comment-template-vars",
        default=None,
        help="JSON object with the template variables",
    )
    parser.add_argument(
        "--update-recent",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Replace the most recent comment by the authenticated user instead of creating one",
    )
    parser.add_argument(
        "--template-syntax",
        choices=["auto", "mustache", "expression"],
        default=None,
        help="Placeholder syntax of a template file (named templates are always mustache)",
    )
    parser.add_argument(
        "--list-templates",
        action="store_true",
        help="Print the names of the premade templates and exit",
    )
    return parser


def _apply_overrides(settings: ActionSettings, args: argparse.Namespace) -> ActionSettings:
    update = {
        name: getattr(args, name)
        for name in _OVERRIDABLE_FIELDS
        if getattr(args, name) is not None
    }
    # argparse already produced typed values, so no re-validation is needed.
    return settings.model_copy(update=update) if update else settings


def write_outputs(path: Path, result: CommentResult) -> None:
    """Append step outputs in the `name=value` format read by the workflow runner."""

    lines = [
        f"comment-id={result.comment_id}",
        f"comment-url={result.html_url or ''}",
        f"comment-action={result.action}",
    ]
    with path.open("a", encoding="utf-8") as fh:
        fh.write("\n".join(lines) + "\n")


def _fail(message: str) -> None:
    # Workflow command: marks the step as failed with an annotation.
    print(f"::error::{message}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = _apply_overrides(ActionSettings(), args)
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check the action inputs):", file=sys.stderr)
        print(e, file=sys.stderr)
        _fail("Invalid action inputs")
        return 2

    configure_logging(settings.log_level, settings.log_format)
    registry = TemplateRegistry.from_directory(settings.templates_dir)

    if args.list_templates:
        for name in registry.names:
            print(name)
        return 0

    def client_factory(token: str) -> GitHubClient:
        return GitHubClient(token=token, base_url=settings.github_api_url)

    try:
        result = run_action(
            ActionInputs.from_settings(settings),
            context=settings.action_context(),
            token=settings.github_token,
            registry=registry,
            client_factory=client_factory,
        )
    except ConfigurationError as e:
        logger.error(str(e))
        _fail(str(e))
        return 2
    except CommentActionError as e:
        logger.error(str(e), extra={"error": type(e).__name__})
        _fail(str(e))
        return 1
    except Exception as e:
        logger.exception("Action failed")
        _fail(str(e))
        return 1

    if settings.github_output is not None:
        write_outputs(settings.github_output, result)
    print(f"Comment {result.action}: {result.html_url or result.comment_id}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
