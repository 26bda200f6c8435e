"""Run the comment action end to end.

Order of checks: issue number, template selector, variables, repository, render,
token, and only then the network. Nothing is written to GitHub unless every earlier
step succeeded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Mapping

from issue_commenter.config import ActionSettings
from issue_commenter.context import ActionContext
from issue_commenter.errors import AuthenticationError, MissingIssueError
from issue_commenter.github.client import GitHubClient, IssueRef
from issue_commenter.github.comment_service import CommentResult, CommentService, parse_repository
from issue_commenter.templating.registry import TemplateRegistry
from issue_commenter.templating.resolver import TemplateResolver, parse_variables, select_template

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str], GitHubClient]


@dataclass(frozen=True, slots=True)
class ActionInputs:
    """Inputs of one invocation, as the workflow supplied them."""

    issue_number: int | None = None
    repo_url: str | None = None
    comment_template: str | None = None
    comment_template_file: str | None = None
    comment_template_vars: Mapping[str, Any] | str | None = None
    update_recent: bool = False
    template_syntax: str = "auto"

    @classmethod
    def from_settings(cls, settings: ActionSettings) -> ActionInputs:
        return cls(
            issue_number=settings.issue_number,
            repo_url=settings.repo_url,
            comment_template=settings.comment_template,
            comment_template_file=settings.comment_template_file,
            comment_template_vars=settings.comment_template_vars,
            update_recent=settings.update_recent,
            template_syntax=settings.template_syntax,
        )


def run_action(
    inputs: ActionInputs,
    *,
    context: ActionContext,
    token: str,
    registry: TemplateRegistry,
    client_factory: ClientFactory,
    base_dir: Path | None = None,
) -> CommentResult:
    """Render the template and post it.

    Raises:
        ConfigurationError: Inputs are missing, contradictory or malformed.
        ResourceError: The template cannot be found or read.
        AuthenticationError: No token is available.
        UpstreamError: A GitHub API call failed.
        TargetResolutionError: Update mode found no comment to replace.
    """

    logger.info(
        "Running action",
        extra={
            "repo_url": inputs.repo_url,
            "issue_number": inputs.issue_number,
            "comment_template": inputs.comment_template,
            "comment_template_file": inputs.comment_template_file,
            "update_recent": inputs.update_recent,
        },
    )

    if not inputs.issue_number or inputs.issue_number <= 0:
        raise MissingIssueError()
    selector = select_template(inputs.comment_template, inputs.comment_template_file)
    variables = parse_variables(inputs.comment_template_vars)
    owner, repo = parse_repository(inputs.repo_url, context.repository)
    issue = IssueRef(owner=owner, repo=repo, number=inputs.issue_number)

    resolver = TemplateResolver(
        registry=registry,
        context=context,
        syntax=inputs.template_syntax,
        base_dir=base_dir,
    )
    body = resolver.resolve(selector, variables)

    if not token.strip():
        raise AuthenticationError("GITHUB_TOKEN is not set")

    github = client_factory(token)
    try:
        service = CommentService(github=github)
        return service.upsert(issue, body, update_recent=inputs.update_recent)
    finally:
        github.close()
