"""Comment upsert: create a new comment, or replace the acting user's latest one.

"Latest" means the last matching element of the list GitHub returns. The endpoint
returns comments in ascending creation order by default, so the list is scanned from
the end; it is not re-sorted by timestamp.

The match is against the login of the authenticated token user, not the repository
owner. When update mode finds no such comment nothing is written and
`MissingTargetError` is raised; there is no fallback to creating a comment.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Sequence
from urllib.parse import urlparse

from issue_commenter.errors import InvalidRepositoryError, MissingTargetError
from issue_commenter.github.client import CommentIdentity, GitHubClient, IssueRef

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommentResult:
    """Outcome of an upsert."""

    comment_id: int
    body: str
    action: Literal["created", "updated"]
    html_url: str | None = None


def parse_repository(repo_url: str | None, ambient_repository: str | None) -> tuple[str, str]:
    """Return (owner, repo) from an explicit URL, falling back to the workflow's repository.

    Accepts `https://<host>/<owner>/<repo>` (optionally ending in `.git` or `/`) as well as
    the `owner/repo` shorthand.
    """

    value = (repo_url or "").strip() or (ambient_repository or "").strip()
    if not value:
        raise InvalidRepositoryError(
            "No repository: set 'repo-url' or run inside a workflow with GITHUB_REPOSITORY"
        )

    path = urlparse(value).path if "://" in value else value
    parts = [p for p in path.strip("/").split("/") if p]
    if len(parts) < 2:
        raise InvalidRepositoryError(f"Invalid repository reference: {value}")

    owner, repo = parts[0], parts[1]
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]
    if not repo:
        raise InvalidRepositoryError(f"Invalid repository reference: {value}")
    return owner, repo


def find_most_recent_by(comments: Sequence[CommentIdentity], login: str) -> CommentIdentity | None:
    for comment in reversed(comments):
        if comment.author == login:
            return comment
    return None


class CommentService:
    """Posts the rendered body on an issue."""

    def __init__(self, *, github: GitHubClient) -> None:
        self._github = github

    def find_most_recent_own_comment(self, issue: IssueRef) -> CommentIdentity:
        comments = self._github.list_issue_comments(issue)
        login = self._github.get_authenticated_login()
        match = find_most_recent_by(comments, login)
        if match is None:
            raise MissingTargetError(
                repository=issue.full_name, issue_number=issue.number, login=login
            )
        return match

    def upsert(self, issue: IssueRef, body: str, *, update_recent: bool) -> CommentResult:
        if not update_recent:
            posted = self._github.create_comment(issue, body)
            logger.info(
                "Comment created",
                extra={"repo": issue.full_name, "issue": issue.number, "comment_id": posted.id},
            )
            return CommentResult(
                comment_id=posted.id, body=posted.body, action="created", html_url=posted.html_url
            )

        target = self.find_most_recent_own_comment(issue)
        posted = self._github.update_comment(issue, target.id, body)
        logger.info(
            "Comment updated",
            extra={"repo": issue.full_name, "issue": issue.number, "comment_id": posted.id},
        )
        return CommentResult(
            comment_id=posted.id, body=posted.body, action="updated", html_url=posted.html_url
        )
