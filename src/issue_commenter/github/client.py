"""GitHub API client for issue comments.

This wraps the REST endpoints we need (list / create / update issue comments) and uses
PyGithub for the authenticated-user lookup. Keeping GitHub calls here keeps the
upsert logic free of HTTP details and makes it easy to mock in tests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

import requests
from github import Auth, Github, GithubException

from issue_commenter.errors import UpstreamError

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT_SECONDS = 30


@dataclass(frozen=True, slots=True)
class IssueRef:
    """Issue (or pull request) coordinates."""

    owner: str
    repo: str
    number: int

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True, slots=True)
class CommentIdentity:
    """An existing issue comment, as returned by the list endpoint."""

    id: int
    # None for comments whose author account was deleted.
    author: str | None
    body: str
    created_at: datetime | None


@dataclass(frozen=True, slots=True)
class PostedComment:
    """A comment that was just created or updated."""

    id: int
    body: str
    html_url: str | None


class GitHubClient:
    """Small wrapper around the issue-comment REST API."""

    def __init__(
        self,
        *,
        token: str,
        base_url: str = "https://api.github.com",
        session: requests.Session | None = None,
        github_api: Github | None = None,
    ) -> None:
        if not token:
            raise ValueError("GitHub token is required")

        self._rest_base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": "issue-commenter",
            }
        )
        # PyGithub does not hit the network until an attribute is read.
        self._github = github_api or Github(auth=Auth.Token(token), base_url=self._rest_base_url)

    def _repo_url(self, issue: IssueRef, path: str) -> str:
        path = path.lstrip("/")
        return f"{self._rest_base_url}/repos/{issue.owner}/{issue.repo}/{path}"

    def _issue_comments_url(self, issue: IssueRef) -> str:
        if issue.number <= 0:
            raise ValueError("issue number must be a positive integer")
        return self._repo_url(issue, f"issues/{issue.number}/comments")

    @staticmethod
    def _error_message(resp: requests.Response) -> str:
        try:
            data = resp.json()
        except ValueError:
            return resp.text or resp.reason or "unknown error"
        if isinstance(data, dict) and isinstance(data.get("message"), str):
            return data["message"]
        return resp.text or resp.reason or "unknown error"

    def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            resp = self._session.request(method, url, timeout=REQUEST_TIMEOUT_SECONDS, **kwargs)
        except requests.RequestException as e:
            raise UpstreamError(str(e)) from e

        if not resp.ok:
            message = self._error_message(resp)
            logger.error(
                "GitHub API request failed",
                extra={"method": method, "url": url, "status": resp.status_code},
            )
            raise UpstreamError(message, status=resp.status_code)
        return resp.json()

    @staticmethod
    def _parse_datetime(value: object) -> datetime | None:
        if not isinstance(value, str) or not value.strip():
            return None
        # GitHub commonly returns timestamps like "2025-01-01T00:00:00Z".
        return datetime.fromisoformat(value.replace("Z", "+00:00"))

    @staticmethod
    def _safe_login(value: object) -> str | None:
        if isinstance(value, dict):
            login = value.get("login")
            if isinstance(login, str) and login.strip():
                return login
        return None

    @staticmethod
    def _posted_comment(data: Any) -> PostedComment:
        if not isinstance(data, dict) or not isinstance(data.get("id"), int):
            raise UpstreamError("Unexpected comment response: missing id")
        body = data.get("body")
        html_url = data.get("html_url")
        return PostedComment(
            id=data["id"],
            body=body if isinstance(body, str) else "",
            html_url=html_url if isinstance(html_url, str) else None,
        )

    def list_issue_comments(self, issue: IssueRef) -> list[CommentIdentity]:
        """Return the first page of comments, in the order GitHub returns them."""

        logger.debug("Listing comments", extra={"repo": issue.full_name, "issue": issue.number})
        payload = self._request("GET", self._issue_comments_url(issue), params={"per_page": 100})
        if not isinstance(payload, list):
            raise UpstreamError("Unexpected comment list response")

        comments: list[CommentIdentity] = []
        for item in payload:
            if not isinstance(item, dict) or not isinstance(item.get("id"), int):
                continue
            body = item.get("body")
            comments.append(
                CommentIdentity(
                    id=item["id"],
                    author=self._safe_login(item.get("user")),
                    body=body if isinstance(body, str) else "",
                    created_at=self._parse_datetime(item.get("created_at")),
                )
            )
        return comments

    def get_authenticated_login(self) -> str:
        """Return the login of the token's user (e.g. `github-actions[bot]`)."""

        try:
            login = self._github.get_user().login
        except GithubException as e:
            data = e.data if isinstance(e.data, dict) else {}
            message = data.get("message") if isinstance(data.get("message"), str) else str(e)
            raise UpstreamError(message, status=e.status) from e
        except requests.RequestException as e:
            raise UpstreamError(str(e)) from e
        logger.debug("Resolved acting identity", extra={"login": login})
        return login

    def create_comment(self, issue: IssueRef, body: str) -> PostedComment:
        data = self._request("POST", self._issue_comments_url(issue), json={"body": body})
        return self._posted_comment(data)

    def update_comment(self, issue: IssueRef, comment_id: int, body: str) -> PostedComment:
        url = self._repo_url(issue, f"issues/comments/{comment_id}")
        data = self._request("PATCH", url, json={"body": body})
        return self._posted_comment(data)

    def close(self) -> None:
        self._session.close()
        self._github.close()
