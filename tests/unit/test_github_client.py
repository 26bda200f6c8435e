"""Unit tests for the GitHub comment client (no network)."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any
from unittest.mock import Mock

import pytest
import requests
from github import GithubException

from issue_commenter.errors import UpstreamError
from issue_commenter.github.client import GitHubClient, IssueRef

ISSUE = IssueRef(owner="octo-org", repo="octo-repo", number=7)


def _response(payload: Any, *, status: int = 200) -> Mock:
    resp = Mock()
    resp.ok = status < 400
    resp.status_code = status
    resp.reason = "Error"
    resp.text = str(payload)
    resp.json.return_value = payload
    return resp


@pytest.fixture
def session() -> Mock:
    session = Mock()
    session.headers = {}
    return session


@pytest.fixture
def github_api() -> Mock:
    return Mock()


@pytest.fixture
def client(session: Mock, github_api: Mock) -> GitHubClient:
    return GitHubClient(
        token="test-token",
        base_url="https://api.github.com/",
        session=session,
        github_api=github_api,
    )


def test_requires_token() -> None:
    with pytest.raises(ValueError, match="token is required"):
        GitHubClient(token="", session=Mock(headers={}), github_api=Mock())


def test_session_is_authenticated(client: GitHubClient, session: Mock) -> None:
    assert session.headers["Authorization"] == "Bearer test-token"
    assert session.headers["Accept"] == "application/vnd.github+json"


def test_list_issue_comments_keeps_platform_order(client: GitHubClient, session: Mock) -> None:
    session.request.return_value = _response(
        [
            {"id": 1, "body": "first", "user": {"login": "bot"}, "created_at": "2025-01-01T00:00:00Z"},
            {"id": 2, "body": "second", "user": {"login": "octocat"}, "created_at": "2025-01-02T00:00:00Z"},
            {"id": 3, "body": None, "user": None},
            {"unexpected": True},
        ]
    )

    comments = client.list_issue_comments(ISSUE)

    assert [c.id for c in comments] == [1, 2, 3]
    assert [c.author for c in comments] == ["bot", "octocat", None]
    assert comments[0].created_at == datetime(2025, 1, 1, tzinfo=UTC)
    assert comments[2].body == ""
    assert comments[2].created_at is None
    session.request.assert_called_once_with(
        "GET",
        "https://api.github.com/repos/octo-org/octo-repo/issues/7/comments",
        timeout=30,
        params={"per_page": 100},
    )


def test_create_comment(client: GitHubClient, session: Mock) -> None:
    session.request.return_value = _response(
        {"id": 55, "body": "Hello", "html_url": "https://github.com/octo-org/octo-repo/issues/7#issuecomment-55"}
    )

    posted = client.create_comment(ISSUE, "Hello")

    assert posted.id == 55
    assert posted.body == "Hello"
    assert posted.html_url.endswith("#issuecomment-55")
    session.request.assert_called_once_with(
        "POST",
        "https://api.github.com/repos/octo-org/octo-repo/issues/7/comments",
        timeout=30,
        json={"body": "Hello"},
    )


def test_update_comment(client: GitHubClient, session: Mock) -> None:
    session.request.return_value = _response({"id": 55, "body": "Changed"})

    posted = client.update_comment(ISSUE, 55, "Changed")

    assert posted.id == 55
    assert posted.html_url is None
    session.request.assert_called_once_with(
        "PATCH",
        "https://api.github.com/repos/octo-org/octo-repo/issues/comments/55",
        timeout=30,
        json={"body": "Changed"},
    )


def test_http_error_is_wrapped_with_platform_message(client: GitHubClient, session: Mock) -> None:
    session.request.return_value = _response({"message": "Not Found"}, status=404)

    with pytest.raises(UpstreamError) as excinfo:
        client.create_comment(ISSUE, "Hello")

    assert excinfo.value.status == 404
    assert excinfo.value.message == "Not Found"
    assert session.request.call_count == 1


def test_transport_error_is_wrapped(client: GitHubClient, session: Mock) -> None:
    session.request.side_effect = requests.ConnectionError("connection refused")

    with pytest.raises(UpstreamError) as excinfo:
        client.list_issue_comments(ISSUE)

    assert excinfo.value.status is None
    assert "connection refused" in str(excinfo.value)


def test_unexpected_comment_payload(client: GitHubClient, session: Mock) -> None:
    session.request.return_value = _response({"body": "no id"})

    with pytest.raises(UpstreamError, match="missing id"):
        client.create_comment(ISSUE, "Hello")


def test_invalid_issue_number(client: GitHubClient) -> None:
    with pytest.raises(ValueError):
        client.create_comment(IssueRef(owner="o", repo="r", number=0), "x")


def test_authenticated_login(client: GitHubClient, github_api: Mock) -> None:
    github_api.get_user.return_value.login = "github-actions[bot]"

    assert client.get_authenticated_login() == "github-actions[bot]"


def test_authenticated_login_error(client: GitHubClient, github_api: Mock) -> None:
    github_api.get_user.side_effect = GithubException(401, {"message": "Bad credentials"}, None)

    with pytest.raises(UpstreamError) as excinfo:
        client.get_authenticated_login()

    assert excinfo.value.status == 401
    assert excinfo.value.message == "Bad credentials"


def test_close_releases_both_clients(
    client: GitHubClient, session: Mock, github_api: Mock
) -> None:
    client.close()

    session.close.assert_called_once()
    github_api.close.assert_called_once()
