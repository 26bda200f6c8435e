"""Test configuration and fixtures."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import Mock

import pytest

from issue_commenter.config import DEFAULT_TEMPLATES_DIR
from issue_commenter.context import ActionContext
from issue_commenter.github.client import GitHubClient
from issue_commenter.templating.registry import TemplateRegistry

_AMBIENT_VARS = (
    "GITHUB_TOKEN",
    "GITHUB_REPOSITORY",
    "GITHUB_ACTOR",
    "GITHUB_API_URL",
    "GITHUB_SERVER_URL",
    "GITHUB_OUTPUT",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "COMMENT_TEMPLATES_DIR",
)


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every test without workflow variables and outside any `.env` file."""

    for name in _AMBIENT_VARS:
        monkeypatch.delenv(name, raising=False)
    for name in list(os.environ):
        if name.upper().startswith("INPUT_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def registry() -> TemplateRegistry:
    """Registry over the templates shipped with the package."""
    return TemplateRegistry.from_directory(DEFAULT_TEMPLATES_DIR)


@pytest.fixture
def action_context() -> ActionContext:
    return ActionContext(
        repository="chriswblake/introduction-to-github-v2",
        actor="chriswblake",
        inputs={"issue-number": "1"},
    )


@pytest.fixture
def mock_github() -> Mock:
    """A GitHub client that never touches the network."""
    return Mock(spec=GitHubClient)
