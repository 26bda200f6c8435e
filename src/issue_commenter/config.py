"""Settings for the comment action.

Configuration is loaded from:
- GitHub Actions inputs, exposed to the step as `INPUT_<NAME>` environment variables
- the ambient workflow environment (`GITHUB_REPOSITORY`, `GITHUB_ACTOR`, ...)
- and a local `.env` file (if present), which is handy when running the CLI by hand

Actions keeps hyphens in input variable names (`INPUT_ISSUE-NUMBER`), so the aliases
below spell them that way. Declared-but-unset inputs arrive as empty strings and are
normalised to `None` here.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from issue_commenter.context import ActionContext

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

TemplateSyntax = Literal["auto", "mustache", "expression"]


class ActionSettings(BaseSettings):
    """Settings for a single action invocation.

    Environment variables:
    - GITHUB_TOKEN                      (required before any API call)
    - GITHUB_REPOSITORY / GITHUB_ACTOR  (ambient workflow context)
    - GITHUB_API_URL / GITHUB_SERVER_URL (optional, for GitHub Enterprise)
    - LOG_LEVEL / LOG_FORMAT            (optional)
    - COMMENT_TEMPLATES_DIR             (optional, overrides the shipped templates)
    - INPUT_*                           (action inputs, see action.yml)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `ActionSettings(_env_file=path_to_env)`.
    """

    # The token is deliberately not validated here: a missing token is reported as an
    # authentication failure after the inputs have been checked.
    github_token: str = Field(
        default="",
        validation_alias="GITHUB_TOKEN",
        description="Token used for GitHub API authentication",
    )
    github_api_url: str = Field(
        default="https://api.github.com",
        validation_alias="GITHUB_API_URL",
        description="GitHub REST API base URL",
    )
    github_server_url: str = Field(
        default="https://github.com",
        validation_alias="GITHUB_SERVER_URL",
        description="GitHub web base URL",
    )
    github_repository: str | None = Field(
        default=None,
        validation_alias="GITHUB_REPOSITORY",
        description="Repository that triggered the workflow, as 'owner/repo'",
    )
    github_actor: str | None = Field(
        default=None,
        validation_alias="GITHUB_ACTOR",
        description="Login of the user that triggered the workflow",
    )

    github_output: Path | None = Field(
        default=None,
        validation_alias="GITHUB_OUTPUT",
        description="File the runner reads step outputs from",
    )

    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_format: Literal["json", "text"] = Field(default="json", validation_alias="LOG_FORMAT")

    templates_dir: Path = Field(
        default=DEFAULT_TEMPLATES_DIR,
        validation_alias="COMMENT_TEMPLATES_DIR",
        description="Directory holding the named (premade) templates",
    )

    repo_url: str | None = Field(default=None, validation_alias="INPUT_REPO-URL")
    issue_number: int | None = Field(default=None, validation_alias="INPUT_ISSUE-NUMBER")
    comment_template: str | None = Field(
        default=None,
        validation_alias=AliasChoices("INPUT_COMMENT-TEMPLATE", "INPUT_PREMADE-COMMENT-NAME"),
    )
    comment_template_file: str | None = Field(
        default=None,
        validation_alias=AliasChoices("INPUT_COMMENT-TEMPLATE-FILE", "INPUT_FILE-LOCATION"),
    )
    comment_template_vars: str | None = Field(
        default=None,
        validation_alias="INPUT_COMMENT-TEMPLATE-VARS",
    )
    update_recent: bool = Field(default=False, validation_alias="INPUT_UPDATE-RECENT")
    template_syntax: TemplateSyntax = Field(
        default="auto",
        validation_alias="INPUT_TEMPLATE-SYNTAX",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level

    @field_validator(
        "github_output",
        "github_repository",
        "github_actor",
        "repo_url",
        "issue_number",
        "comment_template",
        "comment_template_file",
        "comment_template_vars",
        mode="before",
    )
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("update_recent", mode="before")
    @classmethod
    def _only_literal_true(cls, value: Any) -> bool:
        # Mirrors the workflow convention: only the exact string "true" opts in.
        if isinstance(value, str):
            return value == "true"
        return bool(value)

    @field_validator("template_syntax", mode="before")
    @classmethod
    def _default_syntax(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return "auto"
        return value

    def action_context(self) -> ActionContext:
        """Snapshot of the ambient workflow context, passed explicitly to the core."""

        inputs: dict[str, str] = {}
        if self.issue_number is not None:
            inputs["issue-number"] = str(self.issue_number)
        if self.repo_url:
            inputs["repo-url"] = self.repo_url
        return ActionContext(
            repository=self.github_repository,
            actor=self.github_actor,
            server_url=self.github_server_url,
            inputs=inputs,
        )
