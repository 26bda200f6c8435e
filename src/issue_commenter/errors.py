"""Error taxonomy for the comment action.

Every failure the action reports is a subclass of :class:`CommentActionError`.
The CLI maps :class:`ConfigurationError` to exit code 2 and everything else to 1.
"""

from __future__ import annotations

from pathlib import Path


class CommentActionError(Exception):
    """Base class for all errors raised by the action."""


class ConfigurationError(CommentActionError):
    """Inputs are missing, contradictory or malformed."""


class MissingIssueError(ConfigurationError):
    def __init__(self) -> None:
        super().__init__("Missing required input: issue-number")


class AmbiguousTargetError(ConfigurationError):
    def __init__(self) -> None:
        super().__init__("Please pick only one: 'comment-template' or 'comment-template-file'")


class NoTemplateError(ConfigurationError):
    def __init__(self) -> None:
        super().__init__("Missing required input: 'comment-template' or 'comment-template-file'")


class VariableSyntaxError(ConfigurationError):
    """`comment-template-vars` is not a JSON object."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Invalid JSON input: 'comment-template-vars' ({detail})")
        self.detail = detail


class InvalidRepositoryError(ConfigurationError):
    """No usable repository coordinate was supplied."""


class ResourceError(CommentActionError):
    """A template source could not be located or read."""


class TemplateNotFoundError(ResourceError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown Template: {name}")
        self.name = name


class FileReadError(ResourceError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Unable to read template file {path}: {reason}")
        self.path = path
        self.reason = reason


class AuthenticationError(CommentActionError):
    """No GitHub credential is available."""


class UpstreamError(CommentActionError):
    """The GitHub API returned an error or could not be reached.

    ``status`` is ``None`` for transport failures where no response was received.
    """

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(f"GitHub API error ({status}): {message}" if status else message)
        self.status = status
        self.message = message


class TargetResolutionError(CommentActionError):
    """Update mode could not determine which comment to replace."""


class MissingTargetError(TargetResolutionError):
    def __init__(self, *, repository: str, issue_number: int, login: str) -> None:
        super().__init__(
            f"No comment by {login} found on {repository}#{issue_number} to update"
        )
        self.repository = repository
        self.issue_number = issue_number
        self.login = login
