"""GitHub comment integration."""

from issue_commenter.github.client import CommentIdentity, GitHubClient, IssueRef, PostedComment
from issue_commenter.github.comment_service import CommentResult, CommentService, parse_repository

__all__ = [
    "CommentIdentity",
    "CommentResult",
    "CommentService",
    "GitHubClient",
    "IssueRef",
    "PostedComment",
    "parse_repository",
]
