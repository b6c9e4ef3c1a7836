"""Issue tracker abstraction layer."""

from .github_client import GitHubClient
from .public_api import (
    # Models
    Comment,
    IssueInfo,
    IssueState,
    # ABC interface
    IssueTracker,
)

__all__ = [
    # Public API - Models
    "Comment",
    "IssueInfo",
    "IssueState",
    # Public API - Interface
    "IssueTracker",
    # Implementations
    "GitHubClient",
]
