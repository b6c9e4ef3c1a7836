"""Public API for issue tracker module.

This module defines the public interface and models for the issue tracker.
Implementation modules import from here, not the other way around.
"""

from abc import ABC, abstractmethod
from enum import Enum

from pydantic import BaseModel, Field


# =============================================================================
# Models
# =============================================================================

class IssueState(str, Enum):
    """State of an issue."""

    OPEN = "open"
    CLOSED = "closed"


class Comment(BaseModel):
    """A comment on an issue."""

    id: str
    author: str = ""
    body: str = ""


class IssueInfo(BaseModel):
    """Information about an issue from the issue tracker."""

    number: int
    title: str
    body: str | None = None
    state: IssueState = IssueState.OPEN
    labels: list[str] = Field(default_factory=list)
    assignees: list[str] = Field(default_factory=list)


# =============================================================================
# Service Interface (ABC)
# =============================================================================

class IssueTracker(ABC):
    """Abstract interface for issue tracking systems.

    Repositories are addressed in owner/name format throughout.
    """

    @abstractmethod
    async def list_comments(self, repo: str, issue_number: int) -> list[Comment]:
        """
        List the comments on an issue.

        Only the first page is returned, in the tracker's default order.

        Args:
            repo: Repository in owner/name format.
            issue_number: Issue number.

        Returns:
            Comments in creation order.
        """
        pass

    @abstractmethod
    async def create_comment(self, repo: str, issue_number: int, body: str) -> Comment:
        """
        Add a comment to an issue.

        Args:
            repo: Repository in owner/name format.
            issue_number: Issue number.
            body: Comment body.

        Returns:
            The created comment.
        """
        pass

    @abstractmethod
    async def delete_comment(self, repo: str, comment_id: str) -> None:
        """
        Delete a comment.

        Args:
            repo: Repository in owner/name format.
            comment_id: Comment ID.
        """
        pass

    @abstractmethod
    async def create_issue(
        self,
        repo: str,
        title: str,
        body: str | None,
        labels: list[str] | None = None,
        assignees: list[str] | None = None,
    ) -> IssueInfo:
        """
        Create a new issue.

        Args:
            repo: Repository in owner/name format.
            title: Issue title.
            body: Issue body, may be empty.
            labels: Labels to apply.
            assignees: Logins to assign.

        Returns:
            IssueInfo for the created issue.
        """
        pass

    @abstractmethod
    async def get_issue(self, repo: str, issue_number: int) -> IssueInfo:
        """
        Get information about an issue.

        Args:
            repo: Repository in owner/name format.
            issue_number: Issue number.

        Returns:
            IssueInfo with issue details.
        """
        pass

    @abstractmethod
    async def update_issue(
        self,
        repo: str,
        issue_number: int,
        title: str | None = None,
        body: str | None = None,
        state: IssueState | None = None,
        labels: list[str] | None = None,
        assignees: list[str] | None = None,
    ) -> IssueInfo:
        """
        Update an issue's fields. Fields left as None are not sent.

        Args:
            repo: Repository in owner/name format.
            issue_number: Issue number.

        Returns:
            IssueInfo after the update.
        """
        pass

    @abstractmethod
    async def get_issue_node_id(self, repo: str, issue_number: int) -> str:
        """
        Resolve the tracker's internal identifier for an issue number.

        Args:
            repo: Repository in owner/name format.
            issue_number: Issue number.

        Returns:
            Opaque node identifier accepted by delete_issue.
        """
        pass

    @abstractmethod
    async def delete_issue(self, node_id: str) -> None:
        """
        Permanently delete an issue.

        Args:
            node_id: Identifier returned by get_issue_node_id.
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections."""
        pass
