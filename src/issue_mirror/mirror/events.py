"""Models for incoming GitHub issue events."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from ..issue_tracker.public_api import IssueState


class IssueSnapshot(BaseModel):
    """The private issue as it looked when the event was emitted."""

    number: int
    title: str = ""
    body: str | None = None
    state: IssueState = IssueState.OPEN
    closed_at: datetime | None = None
    labels: list[str] = Field(default_factory=list)
    assignees: list[str] = Field(default_factory=list)

    @property
    def is_open(self) -> bool:
        return self.closed_at is None

    def has_label(self, name: str) -> bool:
        return name in self.labels


class IssueEvent(BaseModel):
    """A single `issues` webhook delivery."""

    action: str
    issue: IssueSnapshot
    label: str | None = None
    organization: str = ""
    repository: str = ""

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "IssueEvent":
        """Build an event from a raw GitHub webhook payload."""
        issue = payload.get("issue") or {}
        if "number" not in issue:
            raise ValueError("Event payload does not describe an issue")
        repo = payload.get("repository") or {}
        organization = (payload.get("organization") or {}).get("login") or (
            (repo.get("owner") or {}).get("login", "")
        )

        return cls(
            action=payload.get("action", ""),
            label=(payload.get("label") or {}).get("name"),
            organization=organization,
            repository=repo.get("name", ""),
            issue=IssueSnapshot(
                number=issue["number"],
                title=issue.get("title") or "",
                body=issue.get("body"),
                state=IssueState.CLOSED if issue.get("state") == "closed" else IssueState.OPEN,
                closed_at=issue.get("closed_at"),
                labels=[label["name"] for label in issue.get("labels", [])],
                assignees=[user["login"] for user in issue.get("assignees") or []],
            ),
        )
