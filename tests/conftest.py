"""Shared fixtures for Issue Mirror tests."""

from typing import Any

import pytest

from issue_mirror.config import Settings
from issue_mirror.issue_tracker import Comment, IssueInfo, IssueState, IssueTracker

ORG = "acme"
PRIVATE_REPO = "private"
PUBLIC_REPO = "pub"
BOT = "mirror-bot"
ASSIGNEE = "triager"


class FakeIssueTracker(IssueTracker):
    """In-memory issue tracker that records every call."""

    def __init__(self):
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.comments: dict[tuple[str, int], list[Comment]] = {}
        self.issues: dict[tuple[str, int], IssueInfo] = {}
        self.node_ids: dict[str, tuple[str, int]] = {}
        self.next_number = 100
        self.next_comment_id = 1000
        self.closed = False

    def add_comment(self, repo: str, issue_number: int, author: str, body: str) -> Comment:
        self.next_comment_id += 1
        comment = Comment(id=str(self.next_comment_id), author=author, body=body)
        self.comments.setdefault((repo, issue_number), []).append(comment)
        return comment

    def add_issue(self, repo: str, issue: IssueInfo) -> IssueInfo:
        self.issues[(repo, issue.number)] = issue
        return issue

    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def calls_named(self, name: str) -> list[dict[str, Any]]:
        return [kwargs for call, kwargs in self.calls if call == name]

    async def list_comments(self, repo: str, issue_number: int) -> list[Comment]:
        self.calls.append(("list_comments", {"repo": repo, "issue_number": issue_number}))
        return list(self.comments.get((repo, issue_number), []))

    async def create_comment(self, repo: str, issue_number: int, body: str) -> Comment:
        self.calls.append(
            ("create_comment", {"repo": repo, "issue_number": issue_number, "body": body})
        )
        return self.add_comment(repo, issue_number, BOT, body)

    async def delete_comment(self, repo: str, comment_id: str) -> None:
        self.calls.append(("delete_comment", {"repo": repo, "comment_id": comment_id}))
        for key, comments in self.comments.items():
            if key[0] == repo:
                self.comments[key] = [c for c in comments if c.id != comment_id]

    async def create_issue(
        self,
        repo: str,
        title: str,
        body: str | None,
        labels: list[str] | None = None,
        assignees: list[str] | None = None,
    ) -> IssueInfo:
        self.calls.append(
            (
                "create_issue",
                {
                    "repo": repo,
                    "title": title,
                    "body": body,
                    "labels": labels,
                    "assignees": assignees,
                },
            )
        )
        self.next_number += 1
        issue = IssueInfo(
            number=self.next_number,
            title=title,
            body=body,
            labels=list(labels or []),
            assignees=list(assignees or []),
        )
        return self.add_issue(repo, issue)

    async def get_issue(self, repo: str, issue_number: int) -> IssueInfo:
        self.calls.append(("get_issue", {"repo": repo, "issue_number": issue_number}))
        return self.issues[(repo, issue_number)]

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
        self.calls.append(
            (
                "update_issue",
                {
                    "repo": repo,
                    "issue_number": issue_number,
                    "title": title,
                    "body": body,
                    "state": state,
                    "labels": labels,
                    "assignees": assignees,
                },
            )
        )
        current = self.issues[(repo, issue_number)]
        updates = {
            key: value
            for key, value in {
                "title": title,
                "body": body,
                "state": state,
                "labels": labels,
                "assignees": assignees,
            }.items()
            if value is not None
        }
        updated = current.model_copy(update=updates)
        return self.add_issue(repo, updated)

    async def get_issue_node_id(self, repo: str, issue_number: int) -> str:
        self.calls.append(("get_issue_node_id", {"repo": repo, "issue_number": issue_number}))
        node_id = f"I_{repo.replace('/', '_')}_{issue_number}"
        self.node_ids[node_id] = (repo, issue_number)
        return node_id

    async def delete_issue(self, node_id: str) -> None:
        self.calls.append(("delete_issue", {"node_id": node_id}))
        self.issues.pop(self.node_ids[node_id], None)

    async def close(self) -> None:
        self.closed = True


def make_payload(
    action: str,
    number: int = 5,
    label: str | None = None,
    labels: list[str] | None = None,
    state: str = "open",
    title: str = "Crash on startup",
    body: str | None = "Steps to reproduce",
    repository: str = PRIVATE_REPO,
) -> dict[str, Any]:
    """Build a GitHub `issues` webhook payload."""
    payload: dict[str, Any] = {
        "action": action,
        "organization": {"login": ORG},
        "repository": {"name": repository, "owner": {"login": ORG}},
        "issue": {
            "number": number,
            "title": title,
            "body": body,
            "state": state,
            "closed_at": "2024-01-15T10:00:00Z" if state == "closed" else None,
            "labels": [{"name": name} for name in (labels or [])],
            "assignees": [],
        },
    }
    if label is not None:
        payload["label"] = {"name": label}
    return payload


@pytest.fixture
def settings():
    """Settings pointing at the test organization."""
    return Settings(
        private_repo=PRIVATE_REPO,
        public_repo=PUBLIC_REPO,
        bot_username=BOT,
        bot_access_token="dummy",
        public_assignee=ASSIGNEE,
    )


@pytest.fixture
def tracker():
    """In-memory tracker."""
    return FakeIssueTracker()
