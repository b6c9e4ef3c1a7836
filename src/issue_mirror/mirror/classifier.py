"""Decide what a single issue event means for the public copy.

The decision is a pure function of the event and the link found on the
private issue:

- "public" added to an open issue with no link → create
- "public" added while a link exists → fail
- "public" added to a closed issue → no-op
- "public" removed with a link → delete; without one → fail
- edited / labeled / unlabeled / closed / reopened on a public issue → update
- deleted while public → delete
- everything else → no-op
"""

from enum import Enum

from pydantic import BaseModel

from .events import IssueEvent
from .link_store import Link

# Actions that refresh the public copy when the issue already carries the label
UPDATE_ACTIONS = {"edited", "labeled", "unlabeled", "closed", "reopened"}


class MirrorAction(str, Enum):
    """What to do with the public copy."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    NOOP = "noop"
    FAIL = "fail"


class Decision(BaseModel):
    """Result of classifying an event."""

    action: MirrorAction
    reason: str = ""
    message: str | None = None

    @classmethod
    def noop(cls, reason: str) -> "Decision":
        return cls(action=MirrorAction.NOOP, reason=reason)

    @classmethod
    def fail(cls, message: str) -> "Decision":
        return cls(action=MirrorAction.FAIL, reason=message, message=message)


def classify(event: IssueEvent, link: Link | None, public_label: str = "public") -> Decision:
    """
    Classify an event against the link state of its issue.

    Public-label transitions are decided first and never fall through to
    the label-membership checks.

    Args:
        event: The incoming issue event.
        link: Link found on the private issue, if any.
        public_label: Name of the label that controls mirroring.

    Returns:
        The decision to execute.
    """
    action = event.action
    issue = event.issue
    is_public_transition = event.label == public_label

    if action == "labeled" and is_public_transition:
        if not issue.is_open:
            return Decision.noop(f"'{public_label}' added to closed issue")
        if link is not None:
            return Decision.fail(f"Existing linked issue number already exists: {link.number}")
        return Decision(action=MirrorAction.CREATE, reason=f"'{public_label}' added")

    if action == "unlabeled" and is_public_transition:
        if link is None:
            return Decision.fail("No linked issue number found")
        return Decision(action=MirrorAction.DELETE, reason=f"'{public_label}' removed")

    if not issue.has_label(public_label):
        return Decision.noop(f"issue does not carry '{public_label}'")

    if action in UPDATE_ACTIONS:
        if link is None:
            return Decision.fail("No linked issue number found")
        return Decision(action=MirrorAction.UPDATE, reason=f"issue {action}")

    if action == "deleted":
        return Decision(action=MirrorAction.DELETE, reason="issue deleted")

    return Decision.noop(f"action '{action}' is not mirrored")
