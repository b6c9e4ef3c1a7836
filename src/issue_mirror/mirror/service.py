"""Run one issue event through link lookup, classification and reconciliation."""

import asyncio
import logging
import weakref

from pydantic import BaseModel

from ..config import Settings
from ..issue_tracker.public_api import IssueTracker
from .classifier import MirrorAction, classify
from .events import IssueEvent
from .link_store import LinkStore
from .reconciler import Reconciler

logger = logging.getLogger("issue_mirror.service")


class MirrorResult(BaseModel):
    """Outcome of handling one event."""

    action: MirrorAction
    reason: str = ""
    public_issue_number: int | None = None


class MirrorService:
    """
    Mirrors private issues labeled "public" into the public repository.

    Events for the same private issue are serialized within this process.
    Deliveries handled by separate processes are not coordinated: two of them
    can both see no link and both create a public copy.
    """

    def __init__(self, settings: Settings, tracker: IssueTracker):
        self._settings = settings
        self._tracker = tracker
        self._locks: weakref.WeakValueDictionary[tuple[str, str, int], asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def owner_for(self, event: IssueEvent) -> str:
        """Organization owning both repositories."""
        return self._settings.organization or event.organization

    async def handle(self, event: IssueEvent) -> MirrorResult:
        """
        Handle a single issue event.

        Raises:
            PreconditionError: If the event conflicts with the recorded link.
            LinkCorruptionError: If the link comment cannot be parsed.
            httpx.HTTPStatusError: If a tracker call fails.
        """
        settings = self._settings
        issue_number = event.issue.number

        if event.repository and event.repository != settings.private_repo:
            reason = f"event for {event.repository}, not {settings.private_repo}"
            logger.info(f"Issue #{issue_number}: ignored ({reason})")
            return MirrorResult(action=MirrorAction.NOOP, reason=reason)

        owner = self.owner_for(event)
        key = (owner, settings.private_repo, issue_number)
        # Entries drop out once no pending event holds the lock
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock

        async with lock:
            link_store = LinkStore(
                self._tracker,
                private_repo=f"{owner}/{settings.private_repo}",
                bot_username=settings.bot_username,
            )
            found = await link_store.lookup(issue_number)
            link = found.link

            decision = classify(event, link, public_label=settings.public_label)
            logger.info(
                f"Issue #{issue_number}: {event.action} → {decision.action.value} ({decision.reason})"
            )

            reconciler = Reconciler(self._tracker, link_store, settings, owner)
            public_number = await reconciler.execute(decision, event, link, found.bot_comment)

        return MirrorResult(
            action=decision.action,
            reason=decision.reason,
            public_issue_number=public_number,
        )
