"""Apply a classification decision to the public repository."""

import logging

from ..config import Settings
from ..errors import PreconditionError
from ..issue_tracker.public_api import Comment, IssueState, IssueTracker
from .classifier import Decision, MirrorAction
from .events import IssueEvent, IssueSnapshot
from .link_store import Link, LinkStore

logger = logging.getLogger("issue_mirror.reconciler")


class Reconciler:
    """
    Creates, updates and deletes the public copy of a private issue.

    Calls are made one at a time. Nothing is rolled back: if the public issue
    is created but the link comment cannot be written, the public issue stays
    without a recorded link.
    """

    def __init__(
        self,
        tracker: IssueTracker,
        link_store: LinkStore,
        settings: Settings,
        owner: str,
    ):
        self._tracker = tracker
        self._links = link_store
        self._settings = settings
        self._owner = owner
        self._public_repo = f"{owner}/{settings.public_repo}"

    def mirrored_labels(self, issue: IssueSnapshot) -> list[str]:
        """Labels to write on the public copy (the public label is never copied)."""
        return [name for name in issue.labels if name != self._settings.public_label]

    async def execute(
        self,
        decision: Decision,
        event: IssueEvent,
        link: Link | None,
        bot_comment: Comment | None = None,
    ) -> int | None:
        """
        Execute a decision.

        Returns:
            The public issue number acted upon, if any.

        Raises:
            PreconditionError: If the decision is a failure.
        """
        issue_number = event.issue.number

        if decision.action == MirrorAction.FAIL:
            raise PreconditionError(decision.message or decision.reason)

        if decision.action == MirrorAction.NOOP:
            logger.info(f"Issue #{issue_number}: nothing to do ({decision.reason})")
            return None

        if decision.action == MirrorAction.CREATE:
            return await self.create(event)

        if decision.action == MirrorAction.UPDATE:
            if link is None:
                raise PreconditionError("No linked issue number found")
            await self.update(event, link)
            return link.number

        public_number = link.number if link else None
        await self.delete(bot_comment, public_number)
        return public_number

    async def create(self, event: IssueEvent) -> int:
        """Create the public copy and record the link on the private issue."""
        issue = event.issue
        labels = self.mirrored_labels(issue)

        created = await self._tracker.create_issue(
            self._public_repo,
            title=issue.title,
            body=issue.body,
            labels=labels,
            assignees=[self._settings.public_assignee],
        )
        logger.info(f"Issue #{issue.number}: created {self._public_repo}#{created.number}")

        await self._links.write_link(
            issue.number, self._owner, self._settings.public_repo, created.number
        )
        return created.number

    async def update(self, event: IssueEvent, link: Link) -> None:
        """Bring the public copy in line with the private issue.

        Posting the closing comment and updating fields are independent;
        either, both or neither may happen.
        """
        issue = event.issue
        public = await self._tracker.get_issue(self._public_repo, link.number)

        if issue.state == IssueState.CLOSED and public.state == IssueState.OPEN:
            await self._tracker.create_comment(
                self._public_repo, link.number, self._settings.closing_comment
            )
            logger.info(f"Issue #{issue.number}: announced closing on #{link.number}")

        labels = self.mirrored_labels(issue)
        changed = (
            issue.title != public.title
            or (issue.body or "") != (public.body or "")
            or set(labels) != set(public.labels)
            or issue.state != public.state
        )
        if not changed:
            logger.debug(f"Issue #{issue.number}: public copy already in sync")
            return

        await self._tracker.update_issue(
            self._public_repo,
            link.number,
            title=issue.title,
            body=issue.body or "",
            state=issue.state,
            labels=labels,
            assignees=[self._settings.public_assignee],
        )
        logger.info(f"Issue #{issue.number}: updated {self._public_repo}#{link.number}")

    async def delete(self, bot_comment: Comment | None, public_number: int | None) -> None:
        """Delete the public copy and the bot comment, skipping whichever is unknown."""
        if public_number is not None:
            node_id = await self._tracker.get_issue_node_id(self._public_repo, public_number)
            await self._tracker.delete_issue(node_id)
            logger.info(f"Deleted {self._public_repo}#{public_number}")

        if bot_comment is not None:
            await self._links.delete_comment(bot_comment)
