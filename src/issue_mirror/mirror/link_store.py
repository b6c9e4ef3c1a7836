"""Read and write the link comment that ties a private issue to its public copy.

The link is stored as a comment authored by the bot on the private issue:
linked:<owner>/<repo>#<number>

Comments written by earlier releases carry a space after the colon
("linked: owner/repo#12"); those parse too.
"""

import logging
import re

from pydantic import BaseModel

from ..errors import LinkCorruptionError
from ..issue_tracker.public_api import Comment, IssueTracker

logger = logging.getLogger("issue_mirror.link_store")

LINK_PREFIX = "linked:"

LINK_PATTERN = re.compile(
    r"^linked:\s*(?P<owner>[^/\s#]+)/(?P<repo>[^/\s#]+)#(?P<number>\d+)\s*$"
)


class Link(BaseModel):
    """A recorded link from a private issue to its public copy."""

    comment_id: str
    owner: str
    repo: str
    number: int

    @property
    def reference(self) -> str:
        return f"{self.owner}/{self.repo}#{self.number}"


class LinkLookup(BaseModel):
    """Bot comment found on a private issue and the link it records, if any."""

    bot_comment: Comment | None = None
    link: Link | None = None


def format_link(owner: str, repo: str, number: int) -> str:
    """Render the comment body recording a link."""
    return f"{LINK_PREFIX}{owner}/{repo}#{number}"


def parse_link(comment: Comment) -> Link | None:
    """Parse a comment into a Link.

    Returns None when the comment is not a link comment at all. A comment
    that starts with the link prefix but does not match the format raises
    LinkCorruptionError.
    """
    body = comment.body.strip()
    if not body.startswith(LINK_PREFIX):
        return None

    match = LINK_PATTERN.match(body)
    if not match:
        raise LinkCorruptionError(comment.id, comment.body)

    return Link(
        comment_id=comment.id,
        owner=match.group("owner"),
        repo=match.group("repo"),
        number=int(match.group("number")),
    )


def parse_linked_number(comment: Comment | None) -> int | None:
    """Return the public issue number recorded in a comment, if any."""
    if comment is None:
        return None
    link = parse_link(comment)
    return link.number if link else None


class LinkStore:
    """Finds, writes and removes link comments on private issues."""

    def __init__(self, tracker: IssueTracker, private_repo: str, bot_username: str):
        """
        Initialize the link store.

        Args:
            tracker: Issue tracker used for comment calls.
            private_repo: Private repository in owner/name format.
            bot_username: Login of the account that authors link comments.
        """
        self._tracker = tracker
        self._private_repo = private_repo
        self._bot_username = bot_username

    async def lookup(self, issue_number: int) -> LinkLookup:
        """Find the bot comment and the link recorded on a private issue.

        Only the first page of comments is inspected. The first bot-authored
        comment carrying the link prefix wins; without one, the first
        bot-authored comment is still returned so it can be cleaned up.
        """
        comments = await self._tracker.list_comments(self._private_repo, issue_number)

        first_bot_comment = None
        for comment in comments:
            if comment.author != self._bot_username:
                continue
            if first_bot_comment is None:
                first_bot_comment = comment
            link = parse_link(comment)
            if link is not None:
                logger.debug(f"Issue #{issue_number}: found link to {link.reference}")
                return LinkLookup(bot_comment=comment, link=link)

        return LinkLookup(bot_comment=first_bot_comment)

    async def find_link(self, issue_number: int) -> Link | None:
        """Find the link recorded on a private issue."""
        return (await self.lookup(issue_number)).link

    async def write_link(
        self, issue_number: int, owner: str, repo: str, public_number: int
    ) -> Link:
        """Record a link on the private issue."""
        body = format_link(owner, repo, public_number)
        comment = await self._tracker.create_comment(self._private_repo, issue_number, body)
        logger.info(f"Issue #{issue_number}: linked to {owner}/{repo}#{public_number}")
        return Link(comment_id=comment.id, owner=owner, repo=repo, number=public_number)

    async def delete_comment(self, comment: Comment | None) -> None:
        """Remove a bot comment from the private issue; no-op when there is none."""
        if comment is None:
            return
        await self._tracker.delete_comment(self._private_repo, comment.id)
        logger.info(f"Removed bot comment {comment.id}")
