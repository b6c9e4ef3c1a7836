"""Tests for the link comment store."""

import pytest

from issue_mirror.errors import LinkCorruptionError
from issue_mirror.issue_tracker import Comment
from issue_mirror.mirror.link_store import (
    Link,
    LinkStore,
    format_link,
    parse_link,
    parse_linked_number,
)

from .conftest import BOT, ORG

PRIVATE = f"{ORG}/private"


class TestParseLink:
    """Tests for parsing link comment bodies (no API calls)."""

    def test_format_link(self):
        """Test rendering a link body."""
        assert format_link("acme", "pub", 42) == "linked:acme/pub#42"

    def test_parse_link(self):
        """Test parsing a well-formed link comment."""
        link = parse_link(Comment(id="7", author=BOT, body="linked:acme/pub#42"))

        assert link == Link(comment_id="7", owner="acme", repo="pub", number=42)
        assert link.reference == "acme/pub#42"

    def test_parse_link_with_space_after_prefix(self):
        """Test that comments written as 'linked: owner/repo#N' still parse."""
        link = parse_link(Comment(id="7", body="linked: acme/pub#9"))
        assert link.number == 9

    def test_parse_link_ignores_unrelated_comment(self):
        """Test that comments without the prefix are not links."""
        assert parse_link(Comment(id="7", body="Thanks for the report!")) is None

    @pytest.mark.parametrize(
        "body",
        [
            "linked:acme/pub#",
            "linked:acme/pub#abc",
            "linked:pub#42",
            "linked:acme/pub#42 and more",
        ],
    )
    def test_parse_link_rejects_malformed_link(self, body):
        """Test that a prefixed but malformed body is reported as corruption."""
        with pytest.raises(LinkCorruptionError) as exc_info:
            parse_link(Comment(id="7", body=body))

        assert exc_info.value.comment_id == "7"

    def test_parse_linked_number(self):
        """Test extracting just the number."""
        assert parse_linked_number(Comment(id="1", body="linked:acme/pub#3")) == 3
        assert parse_linked_number(Comment(id="1", body="hello")) is None
        assert parse_linked_number(None) is None


class TestLinkStore:
    """Tests for LinkStore against the in-memory tracker."""

    @pytest.fixture
    def store(self, tracker):
        return LinkStore(tracker, private_repo=PRIVATE, bot_username=BOT)

    @pytest.mark.asyncio
    async def test_find_link_absent(self, store, tracker):
        """Test that an issue without comments has no link."""
        assert await store.find_link(5) is None
        assert tracker.call_names() == ["list_comments"]

    @pytest.mark.asyncio
    async def test_find_link_only_trusts_bot(self, store, tracker):
        """Test that link-looking comments from other users are ignored."""
        tracker.add_comment(PRIVATE, 5, "someone", "linked:acme/pub#13")
        assert await store.find_link(5) is None

    @pytest.mark.asyncio
    async def test_find_link_skips_other_bot_comments(self, store, tracker):
        """Test that the first bot comment with the prefix is used."""
        tracker.add_comment(PRIVATE, 5, BOT, "Heads up: this issue is being mirrored")
        expected = tracker.add_comment(PRIVATE, 5, BOT, "linked:acme/pub#42")
        tracker.add_comment(PRIVATE, 5, BOT, "linked:acme/pub#43")

        link = await store.find_link(5)

        assert link.comment_id == expected.id
        assert link.number == 42

    @pytest.mark.asyncio
    async def test_find_link_raises_on_corrupt_comment(self, store, tracker):
        """Test that a corrupt bot link comment is an error, not 'no link'."""
        tracker.add_comment(PRIVATE, 5, BOT, "linked:acme/pub#oops")

        with pytest.raises(LinkCorruptionError):
            await store.find_link(5)

    @pytest.mark.asyncio
    async def test_write_then_find_round_trip(self, store, tracker):
        """Test that a written link reads back with the same number."""
        written = await store.write_link(5, "acme", "pub", 77)
        found = await store.find_link(5)

        assert found == written
        assert tracker.calls_named("create_comment")[0]["body"] == "linked:acme/pub#77"

    @pytest.mark.asyncio
    async def test_lookup_returns_link_comment(self, store, tracker):
        """Test that the bot comment returned is the one carrying the link."""
        tracker.add_comment(PRIVATE, 5, BOT, "Heads up: this issue is being mirrored")
        expected = tracker.add_comment(PRIVATE, 5, BOT, "linked:acme/pub#42")

        found = await store.lookup(5)

        assert found.bot_comment == expected
        assert found.link.number == 42

    @pytest.mark.asyncio
    async def test_lookup_keeps_bot_comment_without_link(self, store, tracker):
        """Test that a bot comment is reported even when it records no link."""
        tracker.add_comment(PRIVATE, 5, "someone", "Looks good")
        expected = tracker.add_comment(PRIVATE, 5, BOT, "Heads up: mirrored soon")

        found = await store.lookup(5)

        assert found.bot_comment == expected
        assert found.link is None

    @pytest.mark.asyncio
    async def test_delete_comment(self, store, tracker):
        """Test deleting the link comment."""
        await store.write_link(5, "acme", "pub", 77)
        found = await store.lookup(5)

        await store.delete_comment(found.bot_comment)

        assert tracker.calls_named("delete_comment") == [
            {"repo": PRIVATE, "comment_id": found.bot_comment.id}
        ]
        assert await store.find_link(5) is None

    @pytest.mark.asyncio
    async def test_delete_comment_absent_is_noop(self, store, tracker):
        """Test that deleting a missing comment makes no calls."""
        await store.delete_comment(None)
        assert tracker.calls == []
