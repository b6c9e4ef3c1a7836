"""One-shot entry point for a workflow run triggered by an `issues` event.

Reads the event payload from GITHUB_EVENT_PATH (or the first argument),
mirrors it, and exits non-zero with a workflow error annotation on failure.

Run with:
    issue-mirror [path/to/event.json]
"""

import asyncio
import json
import logging
import os
import sys
from pathlib import Path

from .config import Settings
from .issue_tracker import GitHubClient, IssueTracker
from .mirror import IssueEvent, MirrorResult, MirrorService

logger = logging.getLogger("issue_mirror.action")


def load_event(path: str | os.PathLike) -> IssueEvent:
    """Load and parse a webhook payload file."""
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    return IssueEvent.from_payload(payload)


async def run_event(
    event: IssueEvent,
    settings: Settings,
    tracker: IssueTracker | None = None,
) -> MirrorResult:
    """Mirror one event, closing the tracker afterwards if it was created here."""
    owns_tracker = tracker is None
    if tracker is None:
        tracker = GitHubClient(
            token=settings.bot_access_token,
            base_url=settings.github_api_url,
            timeout=settings.request_timeout_seconds,
        )

    try:
        return await MirrorService(settings, tracker).handle(event)
    finally:
        if owns_tracker:
            await tracker.close()


def escape_annotation(message: str) -> str:
    """Escape a message for a workflow command so it stays on one line."""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def fail(message: str) -> int:
    """Report a failed run the way workflow steps do."""
    print(f"::error::{escape_annotation(message)}")
    return 1


def main(argv: list[str] | None = None) -> int:
    """Run the mirror for a single event. Returns the process exit status."""
    argv = sys.argv[1:] if argv is None else argv

    settings = Settings.from_workflow_inputs()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )

    missing = settings.missing_fields()
    if missing:
        return fail(f"Missing configuration: {', '.join(missing)}")

    event_path = argv[0] if argv else os.environ.get("GITHUB_EVENT_PATH")
    if not event_path:
        return fail("No event payload: set GITHUB_EVENT_PATH or pass a path")

    try:
        event = load_event(event_path)
        result = asyncio.run(run_event(event, settings))
    except Exception as e:
        logger.exception("Mirroring failed")
        return fail(str(e) or type(e).__name__)

    logger.info(f"Done: {result.action.value} ({result.reason})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
