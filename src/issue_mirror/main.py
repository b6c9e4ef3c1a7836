"""FastAPI entry point for Issue Mirror."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI

from .config import Settings
from .issue_tracker import GitHubClient, IssueTracker
from .mirror import MirrorService
from .webhook_handler import webhook_router


def create_app(settings: Settings | None = None, tracker: IssueTracker | None = None) -> FastAPI:
    """Build the webhook receiver."""
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan manager."""
        logger = logging.getLogger("issue_mirror.startup")
        missing = settings.missing_fields()
        if missing:
            logger.warning(f"Missing configuration: {', '.join(missing)}")
        logger.info(
            f"Mirroring {settings.private_repo} → {settings.public_repo} "
            f"on label '{settings.public_label}'"
        )
        yield

        logger.info("Shutting down Issue Mirror...")
        await app.state.tracker.close()

    app = FastAPI(
        title="Issue Mirror",
        description="Mirrors private issues labeled public into a public repository",
        version="0.1.0",
        lifespan=lifespan,
    )

    tracker = tracker or GitHubClient(
        token=settings.bot_access_token,
        base_url=settings.github_api_url,
        timeout=settings.request_timeout_seconds,
    )
    app.state.settings = settings
    app.state.tracker = tracker
    app.state.mirror_service = MirrorService(settings, tracker)

    app.include_router(webhook_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok"}

    return app


def run() -> None:
    """Run the webhook receiver."""
    settings = Settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        reload=False,
    )


if __name__ == "__main__":
    run()
