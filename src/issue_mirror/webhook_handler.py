"""GitHub webhook processing."""

import hashlib
import hmac
import json
import logging
from typing import Any

from fastapi import APIRouter, Header, HTTPException, Request

from .errors import PreconditionError
from .mirror import IssueEvent, MirrorService

logger = logging.getLogger("issue_mirror.webhook")

webhook_router = APIRouter(prefix="/webhooks", tags=["webhooks"])


def verify_signature(payload: bytes, signature: str | None, secret: str) -> bool:
    """Verify GitHub webhook signature."""
    if not signature or not secret:
        return False

    if not signature.startswith("sha256="):
        return False

    expected = hmac.new(
        secret.encode("utf-8"),
        payload,
        hashlib.sha256,
    ).hexdigest()

    return hmac.compare_digest(f"sha256={expected}", signature)


@webhook_router.post("/github")
async def handle_github_webhook(
    request: Request,
    x_github_event: str = Header(..., alias="X-GitHub-Event"),
    x_hub_signature_256: str | None = Header(None, alias="X-Hub-Signature-256"),
) -> dict[str, Any]:
    """
    Handle incoming GitHub webhooks.

    Only `issues` events are mirrored; everything else is acknowledged.
    """
    settings = request.app.state.settings
    service: MirrorService = request.app.state.mirror_service
    payload = await request.body()

    # Verify signature if secret is configured
    if settings.github_webhook_secret:
        if not verify_signature(payload, x_hub_signature_256, settings.github_webhook_secret):
            raise HTTPException(status_code=401, detail="Invalid signature")

    # Parse JSON from already-read payload (don't re-read stream with request.json())
    try:
        data = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.error(f"Failed to parse webhook JSON: {e}")
        raise HTTPException(status_code=400, detail="Invalid JSON payload")

    if x_github_event == "ping":
        return {"status": "pong"}
    if x_github_event != "issues":
        return {"status": "ignored"}

    try:
        event = IssueEvent.from_payload(data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        result = await service.handle(event)
    except PreconditionError as e:
        logger.warning(f"Issue #{event.issue.number}: {e}")
        raise HTTPException(status_code=409, detail=str(e))
    except Exception:
        logger.exception(f"Error mirroring issue #{event.issue.number}")
        raise HTTPException(status_code=500, detail="Webhook processing failed")

    return {"status": "ok", **result.model_dump(mode="json")}
