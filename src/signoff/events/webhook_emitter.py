"""Webhook event emission with HMAC-SHA256 signing."""

import hashlib
import hmac
import json
import logging
from datetime import datetime, timezone

import httpx

from signoff.models.activity import ActivityEnvelope
from signoff.services.id_generator import generate_id

from .webhook_config import WebhookRegistry, WebhookSubscription

logger = logging.getLogger(__name__)


def sign_payload(body: bytes, secret: str) -> str:
    """Compute HMAC-SHA256 signature over the raw JSON body."""
    return hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()


def build_envelope(
    event_type: str,
    payload: dict,
    source_system: str = "signoff-api",
) -> ActivityEnvelope:
    """Build a webhook envelope (unsigned). Signature is added per-subscriber."""
    return ActivityEnvelope(
        schema_version="1.0",
        event_type=event_type,
        event_id=generate_id("evt_"),
        occurred_at=datetime.now(timezone.utc),
        source_system=source_system,
        payload=payload,
    )


class WebhookEmitter:
    """Delivers signed envelopes to the subscribers of a registry."""

    def __init__(
        self,
        registry: WebhookRegistry,
        transport: httpx.AsyncBaseTransport | None = None,
        max_retries: int = 3,
        timeout: float = 10.0,
    ) -> None:
        self.registry = registry
        self.transport = transport
        self.max_retries = max_retries
        self.timeout = timeout

    async def emit(self, event_type: str, payload: dict) -> list[dict]:
        """Emit an event to all matching subscribers.

        Returns a list of delivery results (url, status, error).
        """
        subscribers = self.registry.get_subscribers(event_type)
        if not subscribers:
            return []

        envelope = build_envelope(event_type, payload)
        return [await self._deliver(envelope, sub) for sub in subscribers]

    async def _deliver(self, envelope: ActivityEnvelope, sub: WebhookSubscription) -> dict:
        """Deliver a signed envelope to a single subscriber with retry on 5xx."""
        body_dict = envelope.model_dump(mode="json")
        body_bytes = json.dumps(body_dict, separators=(",", ":")).encode("utf-8")
        signature = sign_payload(body_bytes, sub.secret)
        body_dict["signature"] = signature

        signed_body = json.dumps(body_dict, separators=(",", ":")).encode("utf-8")

        headers = {
            "Content-Type": "application/json",
            "X-Signoff-Signature": signature,
            "X-Signoff-Event": envelope.event_type,
        }

        for attempt in range(self.max_retries):
            try:
                async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                    resp = await client.post(sub.url, content=signed_body, headers=headers)
                if resp.status_code < 300:
                    return {"url": sub.url, "status": resp.status_code, "error": None}
                if resp.status_code >= 500 and attempt < self.max_retries - 1:
                    continue
                return {"url": sub.url, "status": resp.status_code, "error": f"HTTP {resp.status_code}"}
            except httpx.HTTPError as exc:
                if attempt < self.max_retries - 1:
                    continue
                logger.warning("Webhook delivery failed to %s: %s", sub.url, exc)
                return {"url": sub.url, "status": None, "error": str(exc)}

        return {"url": sub.url, "status": None, "error": "max retries exceeded"}
