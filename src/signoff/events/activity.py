"""Activity notifier: notify-only sink for approval lifecycle events.

The approval services call it once when a request is created and once per
decision. Nothing it returns is consulted and its failures never undo the
operation that triggered it.
"""

import logging

from signoff.events.webhook_emitter import WebhookEmitter

logger = logging.getLogger(__name__)

ACTIVITY_CREATED = "activity.created"
ACTIVITY_STATUS_CHANGED = "activity.status_changed"


class ActivityNotifier:
    """Base notifier; logs events and does nothing else."""

    async def created(self, entity_kind: str, entity_id: str, label: str, org_id: str | None = None) -> None:
        logger.info(
            "activity_created",
            extra={"entity_kind": entity_kind, "entity_id": entity_id, "label": label, "org_id": org_id},
        )

    async def status_changed(
        self,
        entity_kind: str,
        entity_id: str,
        label: str,
        from_status: str | None = None,
        to_status: str | None = None,
        org_id: str | None = None,
    ) -> None:
        logger.info(
            "activity_status_changed",
            extra={
                "entity_kind": entity_kind,
                "entity_id": entity_id,
                "label": label,
                "from_status": from_status,
                "to_status": to_status,
                "org_id": org_id,
            },
        )


class WebhookActivityNotifier(ActivityNotifier):
    """Forwards activity events to webhook subscribers."""

    def __init__(self, emitter: WebhookEmitter):
        self.emitter = emitter

    async def created(self, entity_kind: str, entity_id: str, label: str, org_id: str | None = None) -> None:
        await super().created(entity_kind, entity_id, label, org_id=org_id)
        await self.emitter.emit(
            ACTIVITY_CREATED,
            {"entity_kind": entity_kind, "entity_id": entity_id, "label": label, "org_id": org_id},
        )

    async def status_changed(
        self,
        entity_kind: str,
        entity_id: str,
        label: str,
        from_status: str | None = None,
        to_status: str | None = None,
        org_id: str | None = None,
    ) -> None:
        await super().status_changed(entity_kind, entity_id, label, from_status, to_status, org_id=org_id)
        await self.emitter.emit(
            ACTIVITY_STATUS_CHANGED,
            {
                "entity_kind": entity_kind,
                "entity_id": entity_id,
                "label": label,
                "from_status": from_status,
                "to_status": to_status,
                "org_id": org_id,
            },
        )


async def notify_safely(coro, event: str, entity_id: str) -> None:
    """Await a notifier call, logging and swallowing any failure."""
    try:
        await coro
    except Exception as exc:
        logger.warning(
            "activity_notification_failed",
            extra={"activity_event": event, "entity_id": entity_id, "error": str(exc)},
        )
