"""Approval request store: creation and lookup of approval requests."""

import logging
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from signoff.db.models.approval import ApprovalRequestRow
from signoff.errors.exceptions import NotFoundError
from signoff.events.activity import ActivityNotifier, notify_safely
from signoff.models.approval import ApprovalRequestCreate
from signoff.models.caller import Caller
from signoff.models.enums import ApprovalStatus
from signoff.repositories.approval_repo import ApprovalRequestRepository
from signoff.services.approval.final_status import derive_final_status
from signoff.services.approval.threshold_rules import evaluate_thresholds
from signoff.services.approval.thresholds import ThresholdRegistry
from signoff.services.id_generator import generate_id

logger = logging.getLogger(__name__)

ENTITY_KIND = "approval_request"


def activity_label(entity_type: str) -> str:
    """Human-readable label used in activity events, e.g. 'estimate approval'."""
    return f"{entity_type} approval"


class ApprovalRequestStore:
    def __init__(self, session: AsyncSession, notifier: ActivityNotifier):
        self.session = session
        self.notifier = notifier
        self.repo = ApprovalRequestRepository(session)

    async def get_request(self, org_id: str, approval_request_id: str) -> ApprovalRequestRow:
        row = await self.repo.get(org_id, approval_request_id)
        if not row:
            raise NotFoundError("Approval request", approval_request_id)
        return row

    async def create_request(self, caller: Caller, body: ApprovalRequestCreate) -> ApprovalRequestRow:
        """Persist a new request with ``requires_level2`` frozen from current thresholds."""
        amount = body.amount if body.amount is not None else Decimal("0")

        thresholds = await ThresholdRegistry(self.session).list_thresholds(caller.org_id, body.entity_type)
        evaluation = evaluate_thresholds(thresholds, amount, body.entity_type)

        level1_status = ApprovalStatus.PENDING
        level2_status = ApprovalStatus.PENDING if evaluation.requires_level2 else None

        row = await self.repo.create(
            approval_request_id=generate_id("appr_", time_ordered=True),
            org_id=caller.org_id,
            entity_type=body.entity_type,
            entity_id=body.entity_id,
            amount=amount,
            requested_by=caller.user_id,
            requested_at=datetime.now(timezone.utc),
            requires_level2=evaluation.requires_level2,
            level1_status=level1_status,
            level2_status=level2_status,
            final_status=derive_final_status(evaluation.requires_level2, level1_status, level2_status),
            version=1,
        )
        await self.repo.commit()
        approval_request_id = row.approval_request_id

        logger.info(
            "approval_request_created",
            extra={
                "approval_request_id": approval_request_id,
                "org_id": caller.org_id,
                "entity_type": body.entity_type,
                "requires_level2": evaluation.requires_level2,
                "matched_thresholds": list(evaluation.matched_threshold_ids),
            },
        )

        await notify_safely(
            self.notifier.created(
                ENTITY_KIND,
                approval_request_id,
                activity_label(body.entity_type),
                org_id=caller.org_id,
            ),
            "created",
            approval_request_id,
        )
        return await self.get_request(caller.org_id, approval_request_id)
