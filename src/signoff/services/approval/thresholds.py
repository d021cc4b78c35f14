"""Threshold registry: per-organization amount thresholds keyed by entity type."""

import logging
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from signoff.db.models.threshold import ApprovalThresholdRow
from signoff.errors.exceptions import NotFoundError, ValidationError
from signoff.models.enums import ApprovalLevel
from signoff.models.threshold import ThresholdCreate, ThresholdUpdate
from signoff.repositories.org_repo import OrgRepository
from signoff.repositories.threshold_repo import ThresholdRepository
from signoff.services.id_generator import generate_id

logger = logging.getLogger(__name__)

_NON_NULLABLE = ("threshold_amount", "approval_level", "is_active")


def _validate_level(level: int) -> None:
    if level not in (ApprovalLevel.LEVEL_1, ApprovalLevel.LEVEL_2):
        raise ValidationError(
            f"approval_level must be 1 or 2, got {level}",
            details={"field": "approval_level"},
        )


def _validate_amount(amount: Decimal) -> None:
    if amount < 0:
        raise ValidationError(
            "threshold_amount must be non-negative",
            details={"field": "threshold_amount"},
        )


class ThresholdRegistry:
    """Read/write access to approval thresholds. No state machine."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = ThresholdRepository(session)

    async def list_thresholds(self, org_id: str, entity_type: str | None = None) -> list[ApprovalThresholdRow]:
        return await self.repo.list_active(org_id, entity_type)

    async def get_threshold(self, org_id: str, threshold_id: str) -> ApprovalThresholdRow:
        row = await self.repo.get(org_id, threshold_id)
        if not row:
            raise NotFoundError("Threshold", threshold_id)
        return row

    async def create_threshold(self, org_id: str, body: ThresholdCreate) -> ApprovalThresholdRow:
        _validate_level(body.approval_level)
        _validate_amount(body.threshold_amount)

        if not await OrgRepository(self.session).get(org_id):
            raise NotFoundError("Organization", org_id)

        row = await self.repo.create(
            threshold_id=generate_id("thr_"),
            org_id=org_id,
            entity_type=body.entity_type,
            threshold_amount=body.threshold_amount,
            approval_level=body.approval_level,
            approver_role=body.approver_role or None,
            is_active=True,
        )
        await self.repo.commit()
        logger.info(
            "approval_threshold_created",
            extra={"threshold_id": row.threshold_id, "org_id": org_id, "entity_type": row.entity_type},
        )
        return row

    async def update_threshold(self, org_id: str, threshold_id: str, body: ThresholdUpdate) -> ApprovalThresholdRow:
        row = await self.get_threshold(org_id, threshold_id)

        changes = body.model_dump(exclude_unset=True)
        for field_name in _NON_NULLABLE:
            if field_name in changes and changes[field_name] is None:
                raise ValidationError(f"{field_name} cannot be null", details={"field": field_name})
        if "approval_level" in changes:
            _validate_level(changes["approval_level"])
        if "threshold_amount" in changes:
            _validate_amount(changes["threshold_amount"])

        await self.repo.update(row, **changes)
        await self.repo.commit()
        logger.info(
            "approval_threshold_updated",
            extra={"threshold_id": threshold_id, "org_id": org_id, "fields": sorted(changes)},
        )
        return row
