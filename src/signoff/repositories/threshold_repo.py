"""Approval threshold repository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from signoff.db.models.threshold import ApprovalThresholdRow
from signoff.repositories.base import BaseRepository


class ThresholdRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, ApprovalThresholdRow)

    async def get(self, org_id: str, threshold_id: str) -> ApprovalThresholdRow | None:
        return await self.get_by_id(org_id, "threshold_id", threshold_id)

    async def list_active(self, org_id: str, entity_type: str | None = None) -> list[ApprovalThresholdRow]:
        """Active thresholds ordered ascending by amount."""
        stmt = select(ApprovalThresholdRow).where(
            ApprovalThresholdRow.org_id == org_id,
            ApprovalThresholdRow.is_active.is_(True),
        )
        if entity_type:
            stmt = stmt.where(ApprovalThresholdRow.entity_type == entity_type)
        stmt = stmt.order_by(
            ApprovalThresholdRow.threshold_amount.asc(),
            ApprovalThresholdRow.approval_level.asc(),
            ApprovalThresholdRow.threshold_id.asc(),
        )
        result = await self.execute(stmt)
        return list(result.scalars().all())
