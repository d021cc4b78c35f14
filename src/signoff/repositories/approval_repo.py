"""Approval request repository."""

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from signoff.db.models.approval import ApprovalRequestRow
from signoff.repositories.base import BaseRepository

_PROJECTIONS = (
    selectinload(ApprovalRequestRow.requester),
    selectinload(ApprovalRequestRow.level1_approver_user),
    selectinload(ApprovalRequestRow.level2_approver_user),
)


class ApprovalRequestRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, ApprovalRequestRow)

    async def get(self, org_id: str, approval_request_id: str) -> ApprovalRequestRow | None:
        """Fetch a request with its user projections, refreshing any cached copy."""
        stmt = (
            select(ApprovalRequestRow)
            .where(
                ApprovalRequestRow.approval_request_id == approval_request_id,
                ApprovalRequestRow.org_id == org_id,
            )
            .options(*_PROJECTIONS)
            .execution_options(populate_existing=True)
        )
        result = await self.execute(stmt)
        return result.scalar_one_or_none()

    async def list_filtered(
        self,
        org_id: str,
        entity_type: str | None = None,
        final_status: str | None = None,
        requested_by: str | None = None,
    ) -> list[ApprovalRequestRow]:
        """List requests newest-created first; time-ordered ids break timestamp ties."""
        stmt = select(ApprovalRequestRow).where(ApprovalRequestRow.org_id == org_id)
        if entity_type:
            stmt = stmt.where(ApprovalRequestRow.entity_type == entity_type)
        if final_status:
            stmt = stmt.where(ApprovalRequestRow.final_status == final_status)
        if requested_by:
            stmt = stmt.where(ApprovalRequestRow.requested_by == requested_by)
        stmt = stmt.options(*_PROJECTIONS).order_by(
            ApprovalRequestRow.created_at.desc(),
            ApprovalRequestRow.approval_request_id.desc(),
        )
        result = await self.execute(stmt)
        return list(result.scalars().all())

    async def list_pending_oldest_first(self, org_id: str) -> list[ApprovalRequestRow]:
        stmt = (
            select(ApprovalRequestRow)
            .where(
                ApprovalRequestRow.org_id == org_id,
                ApprovalRequestRow.final_status == "pending",
            )
            .options(*_PROJECTIONS)
            .order_by(ApprovalRequestRow.created_at.asc(), ApprovalRequestRow.approval_request_id.asc())
        )
        result = await self.execute(stmt)
        return list(result.scalars().all())

    async def count_by_final_status(self, org_id: str, final_status: str) -> int:
        stmt = (
            select(func.count())
            .select_from(ApprovalRequestRow)
            .where(
                ApprovalRequestRow.org_id == org_id,
                ApprovalRequestRow.final_status == final_status,
            )
        )
        result = await self.execute(stmt)
        return result.scalar_one()

    async def apply_decision(
        self,
        org_id: str,
        approval_request_id: str,
        expected_version: int,
        **values,
    ) -> bool:
        """Conditionally write decision columns.

        The update only matches when the stored version still equals
        ``expected_version``; returns False when another writer got there first.
        """
        stmt = (
            update(ApprovalRequestRow)
            .where(
                ApprovalRequestRow.approval_request_id == approval_request_id,
                ApprovalRequestRow.org_id == org_id,
                ApprovalRequestRow.version == expected_version,
            )
            .values(version=expected_version + 1, **values)
            .execution_options(synchronize_session=False)
        )
        result = await self.execute(stmt)
        return result.rowcount == 1
