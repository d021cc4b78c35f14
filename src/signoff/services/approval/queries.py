"""Read-only policy queries over thresholds and approval requests."""

from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from signoff.db.models.approval import ApprovalRequestRow
from signoff.errors.exceptions import NotFoundError
from signoff.models.approval import ApprovalRequestFilters
from signoff.models.caller import Caller
from signoff.models.enums import ApprovalStatus
from signoff.repositories.approval_repo import ApprovalRequestRepository
from signoff.services.approval.threshold_rules import evaluate_thresholds
from signoff.services.approval.thresholds import ThresholdRegistry


class PolicyQueries:
    """Answers approval questions without mutating anything."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.thresholds = ThresholdRegistry(session)
        self.requests = ApprovalRequestRepository(session)

    async def check_needs_approval(self, org_id: str, entity_type: str, amount: Decimal) -> bool:
        """True iff at least one active threshold of this entity type applies to ``amount``."""
        thresholds = await self.thresholds.list_thresholds(org_id, entity_type)
        return evaluate_thresholds(thresholds, amount, entity_type).needs_approval

    async def get_pending_count(self, org_id: str) -> int:
        return await self.requests.count_by_final_status(org_id, ApprovalStatus.PENDING)

    async def get_request(self, org_id: str, approval_request_id: str) -> ApprovalRequestRow:
        row = await self.requests.get(org_id, approval_request_id)
        if not row:
            raise NotFoundError("Approval request", approval_request_id)
        return row

    async def get_requests(self, org_id: str, filters: ApprovalRequestFilters) -> list[ApprovalRequestRow]:
        final_status = filters.status
        if filters.pending_only:
            # pending_only and an explicit non-pending status can never both match
            if final_status and final_status != ApprovalStatus.PENDING:
                return []
            final_status = ApprovalStatus.PENDING
        return await self.requests.list_filtered(
            org_id,
            entity_type=filters.entity_type,
            final_status=final_status,
            requested_by=filters.requested_by,
        )

    async def get_my_pending_approvals(self, caller: Caller) -> list[ApprovalRequestRow]:
        """Pending requests the caller can act on, oldest first.

        Owners and admins can act on everything pending; everyone else only
        on requests still waiting for their level-1 decision.
        """
        pending = await self.requests.list_pending_oldest_first(caller.org_id)
        if caller.is_admin:
            return pending
        return [r for r in pending if r.level1_status == ApprovalStatus.PENDING]
