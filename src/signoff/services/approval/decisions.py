"""Decision engine: applies level-1 and level-2 decisions to approval requests."""

import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from signoff.db.models.approval import ApprovalRequestRow
from signoff.errors.exceptions import ConcurrentDecisionError, InvalidStateTransitionError
from signoff.events.activity import ActivityNotifier, notify_safely
from signoff.models.approval import ApprovalDecisionInput
from signoff.models.caller import Caller
from signoff.models.enums import ApprovalStatus
from signoff.services.approval.final_status import derive_final_status
from signoff.services.approval.requests import ENTITY_KIND, ApprovalRequestStore, activity_label

logger = logging.getLogger(__name__)

# from_status reported to the activity sink for a first decision at each level
_FIRST_DECISION_FROM = {1: "pending", 2: "level1_approved"}


def _decided_status(decision: ApprovalDecisionInput) -> ApprovalStatus:
    return ApprovalStatus.APPROVED if decision.approved else ApprovalStatus.REJECTED


class DecisionEngine:
    """Two-level decision state machine.

    Each level moves ``pending -> approved | rejected``. A level that has
    already left ``pending`` is rejected with InvalidStateTransitionError
    unless ``allow_redecision`` is set, in which case the new decision
    overwrites the old one. Writes are conditional on the version that was
    read, so two approvers racing on the same request cannot both win.
    """

    def __init__(self, session: AsyncSession, notifier: ActivityNotifier, allow_redecision: bool = False):
        self.session = session
        self.notifier = notifier
        self.allow_redecision = allow_redecision
        self.store = ApprovalRequestStore(session, notifier)

    async def decide_level1(
        self,
        caller: Caller,
        approval_request_id: str,
        decision: ApprovalDecisionInput,
    ) -> ApprovalRequestRow:
        request = await self.store.get_request(caller.org_id, approval_request_id)
        previous = request.level1_status
        self._check_undecided(request, level=1, current=previous)

        new_status = _decided_status(decision)
        return await self._apply(
            caller,
            request,
            level=1,
            previous=previous,
            new_status=new_status,
            notes=decision.notes,
            final_status=derive_final_status(request.requires_level2, new_status, request.level2_status),
        )

    async def decide_level2(
        self,
        caller: Caller,
        approval_request_id: str,
        decision: ApprovalDecisionInput,
    ) -> ApprovalRequestRow:
        request = await self.store.get_request(caller.org_id, approval_request_id)
        if request.level1_status != ApprovalStatus.APPROVED:
            raise InvalidStateTransitionError(
                "Level 1 must be approved before level 2",
                details={"level1_status": request.level1_status},
            )
        if not request.requires_level2:
            raise InvalidStateTransitionError(
                "Approval request does not require level 2",
                details={"requires_level2": False},
            )
        previous = request.level2_status
        self._check_undecided(request, level=2, current=previous)

        new_status = _decided_status(decision)
        return await self._apply(
            caller,
            request,
            level=2,
            previous=previous,
            new_status=new_status,
            notes=decision.notes,
            final_status=derive_final_status(request.requires_level2, request.level1_status, new_status),
        )

    def _check_undecided(self, request: ApprovalRequestRow, level: int, current: str | None) -> None:
        if current == ApprovalStatus.PENDING or self.allow_redecision:
            return
        raise InvalidStateTransitionError(
            f"Level {level} has already been decided",
            details={f"level{level}_status": current},
        )

    async def _apply(
        self,
        caller: Caller,
        request: ApprovalRequestRow,
        level: int,
        previous: str | None,
        new_status: ApprovalStatus,
        notes: str | None,
        final_status: ApprovalStatus,
    ) -> ApprovalRequestRow:
        approval_request_id = request.approval_request_id
        written = await self.store.repo.apply_decision(
            caller.org_id,
            approval_request_id,
            request.version,
            **{
                f"level{level}_status": new_status,
                f"level{level}_approver": caller.user_id,
                f"level{level}_at": datetime.now(timezone.utc),
                f"level{level}_notes": notes or None,
                "final_status": final_status,
            },
        )
        if not written:
            await self.session.rollback()
            raise ConcurrentDecisionError(approval_request_id)
        await self.store.repo.commit()

        logger.info(
            "approval_level_decided",
            extra={
                "approval_request_id": approval_request_id,
                "org_id": caller.org_id,
                "level": level,
                "decision": new_status,
                "final_status": final_status,
                "approver": caller.user_id,
            },
        )

        from_status = _FIRST_DECISION_FROM[level] if previous == ApprovalStatus.PENDING else previous
        await notify_safely(
            self.notifier.status_changed(
                ENTITY_KIND,
                approval_request_id,
                activity_label(request.entity_type),
                from_status,
                new_status,
                org_id=caller.org_id,
            ),
            "status_changed",
            approval_request_id,
        )
        return await self.store.get_request(caller.org_id, approval_request_id)
