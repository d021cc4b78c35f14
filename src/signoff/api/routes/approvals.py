"""Approval request workflow API routes."""

from decimal import Decimal

from fastapi import APIRouter, Depends, Query

from signoff.dependencies import AllowRedecision, CurrentCaller, DBSession, Notifier
from signoff.models.approval import (
    ApprovalDecisionInput,
    ApprovalRequest,
    ApprovalRequestCreate,
    ApprovalRequestFilters,
    NeedsApproval,
    PendingCount,
)
from signoff.models.enums import EntityType
from signoff.services.approval.decisions import DecisionEngine
from signoff.services.approval.queries import PolicyQueries
from signoff.services.approval.requests import ApprovalRequestStore

router = APIRouter(tags=["Approvals"])


@router.get("/approvals/needs-approval")
async def needs_approval(
    caller: CurrentCaller,
    db: DBSession,
    entity_type: EntityType,
    amount: Decimal = Query(..., ge=0),
) -> dict:
    required = await PolicyQueries(db).check_needs_approval(caller.org_id, entity_type, amount)
    return NeedsApproval(entity_type=entity_type, amount=amount, needs_approval=required).model_dump(mode="json")


@router.get("/approvals/pending-count")
async def pending_count(caller: CurrentCaller, db: DBSession) -> dict:
    count = await PolicyQueries(db).get_pending_count(caller.org_id)
    return PendingCount(pending_count=count).model_dump()


@router.get("/approvals/my-queue")
async def my_pending_approvals(caller: CurrentCaller, db: DBSession) -> list[dict]:
    rows = await PolicyQueries(db).get_my_pending_approvals(caller)
    return [_request_dict(row) for row in rows]


@router.get("/approvals/requests")
async def list_requests(
    caller: CurrentCaller,
    db: DBSession,
    filters: ApprovalRequestFilters = Depends(),
) -> list[dict]:
    rows = await PolicyQueries(db).get_requests(caller.org_id, filters)
    return [_request_dict(row) for row in rows]


@router.post("/approvals/requests", status_code=201)
async def create_request(
    body: ApprovalRequestCreate,
    caller: CurrentCaller,
    db: DBSession,
    notifier: Notifier,
) -> dict:
    row = await ApprovalRequestStore(db, notifier).create_request(caller, body)
    return _request_dict(row)


@router.get("/approvals/requests/{approval_request_id}")
async def get_request(
    approval_request_id: str,
    caller: CurrentCaller,
    db: DBSession,
) -> dict:
    row = await PolicyQueries(db).get_request(caller.org_id, approval_request_id)
    return _request_dict(row)


@router.post("/approvals/requests/{approval_request_id}/decide-level1")
async def decide_level1(
    approval_request_id: str,
    decision: ApprovalDecisionInput,
    caller: CurrentCaller,
    db: DBSession,
    notifier: Notifier,
    allow_redecision: AllowRedecision,
) -> dict:
    engine = DecisionEngine(db, notifier, allow_redecision=allow_redecision)
    row = await engine.decide_level1(caller, approval_request_id, decision)
    return _request_dict(row)


@router.post("/approvals/requests/{approval_request_id}/decide-level2")
async def decide_level2(
    approval_request_id: str,
    decision: ApprovalDecisionInput,
    caller: CurrentCaller,
    db: DBSession,
    notifier: Notifier,
    allow_redecision: AllowRedecision,
) -> dict:
    engine = DecisionEngine(db, notifier, allow_redecision=allow_redecision)
    row = await engine.decide_level2(caller, approval_request_id, decision)
    return _request_dict(row)


def _request_dict(row) -> dict:
    return ApprovalRequest.model_validate(row).model_dump(mode="json")
