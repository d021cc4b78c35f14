"""Approval threshold API routes."""

from fastapi import APIRouter

from signoff.dependencies import CurrentCaller, DBSession, ThresholdAdmin
from signoff.models.enums import EntityType
from signoff.models.threshold import Threshold, ThresholdCreate, ThresholdUpdate
from signoff.services.approval.thresholds import ThresholdRegistry

router = APIRouter(tags=["Approval thresholds"])


@router.get("/approvals/thresholds")
async def list_thresholds(
    caller: CurrentCaller,
    db: DBSession,
    entity_type: EntityType | None = None,
) -> list[dict]:
    rows = await ThresholdRegistry(db).list_thresholds(caller.org_id, entity_type)
    return [_threshold_dict(row) for row in rows]


@router.post("/approvals/thresholds", status_code=201)
async def create_threshold(
    body: ThresholdCreate,
    caller: ThresholdAdmin,
    db: DBSession,
) -> dict:
    row = await ThresholdRegistry(db).create_threshold(caller.org_id, body)
    return _threshold_dict(row)


@router.patch("/approvals/thresholds/{threshold_id}")
async def update_threshold(
    threshold_id: str,
    body: ThresholdUpdate,
    caller: ThresholdAdmin,
    db: DBSession,
) -> dict:
    row = await ThresholdRegistry(db).update_threshold(caller.org_id, threshold_id, body)
    return _threshold_dict(row)


def _threshold_dict(row) -> dict:
    return Threshold.model_validate(row).model_dump(mode="json")
