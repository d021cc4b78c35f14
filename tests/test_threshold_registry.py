"""Tests for the threshold registry service.

Covers:
- list_thresholds returns only active rows, ascending by amount
- optional entity_type filter
- create_threshold validation (level, amount) and org resolution
- update_threshold partial updates, deactivation, NotFound
- thresholds never leak across organizations
"""

from decimal import Decimal

import pytest

from signoff.errors.exceptions import NotFoundError, ValidationError
from signoff.models.threshold import ThresholdCreate, ThresholdUpdate
from signoff.services.approval.thresholds import ThresholdRegistry

from conftest import ORG_ID, OTHER_ORG_ID


async def _create(registry, org_id=ORG_ID, **overrides):
    fields = {"entity_type": "estimate", "threshold_amount": Decimal("10000"), "approval_level": 1}
    fields.update(overrides)
    return await registry.create_threshold(org_id, ThresholdCreate(**fields))


@pytest.mark.asyncio
async def test_list_orders_ascending_by_amount(db_session):
    registry = ThresholdRegistry(db_session)
    await _create(registry, threshold_amount=Decimal("25000"), approval_level=2)
    await _create(registry, threshold_amount=Decimal("10000"))
    await _create(registry, threshold_amount=Decimal("500"), entity_type="discount")

    rows = await registry.list_thresholds(ORG_ID)
    assert [r.threshold_amount for r in rows] == [Decimal("500"), Decimal("10000"), Decimal("25000")]


@pytest.mark.asyncio
async def test_list_filters_by_entity_type(db_session):
    registry = ThresholdRegistry(db_session)
    await _create(registry, entity_type="estimate")
    await _create(registry, entity_type="proposal")

    rows = await registry.list_thresholds(ORG_ID, "proposal")
    assert [r.entity_type for r in rows] == ["proposal"]


@pytest.mark.asyncio
async def test_create_defaults(db_session):
    row = await _create(ThresholdRegistry(db_session))
    assert row.threshold_id.startswith("thr_")
    assert row.org_id == ORG_ID
    assert row.approver_role is None
    assert row.is_active is True


@pytest.mark.asyncio
async def test_create_with_approver_role(db_session):
    row = await _create(ThresholdRegistry(db_session), approval_level=2, approver_role="owner")
    assert row.approver_role == "owner"


@pytest.mark.asyncio
@pytest.mark.parametrize("level", [0, 3, -1])
async def test_create_rejects_invalid_level(db_session, level):
    with pytest.raises(ValidationError):
        await _create(ThresholdRegistry(db_session), approval_level=level)


@pytest.mark.asyncio
async def test_create_rejects_negative_amount(db_session):
    with pytest.raises(ValidationError):
        await _create(ThresholdRegistry(db_session), threshold_amount=Decimal("-0.01"))


@pytest.mark.asyncio
async def test_create_zero_amount_allowed(db_session):
    row = await _create(ThresholdRegistry(db_session), threshold_amount=Decimal("0"))
    assert row.threshold_amount == Decimal("0")


@pytest.mark.asyncio
async def test_create_unknown_org_not_found(db_session):
    with pytest.raises(NotFoundError):
        await _create(ThresholdRegistry(db_session), org_id="org_missing")


@pytest.mark.asyncio
async def test_update_amount(db_session):
    registry = ThresholdRegistry(db_session)
    row = await _create(registry)

    updated = await registry.update_threshold(
        ORG_ID, row.threshold_id, ThresholdUpdate(threshold_amount=Decimal("12000"))
    )
    assert updated.threshold_amount == Decimal("12000")
    assert updated.approval_level == 1


@pytest.mark.asyncio
async def test_deactivate_removes_from_list(db_session):
    registry = ThresholdRegistry(db_session)
    row = await _create(registry)

    await registry.update_threshold(ORG_ID, row.threshold_id, ThresholdUpdate(is_active=False))
    assert await registry.list_thresholds(ORG_ID) == []


@pytest.mark.asyncio
async def test_update_clears_approver_role(db_session):
    registry = ThresholdRegistry(db_session)
    row = await _create(registry, approver_role="admin")

    updated = await registry.update_threshold(
        ORG_ID, row.threshold_id, ThresholdUpdate.model_validate({"approver_role": None})
    )
    assert updated.approver_role is None


@pytest.mark.asyncio
async def test_update_rejects_invalid_level(db_session):
    registry = ThresholdRegistry(db_session)
    row = await _create(registry)
    with pytest.raises(ValidationError):
        await registry.update_threshold(ORG_ID, row.threshold_id, ThresholdUpdate(approval_level=5))


@pytest.mark.asyncio
async def test_update_rejects_null_amount(db_session):
    registry = ThresholdRegistry(db_session)
    row = await _create(registry)
    with pytest.raises(ValidationError):
        await registry.update_threshold(
            ORG_ID, row.threshold_id, ThresholdUpdate.model_validate({"threshold_amount": None})
        )


@pytest.mark.asyncio
async def test_update_missing_threshold(db_session):
    with pytest.raises(NotFoundError):
        await ThresholdRegistry(db_session).update_threshold(
            ORG_ID, "thr_does_not_exist", ThresholdUpdate(is_active=False)
        )


@pytest.mark.asyncio
async def test_thresholds_scoped_to_org(db_session):
    registry = ThresholdRegistry(db_session)
    row = await _create(registry, org_id=OTHER_ORG_ID)

    assert await registry.list_thresholds(ORG_ID) == []
    with pytest.raises(NotFoundError):
        await registry.update_threshold(ORG_ID, row.threshold_id, ThresholdUpdate(is_active=False))
