"""Pydantic models for approval thresholds."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from signoff.models.enums import EntityType


class ThresholdCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    entity_type: EntityType
    threshold_amount: Decimal = Field(..., max_digits=12, decimal_places=2)
    approval_level: int
    approver_role: str | None = None


class ThresholdUpdate(BaseModel):
    """Partial update; only fields present in the body are applied."""

    model_config = ConfigDict(extra="forbid")

    threshold_amount: Decimal | None = Field(None, max_digits=12, decimal_places=2)
    approval_level: int | None = None
    approver_role: str | None = None
    is_active: bool | None = None


class Threshold(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    threshold_id: str
    org_id: str
    entity_type: EntityType
    threshold_amount: Decimal
    approval_level: int
    approver_role: str | None = None
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None
