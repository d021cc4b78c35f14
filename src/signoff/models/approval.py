"""Pydantic models for approval requests and decisions."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from signoff.models.enums import ApprovalStatus, EntityType


class ApprovalRequestCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    entity_type: EntityType
    entity_id: str = Field(..., min_length=1, max_length=128)
    amount: Decimal | None = Field(None, ge=0, max_digits=12, decimal_places=2)


class ApprovalDecisionInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    approved: bool
    notes: str | None = Field(None, max_length=10000)


class ApprovalRequestFilters(BaseModel):
    entity_type: EntityType | None = None
    status: ApprovalStatus | None = None
    requested_by: str | None = None
    pending_only: bool = False


class UserRef(BaseModel):
    """Read-only display projection of a user profile."""

    model_config = ConfigDict(from_attributes=True)

    user_id: str
    full_name: str


class ApprovalRequest(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    approval_request_id: str
    org_id: str
    entity_type: EntityType
    entity_id: str
    amount: Decimal
    requested_by: str
    requested_at: datetime
    requester: UserRef | None = None
    requires_level2: bool
    level1_status: ApprovalStatus
    level1_approver: str | None = None
    level1_approver_user: UserRef | None = None
    level1_at: datetime | None = None
    level1_notes: str | None = None
    level2_status: ApprovalStatus | None = None
    level2_approver: str | None = None
    level2_approver_user: UserRef | None = None
    level2_at: datetime | None = None
    level2_notes: str | None = None
    final_status: ApprovalStatus
    version: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PendingCount(BaseModel):
    pending_count: int


class NeedsApproval(BaseModel):
    entity_type: EntityType
    amount: Decimal
    needs_approval: bool
