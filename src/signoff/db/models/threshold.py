"""Approval threshold table."""

from decimal import Decimal

from sqlalchemy import Boolean, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from signoff.db.base import Base, TimestampMixin


class ApprovalThresholdRow(Base, TimestampMixin):
    __tablename__ = "approval_thresholds"

    threshold_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    org_id: Mapped[str] = mapped_column(String(128), ForeignKey("orgs.org_id"), nullable=False, index=True)
    entity_type: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    threshold_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    approval_level: Mapped[int] = mapped_column(Integer, nullable=False)
    approver_role: Mapped[str | None] = mapped_column(String(50), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
