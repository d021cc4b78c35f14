"""Approval request table."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from signoff.db.base import Base, TimestampMixin
from signoff.db.models.user import UserRow


class ApprovalRequestRow(Base, TimestampMixin):
    __tablename__ = "approval_requests"

    approval_request_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    org_id: Mapped[str] = mapped_column(String(128), ForeignKey("orgs.org_id"), nullable=False, index=True)
    entity_type: Mapped[str] = mapped_column(String(50), nullable=False)
    entity_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    requested_by: Mapped[str] = mapped_column(String(128), ForeignKey("users.user_id"), nullable=False, index=True)
    requested_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    requires_level2: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    level1_status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    level1_approver: Mapped[str | None] = mapped_column(String(128), ForeignKey("users.user_id"), nullable=True)
    level1_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    level1_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    level2_status: Mapped[str | None] = mapped_column(String(20), nullable=True)
    level2_approver: Mapped[str | None] = mapped_column(String(128), ForeignKey("users.user_id"), nullable=True)
    level2_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    level2_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    final_status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending", index=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    requester: Mapped[UserRow] = relationship(foreign_keys=[requested_by], lazy="raise")
    level1_approver_user: Mapped[UserRow | None] = relationship(foreign_keys=[level1_approver], lazy="raise")
    level2_approver_user: Mapped[UserRow | None] = relationship(foreign_keys=[level2_approver], lazy="raise")
