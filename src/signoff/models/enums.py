"""String enums for approval workflow values."""

from enum import IntEnum, StrEnum


class EntityType(StrEnum):
    ESTIMATE = "estimate"
    DISCOUNT = "discount"
    PROPOSAL = "proposal"
    CHANGE_ORDER = "change_order"
    EXPENSE = "expense"


class ApprovalStatus(StrEnum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ApprovalLevel(IntEnum):
    LEVEL_1 = 1
    LEVEL_2 = 2


class UserRole(StrEnum):
    OWNER = "owner"
    ADMIN = "admin"
    MANAGER = "manager"
    MEMBER = "member"
