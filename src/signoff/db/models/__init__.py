"""SQLAlchemy ORM models - import all to register with Base.metadata."""

from signoff.db.models.org import OrgRow
from signoff.db.models.user import UserRow
from signoff.db.models.threshold import ApprovalThresholdRow
from signoff.db.models.approval import ApprovalRequestRow

__all__ = [
    "OrgRow",
    "UserRow",
    "ApprovalThresholdRow",
    "ApprovalRequestRow",
]
