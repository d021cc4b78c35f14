"""Create orgs, users, approval_thresholds and approval_requests.

Revision ID: 0001_approval_tables
Revises:
Create Date: 2026-10-18
"""

from alembic import op
import sqlalchemy as sa

revision = "0001_approval_tables"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "orgs",
        sa.Column("org_id", sa.String(128), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("slug", sa.String(100), nullable=False, unique=True),
        *_timestamps(),
    )
    op.create_index("ix_orgs_slug", "orgs", ["slug"])

    op.create_table(
        "users",
        sa.Column("user_id", sa.String(128), primary_key=True),
        sa.Column("org_id", sa.String(128), sa.ForeignKey("orgs.org_id"), nullable=True),
        sa.Column("email", sa.String(320), nullable=False, unique=True),
        sa.Column("full_name", sa.String(200), nullable=False),
        sa.Column("role", sa.String(50), nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_users_org_id", "users", ["org_id"])
    op.create_index("ix_users_email", "users", ["email"])

    op.create_table(
        "approval_thresholds",
        sa.Column("threshold_id", sa.String(128), primary_key=True),
        sa.Column("org_id", sa.String(128), sa.ForeignKey("orgs.org_id"), nullable=False),
        sa.Column("entity_type", sa.String(50), nullable=False),
        sa.Column("threshold_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("approval_level", sa.Integer, nullable=False),
        sa.Column("approver_role", sa.String(50), nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_approval_thresholds_org_id", "approval_thresholds", ["org_id"])
    op.create_index("ix_approval_thresholds_entity_type", "approval_thresholds", ["entity_type"])

    op.create_table(
        "approval_requests",
        sa.Column("approval_request_id", sa.String(128), primary_key=True),
        sa.Column("org_id", sa.String(128), sa.ForeignKey("orgs.org_id"), nullable=False),
        sa.Column("entity_type", sa.String(50), nullable=False),
        sa.Column("entity_id", sa.String(128), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("requested_by", sa.String(128), sa.ForeignKey("users.user_id"), nullable=False),
        sa.Column("requested_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("requires_level2", sa.Boolean, nullable=False),
        sa.Column("level1_status", sa.String(20), nullable=False),
        sa.Column("level1_approver", sa.String(128), sa.ForeignKey("users.user_id"), nullable=True),
        sa.Column("level1_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("level1_notes", sa.Text, nullable=True),
        sa.Column("level2_status", sa.String(20), nullable=True),
        sa.Column("level2_approver", sa.String(128), sa.ForeignKey("users.user_id"), nullable=True),
        sa.Column("level2_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("level2_notes", sa.Text, nullable=True),
        sa.Column("final_status", sa.String(20), nullable=False),
        sa.Column("version", sa.Integer, nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_approval_requests_org_id", "approval_requests", ["org_id"])
    op.create_index("ix_approval_requests_entity_id", "approval_requests", ["entity_id"])
    op.create_index("ix_approval_requests_requested_by", "approval_requests", ["requested_by"])
    op.create_index("ix_approval_requests_final_status", "approval_requests", ["final_status"])


def downgrade() -> None:
    op.drop_table("approval_requests")
    op.drop_table("approval_thresholds")
    op.drop_table("users")
    op.drop_table("orgs")
