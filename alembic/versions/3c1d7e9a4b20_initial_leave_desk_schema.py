"""initial leave desk schema

Revision ID: 3c1d7e9a4b20
Revises:
Create Date: 2026-10-19 10:12:44.318205

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3c1d7e9a4b20"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

LEAVE_TYPE = sa.Enum("sick", "paid", "unpaid", "study", name="leave_type")
LEAVE_STATUS = sa.Enum("pending", "approved", "rejected", name="leave_status")
EVENT_VISIBILITY = sa.Enum("personal", "public", "private", name="event_visibility")
EVENT_FREQUENCY = sa.Enum("weekly", "monthly", "yearly", name="event_frequency")


def upgrade() -> None:
    op.create_table(
        "departments",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=128), nullable=False),
        sa.Column("max_employees_on_leave", sa.Integer(), nullable=False),
        sa.Column("current_employees_on_leave", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("max_employees_on_leave >= 1", name="ck_departments_max_on_leave"),
        sa.CheckConstraint("current_employees_on_leave >= 0", name="ck_departments_current_on_leave"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(length=254), nullable=False),
        sa.Column("first_name", sa.String(length=64), nullable=False),
        sa.Column("last_name", sa.String(length=64), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("is_admin", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("department_id", sa.Integer(), nullable=True),
        sa.Column("paid_leave_days_remaining", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("last_leave_balance_update", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("paid_leave_days_remaining >= 0", name="ck_users_paid_leave_nonneg"),
        sa.ForeignKeyConstraint(["department_id"], ["departments.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_index("ix_users_department_id", "users", ["department_id"])

    op.create_table(
        "leave_requests",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("owner_email", sa.String(length=254), nullable=False),
        sa.Column("leave_type", LEAVE_TYPE, nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("status", LEAVE_STATUS, nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("end_date >= start_date", name="ck_leave_requests_range"),
        sa.ForeignKeyConstraint(["owner_email"], ["users.email"], ondelete="CASCADE", onupdate="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_leave_requests_owner_email", "leave_requests", ["owner_email"])
    op.create_index("ix_leave_requests_owner_start", "leave_requests", ["owner_email", "start_date"])

    op.create_table(
        "leave_documents",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("request_id", sa.Integer(), nullable=False),
        sa.Column("filename", sa.String(length=255), nullable=False),
        sa.Column("path", sa.String(length=512), nullable=False),
        sa.Column("uploaded_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["request_id"], ["leave_requests.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_leave_documents_request_id", "leave_documents", ["request_id"])

    op.create_table(
        "events",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("owner_email", sa.String(length=254), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.String(length=5), nullable=False),
        sa.Column("end_time", sa.String(length=5), nullable=False),
        sa.Column("location_name", sa.String(length=200), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("visibility", EVENT_VISIBILITY, nullable=False, server_default="personal"),
        sa.Column("invite_department_id", sa.Integer(), nullable=True),
        sa.Column("recurring", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("frequency", EVENT_FREQUENCY, nullable=True),
        sa.Column("original_date", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["owner_email"], ["users.email"], ondelete="CASCADE", onupdate="CASCADE"),
        sa.ForeignKeyConstraint(["invite_department_id"], ["departments.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_events_owner_date", "events", ["owner_email", "date"])

    op.create_table(
        "event_invitations",
        sa.Column("event_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["event_id"], ["events.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("event_id", "user_id"),
    )
    op.create_index("ix_event_invitations_user_id", "event_invitations", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_event_invitations_user_id", table_name="event_invitations")
    op.drop_table("event_invitations")
    op.drop_index("ix_events_owner_date", table_name="events")
    op.drop_table("events")
    op.drop_index("ix_leave_documents_request_id", table_name="leave_documents")
    op.drop_table("leave_documents")
    op.drop_index("ix_leave_requests_owner_start", table_name="leave_requests")
    op.drop_index("ix_leave_requests_owner_email", table_name="leave_requests")
    op.drop_table("leave_requests")
    op.drop_index("ix_users_department_id", table_name="users")
    op.drop_table("users")
    op.drop_table("departments")

    bind = op.get_bind()
    for enum in (EVENT_FREQUENCY, EVENT_VISIBILITY, LEAVE_STATUS, LEAVE_TYPE):
        enum.drop(bind, checkfirst=True)
