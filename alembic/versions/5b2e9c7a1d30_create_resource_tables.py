"""create directory and resource tables

Revision ID: 5b2e9c7a1d30
Revises:
Create Date: 2026-10-17 10:12:41.518204

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5b2e9c7a1d30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade():
    # ---- directory (owned by user/project services, referenced by id) ----
    op.create_table(
        "people",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("full_name", sa.Text(), nullable=False),
        sa.Column("role", sa.Text(), nullable=False, server_default="member"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_table(
        "projects",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("owner_id", sa.Uuid(), sa.ForeignKey("people.id", ondelete="SET NULL"), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_table(
        "tasks",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("project_id", sa.Uuid(), sa.ForeignKey("projects.id", ondelete="CASCADE"), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    # ---- allocations ----
    op.create_table(
        "resource_allocations",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("person_id", sa.Uuid(), sa.ForeignKey("people.id", ondelete="CASCADE"), nullable=False),
        sa.Column("project_id", sa.Uuid(), sa.ForeignKey("projects.id", ondelete="CASCADE"), nullable=False),
        sa.Column("task_id", sa.Uuid(), sa.ForeignKey("tasks.id", ondelete="CASCADE"), nullable=True),
        sa.Column("percentage", sa.Integer(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("percentage BETWEEN 1 AND 100", name="ck_alloc_percentage_range"),
        sa.CheckConstraint("end_date IS NULL OR start_date <= end_date", name="ck_alloc_dates_ordered"),
    )
    op.create_index("ix_alloc_person_start", "resource_allocations", ["person_id", "start_date"])
    op.create_index("ix_alloc_project", "resource_allocations", ["project_id"])

    # ---- weekly availability ----
    op.create_table(
        "user_availability",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("person_id", sa.Uuid(), sa.ForeignKey("people.id", ondelete="CASCADE"), nullable=False),
        sa.Column("day_of_week", sa.SmallInteger(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("day_of_week BETWEEN 0 AND 6", name="ck_avail_day_range"),
        sa.CheckConstraint("start_time < end_time", name="ck_avail_times_ordered"),
    )
    op.create_index(
        "ix_avail_person_day_start",
        "user_availability",
        ["person_id", "day_of_week", "start_time"],
    )

    # ---- time off ----
    op.create_table(
        "time_off_requests",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("person_id", sa.Uuid(), sa.ForeignKey("people.id", ondelete="CASCADE"), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(), nullable=False, server_default="pending"),
        sa.Column("request_type", sa.String(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=False, server_default=""),
        sa.Column("approved_by", sa.Uuid(), nullable=True),
        sa.Column("approved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("start_date <= end_date", name="ck_timeoff_dates_ordered"),
        sa.CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')",
            name="ck_timeoff_status_domain",
        ),
        sa.CheckConstraint(
            "(status = 'approved') = (approved_by IS NOT NULL AND approved_at IS NOT NULL)",
            name="ck_timeoff_approval_fields",
        ),
    )
    op.create_index("ix_timeoff_person_start", "time_off_requests", ["person_id", "start_date"])
    op.create_index("ix_timeoff_status", "time_off_requests", ["status"])


def downgrade():
    op.drop_index("ix_timeoff_status", table_name="time_off_requests")
    op.drop_index("ix_timeoff_person_start", table_name="time_off_requests")
    op.drop_table("time_off_requests")

    op.drop_index("ix_avail_person_day_start", table_name="user_availability")
    op.drop_table("user_availability")

    op.drop_index("ix_alloc_project", table_name="resource_allocations")
    op.drop_index("ix_alloc_person_start", table_name="resource_allocations")
    op.drop_table("resource_allocations")

    op.drop_table("tasks")
    op.drop_table("projects")
    op.drop_table("people")
