"""Initial schema: tenants, staff, working hours, schedule exceptions, appointments.

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

exception_type = sa.Enum("DAY_OFF", "SICK_LEAVE", "CUSTOM_HOURS", name="exceptiontype")
appointment_status = sa.Enum(
    "PENDING", "CONFIRMED", "IN_PROGRESS", "COMPLETED", "CANCELED", name="appointmentstatus"
)


def upgrade() -> None:
    op.create_table(
        "tenants",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("timezone", sa.String(), nullable=False, server_default="UTC"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "staff",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("tenant_id", sa.String(), nullable=False),
        sa.Column("first_name", sa.String(), nullable=False),
        sa.Column("last_name", sa.String(), nullable=False, server_default=""),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_staff_tenant_id"), "staff", ["tenant_id"], unique=False)

    op.create_table(
        "salon_working_hours",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("tenant_id", sa.String(), nullable=False),
        sa.Column("day_of_week", sa.Integer(), nullable=False),
        sa.Column("is_working_day", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("start_time", sa.Time(), nullable=True),
        sa.Column("end_time", sa.Time(), nullable=True),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_salon_working_hours_tenant_id"), "salon_working_hours", ["tenant_id"], unique=False)

    op.create_table(
        "staff_working_hours",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("tenant_id", sa.String(), nullable=False),
        sa.Column("staff_id", sa.String(), nullable=False),
        sa.Column("day_of_week", sa.Integer(), nullable=False),
        sa.Column("is_working_day", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("start_time", sa.Time(), nullable=True),
        sa.Column("end_time", sa.Time(), nullable=True),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["staff_id"], ["staff.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_staff_working_hours_tenant_id"), "staff_working_hours", ["tenant_id"], unique=False)
    op.create_index(op.f("ix_staff_working_hours_staff_id"), "staff_working_hours", ["staff_id"], unique=False)

    op.create_table(
        "schedule_exceptions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("tenant_id", sa.String(), nullable=False),
        sa.Column("staff_id", sa.String(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("type", exception_type, nullable=False),
        sa.Column("custom_start_time", sa.Time(), nullable=True),
        sa.Column("custom_end_time", sa.Time(), nullable=True),
        sa.Column("reason", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["staff_id"], ["staff.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_schedule_exceptions_tenant_id"), "schedule_exceptions", ["tenant_id"], unique=False)
    op.create_index(op.f("ix_schedule_exceptions_staff_id"), "schedule_exceptions", ["staff_id"], unique=False)
    op.create_index(op.f("ix_schedule_exceptions_start_date"), "schedule_exceptions", ["start_date"], unique=False)
    op.create_index(op.f("ix_schedule_exceptions_end_date"), "schedule_exceptions", ["end_date"], unique=False)

    op.create_table(
        "appointments",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("tenant_id", sa.String(), nullable=False),
        sa.Column("staff_id", sa.String(), nullable=False),
        sa.Column("start_at", sa.DateTime(), nullable=False),
        sa.Column("end_at", sa.DateTime(), nullable=False),
        sa.Column("status", appointment_status, nullable=False, server_default="CONFIRMED"),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["staff_id"], ["staff.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_appointments_tenant_id"), "appointments", ["tenant_id"], unique=False)
    op.create_index(op.f("ix_appointments_staff_id"), "appointments", ["staff_id"], unique=False)
    op.create_index(op.f("ix_appointments_start_at"), "appointments", ["start_at"], unique=False)
    op.create_index(op.f("ix_appointments_end_at"), "appointments", ["end_at"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_appointments_end_at"), table_name="appointments")
    op.drop_index(op.f("ix_appointments_start_at"), table_name="appointments")
    op.drop_index(op.f("ix_appointments_staff_id"), table_name="appointments")
    op.drop_index(op.f("ix_appointments_tenant_id"), table_name="appointments")
    op.drop_table("appointments")
    op.drop_index(op.f("ix_schedule_exceptions_end_date"), table_name="schedule_exceptions")
    op.drop_index(op.f("ix_schedule_exceptions_start_date"), table_name="schedule_exceptions")
    op.drop_index(op.f("ix_schedule_exceptions_staff_id"), table_name="schedule_exceptions")
    op.drop_index(op.f("ix_schedule_exceptions_tenant_id"), table_name="schedule_exceptions")
    op.drop_table("schedule_exceptions")
    op.drop_index(op.f("ix_staff_working_hours_staff_id"), table_name="staff_working_hours")
    op.drop_index(op.f("ix_staff_working_hours_tenant_id"), table_name="staff_working_hours")
    op.drop_table("staff_working_hours")
    op.drop_index(op.f("ix_salon_working_hours_tenant_id"), table_name="salon_working_hours")
    op.drop_table("salon_working_hours")
    op.drop_index(op.f("ix_staff_tenant_id"), table_name="staff")
    op.drop_table("staff")
    op.drop_table("tenants")
    appointment_status.drop(op.get_bind(), checkfirst=True)
    exception_type.drop(op.get_bind(), checkfirst=True)
