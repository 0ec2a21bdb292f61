"""create catalog and tracking plan tables

Revision ID: 0001_catalog_schema
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "0001_catalog_schema"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column[object]]:
    return [
        sa.Column("is_deleted", sa.Boolean(), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("create_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("update_time", sa.DateTime(timezone=True), nullable=False),
    ]


def _live_rows() -> sa.ColumnElement[bool]:
    return sa.column("is_deleted") == sa.false()


def upgrade() -> None:
    op.create_table(
        "event",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        *_timestamps(),
    )
    op.create_table(
        "property",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("validation_rules", sa.JSON(), nullable=True),
        *_timestamps(),
    )
    op.create_table(
        "tracking_plan",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        *_timestamps(),
        # Soft-deleted plans keep their name reserved.
        sa.UniqueConstraint("name"),
    )
    op.create_table(
        "tracking_plan_event",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "tracking_plan_id",
            sa.Uuid(),
            sa.ForeignKey("tracking_plan.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("event_id", sa.Uuid(), sa.ForeignKey("event.id"), nullable=False),
        sa.Column("additional_properties", sa.Boolean(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("is_deleted", sa.Boolean(), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_table(
        "event_property",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "tracking_plan_event_id",
            sa.Uuid(),
            sa.ForeignKey("tracking_plan_event.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("property_id", sa.Uuid(), sa.ForeignKey("property.id"), nullable=False),
        sa.Column("required", sa.Boolean(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("is_deleted", sa.Boolean(), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )

    # Identity uniqueness only applies to rows that are not soft-deleted.
    op.create_index(
        "uq_event_name_type_active",
        "event",
        ["name", "type"],
        unique=True,
        sqlite_where=_live_rows(),
        postgresql_where=_live_rows(),
    )
    op.create_index(
        "uq_property_name_type_active",
        "property",
        ["name", "type"],
        unique=True,
        sqlite_where=_live_rows(),
        postgresql_where=_live_rows(),
    )
    op.create_index(
        "uq_tracking_plan_event_plan_event_active",
        "tracking_plan_event",
        ["tracking_plan_id", "event_id"],
        unique=True,
        sqlite_where=_live_rows(),
        postgresql_where=_live_rows(),
    )
    op.create_index(
        "uq_event_property_link_property_active",
        "event_property",
        ["tracking_plan_event_id", "property_id"],
        unique=True,
        sqlite_where=_live_rows(),
        postgresql_where=_live_rows(),
    )


def downgrade() -> None:
    op.drop_index("uq_event_property_link_property_active", table_name="event_property")
    op.drop_index("uq_tracking_plan_event_plan_event_active", table_name="tracking_plan_event")
    op.drop_index("uq_property_name_type_active", table_name="property")
    op.drop_index("uq_event_name_type_active", table_name="event")
    op.drop_table("event_property")
    op.drop_table("tracking_plan_event")
    op.drop_table("tracking_plan")
    op.drop_table("property")
    op.drop_table("event")
