"""SQLAlchemy mapping metadata for the trackplan domain model."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
    false,
    orm,
)
from sqlalchemy.orm import configure_mappers, relationship

from trackplan.domain.model import (
    Event,
    EventProperty,
    EventType,
    Property,
    PropertyType,
    TrackingPlan,
    TrackingPlanEvent,
    ValidationRules,
)

if TYPE_CHECKING:
    from enum import StrEnum

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


class ValidationRulesType(TypeDecorator[ValidationRules]):
    """Stores a rule set as a JSON object; empty rule sets are stored as SQL NULL."""

    impl = JSON(none_as_null=True)
    cache_ok = True

    def process_bind_param(
        self, value: ValidationRules | None, dialect: Dialect
    ) -> dict[str, object] | None:
        _ = dialect
        if value is None or value.is_empty:
            return None
        return value.to_dict()

    def process_result_value(self, value: object, dialect: Dialect) -> ValidationRules | None:
        _ = dialect
        if not isinstance(value, dict) or not value:
            return None
        return ValidationRules.from_mapping(cast(dict[str, Any], value))


def _enum_column_type(enum_cls: type[StrEnum]) -> Enum:
    return Enum(
        enum_cls,
        native_enum=False,
        length=32,
        values_callable=lambda members: [member.value for member in members],
    )


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Catalog tables --------------------------------------------------------------

event_table = Table(
    "event",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String(255), nullable=False),
    Column("type", _enum_column_type(EventType), nullable=False),
    Column("description", Text, nullable=False),
    Column("is_deleted", Boolean, nullable=False, default=False),
    Column("deleted_at", UTCDateTime(), nullable=True),
    Column("create_time", UTCDateTime(), nullable=False),
    Column("update_time", UTCDateTime(), nullable=False),
)

property_table = Table(
    "property",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String(255), nullable=False),
    Column("type", _enum_column_type(PropertyType), nullable=False),
    Column("description", Text, nullable=False),
    Column("validation_rules", ValidationRulesType(), nullable=True),
    Column("is_deleted", Boolean, nullable=False, default=False),
    Column("deleted_at", UTCDateTime(), nullable=True),
    Column("create_time", UTCDateTime(), nullable=False),
    Column("update_time", UTCDateTime(), nullable=False),
)

tracking_plan_table = Table(
    "tracking_plan",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String(255), nullable=False),
    Column("description", Text, nullable=False),
    Column("is_deleted", Boolean, nullable=False, default=False),
    Column("deleted_at", UTCDateTime(), nullable=True),
    Column("create_time", UTCDateTime(), nullable=False),
    Column("update_time", UTCDateTime(), nullable=False),
    # soft-deleted plans keep their name reserved
    UniqueConstraint("name"),
)

# Link tables -----------------------------------------------------------------

tracking_plan_event_table = Table(
    "tracking_plan_event",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "tracking_plan_id",
        UUIDColumnType,
        ForeignKey("tracking_plan.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("event_id", UUIDColumnType, ForeignKey("event.id"), nullable=False),
    Column("additional_properties", Boolean, nullable=False, default=False),
    Column("position", Integer, nullable=False, default=0),
    Column("is_deleted", Boolean, nullable=False, default=False),
    Column("deleted_at", UTCDateTime(), nullable=True),
    Column("created_at", UTCDateTime(), nullable=False),
)

event_property_table = Table(
    "event_property",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "tracking_plan_event_id",
        UUIDColumnType,
        ForeignKey("tracking_plan_event.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("property_id", UUIDColumnType, ForeignKey("property.id"), nullable=False),
    Column("required", Boolean, nullable=False, default=False),
    Column("position", Integer, nullable=False, default=0),
    Column("is_deleted", Boolean, nullable=False, default=False),
    Column("deleted_at", UTCDateTime(), nullable=True),
    Column("created_at", UTCDateTime(), nullable=False),
)

# Identity indexes only cover live rows so a soft-deleted identity can be re-created.

Index(
    "uq_event_name_type_active",
    event_table.c.name,
    event_table.c.type,
    unique=True,
    sqlite_where=event_table.c.is_deleted == false(),
    postgresql_where=event_table.c.is_deleted == false(),
)
Index(
    "uq_property_name_type_active",
    property_table.c.name,
    property_table.c.type,
    unique=True,
    sqlite_where=property_table.c.is_deleted == false(),
    postgresql_where=property_table.c.is_deleted == false(),
)
Index(
    "uq_tracking_plan_event_plan_event_active",
    tracking_plan_event_table.c.tracking_plan_id,
    tracking_plan_event_table.c.event_id,
    unique=True,
    sqlite_where=tracking_plan_event_table.c.is_deleted == false(),
    postgresql_where=tracking_plan_event_table.c.is_deleted == false(),
)
Index(
    "uq_event_property_link_property_active",
    event_property_table.c.tracking_plan_event_id,
    event_property_table.c.property_id,
    unique=True,
    sqlite_where=event_property_table.c.is_deleted == false(),
    postgresql_where=event_property_table.c.is_deleted == false(),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(Event, event_table)
    mapper_registry.map_imperatively(Property, property_table)

    mapper_registry.map_imperatively(
        TrackingPlan,
        tracking_plan_table,
        properties={
            "_events": relationship(
                TrackingPlanEvent,
                order_by=tracking_plan_event_table.c.position,
                cascade="all, delete-orphan",
            ),
        },
    )

    mapper_registry.map_imperatively(
        TrackingPlanEvent,
        tracking_plan_event_table,
        properties={
            "_event": relationship(Event, lazy="joined"),
            "_properties": relationship(
                EventProperty,
                order_by=event_property_table.c.position,
                cascade="all, delete-orphan",
            ),
        },
    )

    mapper_registry.map_imperatively(
        EventProperty,
        event_property_table,
        properties={
            "_property": relationship(Property, lazy="joined"),
        },
    )

    configure_mappers()
    return mapper_registry
