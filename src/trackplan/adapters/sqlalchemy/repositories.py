"""Repository implementations backed by SQLAlchemy sessions.

Inserts and updates flush immediately so a duplicate key surfaces at the call site as a
``UniqueConstraintError`` instead of at commit time as a driver error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from trackplan.adapters.sqlalchemy.mappings import (
    event_table,
    property_table,
    tracking_plan_table,
)
from trackplan.domain.errors import UniqueConstraintError
from trackplan.domain.model import (
    CatalogEntity,
    EntityType,
    Event,
    EventProperty,
    Property,
    SoftDeletableMixin,
    TrackingPlan,
    TrackingPlanEvent,
)

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID

    from sqlalchemy import Table
    from sqlalchemy.orm import Session

    from trackplan.domain.model import NaturalKey


_UNIQUE_VIOLATION_SQLSTATE = "23505"


def _is_unique_violation(exc: IntegrityError) -> bool:
    """Tell duplicate-key failures apart from foreign key and NOT NULL violations."""

    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate is not None:
        return sqlstate == _UNIQUE_VIOLATION_SQLSTATE
    return "UNIQUE constraint failed" in str(orig)


class SqlAlchemyRepository[TEntity: SoftDeletableMixin]:
    """Shared write path: flush on every change and translate duplicate keys."""

    entity_type: EntityType

    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: TEntity) -> None:
        self.session.add(entity)
        self._flush(entity)

    def update(self, entity: TEntity) -> None:
        self._flush(entity)

    def soft_delete(self, entity: TEntity, *, at: datetime) -> None:
        entity.mark_deleted(at=at)
        self._flush(entity)

    def _identity(self, entity: TEntity) -> str:
        return str(entity.id)

    def _flush(self, entity: TEntity) -> None:
        # a failed UPDATE expires the entity, so read its identity up front
        identity = self._identity(entity)
        try:
            self.session.flush()
        except IntegrityError as exc:
            if not _is_unique_violation(exc):
                raise
            raise UniqueConstraintError(self.entity_type, identity) from exc


class SqlAlchemyCatalogRepository[TEntity: CatalogEntity](SqlAlchemyRepository[TEntity]):
    """Events and properties: looked up by ``(name, type)`` among live rows."""

    def __init__(self, session: Session, entity_cls: type[TEntity], table: Table) -> None:
        super().__init__(session)
        self._entity_cls = entity_cls
        self._table = table
        self.entity_type = entity_cls.ENTITY_TYPE

    def get(self, entity_id: UUID) -> TEntity | None:
        entity = self.session.get(self._entity_cls, entity_id)
        if entity is None or entity.is_deleted:
            return None
        return entity

    def list_active(self) -> list[TEntity]:
        stmt = (
            select(self._entity_cls)
            .where(self._table.c.is_deleted.is_(False))
            .order_by(self._table.c.create_time, self._table.c.name)
        )
        return list(self.session.execute(stmt).scalars())

    def find_by_natural_key(self, key: NaturalKey) -> TEntity | None:
        stmt = (
            select(self._entity_cls)
            .where(self._table.c.name == key.name)
            .where(self._table.c.type == key.type)
            .where(self._table.c.is_deleted.is_(False))
            .limit(1)
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def find_by_natural_key_excluding(self, key: NaturalKey, exclude_id: UUID) -> TEntity | None:
        stmt = (
            select(self._entity_cls)
            .where(self._table.c.name == key.name)
            .where(self._table.c.type == key.type)
            .where(self._table.c.is_deleted.is_(False))
            .where(self._table.c.id != exclude_id)
            .limit(1)
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def _identity(self, entity: TEntity) -> str:
        return str(entity.natural_key)


class SqlAlchemyEventRepository(SqlAlchemyCatalogRepository[Event]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Event, event_table)


class SqlAlchemyPropertyRepository(SqlAlchemyCatalogRepository[Property]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Property, property_table)


class SqlAlchemyTrackingPlanRepository(SqlAlchemyRepository[TrackingPlan]):
    entity_type = EntityType.TRACKING_PLAN

    def get(self, entity_id: UUID) -> TrackingPlan | None:
        plan = self.session.get(TrackingPlan, entity_id)
        if plan is None or plan.is_deleted:
            return None
        return plan

    def list_active(self) -> list[TrackingPlan]:
        stmt = (
            select(TrackingPlan)
            .where(tracking_plan_table.c.is_deleted.is_(False))
            .order_by(tracking_plan_table.c.create_time, tracking_plan_table.c.name)
        )
        return list(self.session.execute(stmt).scalars())

    def find_by_name(self, name: str) -> TrackingPlan | None:
        stmt = (
            select(TrackingPlan)
            .where(tracking_plan_table.c.name == name)
            .where(tracking_plan_table.c.is_deleted.is_(False))
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def find_by_name_excluding(self, name: str, exclude_id: UUID) -> TrackingPlan | None:
        stmt = (
            select(TrackingPlan)
            .where(tracking_plan_table.c.name == name)
            .where(tracking_plan_table.c.is_deleted.is_(False))
            .where(tracking_plan_table.c.id != exclude_id)
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def _identity(self, entity: TrackingPlan) -> str:
        return entity.name


class SqlAlchemyTrackingPlanEventRepository(SqlAlchemyRepository[TrackingPlanEvent]):
    entity_type = EntityType.TRACKING_PLAN_EVENT

    def _identity(self, entity: TrackingPlanEvent) -> str:
        return str(entity.event.natural_key)


class SqlAlchemyEventPropertyRepository(SqlAlchemyRepository[EventProperty]):
    entity_type = EntityType.EVENT_PROPERTY

    def _identity(self, entity: EventProperty) -> str:
        return str(entity.property.natural_key)
