"""In-memory repositories and unit of work for service-level tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

from trackplan.domain.errors import UniqueConstraintError
from trackplan.domain.model import (
    CatalogEntity,
    Event,
    EventProperty,
    Property,
    SoftDeletableMixin,
    TrackingPlan,
    TrackingPlanEvent,
)
from trackplan.domain.ports.unit_of_work import CatalogRepositories

if TYPE_CHECKING:
    from datetime import datetime
    from types import TracebackType
    from uuid import UUID

    from trackplan.domain.model import NaturalKey


class FakeLinkRepository[TEntity: SoftDeletableMixin]:
    def __init__(self) -> None:
        self.items: list[TEntity] = []

    def add(self, entity: TEntity) -> None:
        self.items.append(entity)

    def soft_delete(self, entity: TEntity, *, at: datetime) -> None:
        entity.mark_deleted(at=at)


class FakeCatalogRepository[TEntity: CatalogEntity]:
    """Keeps entities in insertion order and enforces live natural-key uniqueness."""

    def __init__(self) -> None:
        self.items: list[TEntity] = []
        self.lookups: list[NaturalKey] = []

    def add(self, entity: TEntity) -> None:
        if self._find(entity.natural_key, exclude_id=None) is not None:
            raise UniqueConstraintError(entity.entity_type, str(entity.natural_key))
        self.items.append(entity)

    def update(self, entity: TEntity) -> None:
        _ = entity

    def soft_delete(self, entity: TEntity, *, at: datetime) -> None:
        entity.mark_deleted(at=at)

    def get(self, entity_id: UUID) -> TEntity | None:
        for entity in self.items:
            if entity.id == entity_id and not entity.is_deleted:
                return entity
        return None

    def list_active(self) -> list[TEntity]:
        return [entity for entity in self.items if not entity.is_deleted]

    def find_by_natural_key(self, key: NaturalKey) -> TEntity | None:
        self.lookups.append(key)
        return self._find(key, exclude_id=None)

    def find_by_natural_key_excluding(self, key: NaturalKey, exclude_id: UUID) -> TEntity | None:
        return self._find(key, exclude_id=exclude_id)

    def _find(self, key: NaturalKey, *, exclude_id: UUID | None) -> TEntity | None:
        for entity in self.items:
            if entity.is_deleted or entity.id == exclude_id:
                continue
            if entity.natural_key == key:
                return entity
        return None


class FakeTrackingPlanRepository:
    def __init__(self) -> None:
        self.items: list[TrackingPlan] = []

    def add(self, entity: TrackingPlan) -> None:
        if any(plan.name == entity.name for plan in self.items):
            raise UniqueConstraintError(entity.entity_type, entity.name)
        self.items.append(entity)

    def update(self, entity: TrackingPlan) -> None:
        _ = entity

    def soft_delete(self, entity: TrackingPlan, *, at: datetime) -> None:
        entity.mark_deleted(at=at)

    def get(self, entity_id: UUID) -> TrackingPlan | None:
        for plan in self.items:
            if plan.id == entity_id and not plan.is_deleted:
                return plan
        return None

    def list_active(self) -> list[TrackingPlan]:
        return [plan for plan in self.items if not plan.is_deleted]

    def find_by_name(self, name: str) -> TrackingPlan | None:
        for plan in self.items:
            if plan.name == name and not plan.is_deleted:
                return plan
        return None

    def find_by_name_excluding(self, name: str, exclude_id: UUID) -> TrackingPlan | None:
        plan = self.find_by_name(name)
        if plan is None or plan.id == exclude_id:
            return None
        return plan


@dataclass
class FakeCatalogStore:
    events: FakeCatalogRepository[Event] = field(default_factory=FakeCatalogRepository[Event])
    properties: FakeCatalogRepository[Property] = field(
        default_factory=FakeCatalogRepository[Property]
    )
    tracking_plans: FakeTrackingPlanRepository = field(default_factory=FakeTrackingPlanRepository)
    plan_events: FakeLinkRepository[TrackingPlanEvent] = field(
        default_factory=FakeLinkRepository[TrackingPlanEvent]
    )
    event_properties: FakeLinkRepository[EventProperty] = field(
        default_factory=FakeLinkRepository[EventProperty]
    )

    def repositories(self) -> CatalogRepositories:
        return CatalogRepositories(
            events=self.events,
            properties=self.properties,
            tracking_plans=self.tracking_plans,
            plan_events=self.plan_events,
            event_properties=self.event_properties,
        )


class FakeCatalogUnitOfWork:
    """Records commit/rollback calls; does not undo in-memory writes."""

    def __init__(self, store: FakeCatalogStore) -> None:
        self._repositories = store.repositories()
        self.committed = False
        self.rolled_back = False

    @property
    def repositories(self) -> CatalogRepositories:
        return self._repositories

    def __enter__(self) -> FakeCatalogUnitOfWork:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        return False

    def commit(self) -> None:
        self.committed = True

    def rollback(self) -> None:
        self.rolled_back = True
