"""Ports for persisting catalog entities and tracking plans."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from trackplan.domain.model import (
    Event,
    EventProperty,
    Property,
    TrackingPlan,
    TrackingPlanEvent,
)

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID

    from trackplan.domain.model import NaturalKey


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract: inserts surface duplicate keys immediately."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class SoftDeletingRepository[TEntity](Repository[TEntity], Protocol):
    def soft_delete(self, entity: TEntity, *, at: datetime) -> None: ...


@runtime_checkable
class CatalogRepository[TEntity](SoftDeletingRepository[TEntity], Protocol):
    """Lookups only ever return rows that are not soft-deleted."""

    def get(self, entity_id: UUID) -> TEntity | None: ...

    def list_active(self) -> list[TEntity]: ...

    def update(self, entity: TEntity) -> None: ...


@runtime_checkable
class NaturalKeyRepository[TEntity](CatalogRepository[TEntity], Protocol):
    def find_by_natural_key(self, key: NaturalKey) -> TEntity | None: ...

    def find_by_natural_key_excluding(
        self, key: NaturalKey, exclude_id: UUID
    ) -> TEntity | None: ...


@runtime_checkable
class EventRepository(NaturalKeyRepository[Event], Protocol):
    """Repository contract for events."""


@runtime_checkable
class PropertyRepository(NaturalKeyRepository[Property], Protocol):
    """Repository contract for properties."""


@runtime_checkable
class TrackingPlanRepository(CatalogRepository[TrackingPlan], Protocol):
    def find_by_name(self, name: str) -> TrackingPlan | None: ...

    def find_by_name_excluding(self, name: str, exclude_id: UUID) -> TrackingPlan | None: ...


@runtime_checkable
class TrackingPlanEventRepository(SoftDeletingRepository[TrackingPlanEvent], Protocol):
    """Repository contract for plan-event links."""


@runtime_checkable
class EventPropertyRepository(SoftDeletingRepository[EventProperty], Protocol):
    """Repository contract for event-property links."""
