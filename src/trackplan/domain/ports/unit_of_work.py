"""Unit-of-work abstractions for coordinating repositories."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from trackplan.domain.ports.persistence import (
        EventPropertyRepository,
        EventRepository,
        PropertyRepository,
        TrackingPlanEventRepository,
        TrackingPlanRepository,
    )


@runtime_checkable
class RepositoryCollection(Protocol):
    """Marker protocol for groups of repositories managed together."""


@runtime_checkable
class UnitOfWork[TRepositories: RepositoryCollection](Protocol):
    """Generic unit-of-work boundary around a repository collection.

    Leaving the context without ``commit()`` discards every write made through the
    repositories; leaving it with an exception rolls back explicitly.
    """

    @property
    def repositories(self) -> TRepositories: ...

    def __enter__(self) -> UnitOfWork[TRepositories]: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


@dataclass(slots=True)
class CatalogRepositories(RepositoryCollection):
    """Repositories scoped to one catalog transaction."""

    events: EventRepository
    properties: PropertyRepository
    tracking_plans: TrackingPlanRepository
    plan_events: TrackingPlanEventRepository
    event_properties: EventPropertyRepository


type CatalogUnitOfWork = UnitOfWork[CatalogRepositories]
type CatalogUnitOfWorkFactory = Callable[[], CatalogUnitOfWork]
