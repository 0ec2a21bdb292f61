"""Domain ports (interfaces) for adapters."""

from __future__ import annotations

from .persistence import (
    CatalogRepository,
    EventPropertyRepository,
    EventRepository,
    NaturalKeyRepository,
    PropertyRepository,
    Repository,
    SoftDeletingRepository,
    TrackingPlanEventRepository,
    TrackingPlanRepository,
)
from .unit_of_work import (
    CatalogRepositories,
    CatalogUnitOfWork,
    CatalogUnitOfWorkFactory,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "CatalogRepositories",
    "CatalogRepository",
    "CatalogUnitOfWork",
    "CatalogUnitOfWorkFactory",
    "EventPropertyRepository",
    "EventRepository",
    "NaturalKeyRepository",
    "PropertyRepository",
    "Repository",
    "RepositoryCollection",
    "SoftDeletingRepository",
    "TrackingPlanEventRepository",
    "TrackingPlanRepository",
    "UnitOfWork",
]
