"""SQLAlchemy adapter package for trackplan."""

from __future__ import annotations

from .mappings import mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyEventPropertyRepository,
    SqlAlchemyEventRepository,
    SqlAlchemyPropertyRepository,
    SqlAlchemyTrackingPlanEventRepository,
    SqlAlchemyTrackingPlanRepository,
)

__all__ = [
    "SqlAlchemyEventPropertyRepository",
    "SqlAlchemyEventRepository",
    "SqlAlchemyPropertyRepository",
    "SqlAlchemyTrackingPlanEventRepository",
    "SqlAlchemyTrackingPlanRepository",
    "mapper_registry",
    "start_mappers",
]
