"""Public domain model surface."""

from __future__ import annotations

from trackplan.domain.model.catalog import CatalogEntity, Event, Property
from trackplan.domain.model.entity import (
    Entity,
    SoftDeletableMixin,
    TimestampedMixin,
    new_id,
    utcnow,
)
from trackplan.domain.model.enums import EntityType, EventType, PropertyType
from trackplan.domain.model.primitives import RULE_NAMES, NaturalKey, ValidationRules
from trackplan.domain.model.tracking_plan import EventProperty, TrackingPlan, TrackingPlanEvent

__all__ = [  # noqa: RUF022
    # base
    "Entity",
    "SoftDeletableMixin",
    "TimestampedMixin",
    "new_id",
    "utcnow",
    # catalog
    "CatalogEntity",
    "Event",
    "Property",
    # tracking plans
    "TrackingPlan",
    "TrackingPlanEvent",
    "EventProperty",
    # enums
    "EntityType",
    "EventType",
    "PropertyType",
    # primitives
    "NaturalKey",
    "RULE_NAMES",
    "ValidationRules",
]
