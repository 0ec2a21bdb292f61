"""Catalog services: events, properties and tracking plans."""

from __future__ import annotations

from .comparison import Difference, compare_event, compare_property, normalize_rules
from .definitions import (
    EventChanges,
    EventDraft,
    PlanEventDefinition,
    PlanPropertyDefinition,
    PropertyChanges,
    PropertyDraft,
    TrackingPlanChanges,
    TrackingPlanDraft,
)
from .events import create_event, delete_event, get_event, list_events, update_event
from .properties import (
    create_property,
    delete_property,
    get_property,
    list_properties,
    update_property,
)
from .relationships import RelationshipWriter
from .resolve import EventResolver, IdentityResolver, PropertyResolver
from .tracking_plans import (
    PlanWriteStage,
    TrackingPlanWriter,
    create_tracking_plan,
    delete_tracking_plan,
    get_tracking_plan,
    list_tracking_plans,
    update_tracking_plan,
)
from .validation import validate_rules
from .views import EventView, PlanEventView, PlanPropertyView, PropertyView, TrackingPlanView

__all__ = [
    "Difference",
    "EventChanges",
    "EventDraft",
    "EventResolver",
    "EventView",
    "IdentityResolver",
    "PlanEventDefinition",
    "PlanEventView",
    "PlanPropertyDefinition",
    "PlanPropertyView",
    "PlanWriteStage",
    "PropertyChanges",
    "PropertyDraft",
    "PropertyResolver",
    "PropertyView",
    "RelationshipWriter",
    "TrackingPlanChanges",
    "TrackingPlanDraft",
    "TrackingPlanView",
    "TrackingPlanWriter",
    "compare_event",
    "compare_property",
    "create_event",
    "create_property",
    "create_tracking_plan",
    "delete_event",
    "delete_property",
    "delete_tracking_plan",
    "get_event",
    "get_property",
    "get_tracking_plan",
    "list_events",
    "list_properties",
    "list_tracking_plans",
    "normalize_rules",
    "update_event",
    "update_property",
    "update_tracking_plan",
    "validate_rules",
]
