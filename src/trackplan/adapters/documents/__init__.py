"""Document loading: parsed JSON payloads to catalog definitions."""

from __future__ import annotations

from .schema import (
    EventCreateDocument,
    EventUpdateDocument,
    PlanEventDocument,
    PlanPropertyDocument,
    PropertyCreateDocument,
    PropertyUpdateDocument,
    TrackingPlanDocument,
    TrackingPlanUpdateDocument,
)
from .translator import (
    load_event_changes,
    load_event_draft,
    load_property_changes,
    load_property_draft,
    load_tracking_plan_changes,
    load_tracking_plan_draft,
)

__all__ = [
    "EventCreateDocument",
    "EventUpdateDocument",
    "PlanEventDocument",
    "PlanPropertyDocument",
    "PropertyCreateDocument",
    "PropertyUpdateDocument",
    "TrackingPlanDocument",
    "TrackingPlanUpdateDocument",
    "load_event_changes",
    "load_event_draft",
    "load_property_changes",
    "load_property_draft",
    "load_tracking_plan_changes",
    "load_tracking_plan_draft",
]
