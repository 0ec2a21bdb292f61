"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class EntityType(StrEnum):
    """Discriminator used in error messages and log records."""

    EVENT = "event"
    PROPERTY = "property"
    TRACKING_PLAN = "tracking_plan"

    # Link entities
    TRACKING_PLAN_EVENT = "tracking_plan_event"
    EVENT_PROPERTY = "event_property"

    @property
    def label(self) -> str:
        """Human-facing name, e.g. ``TrackingPlan``."""
        return "".join(part.capitalize() for part in self.value.split("_"))


class EventType(StrEnum):
    TRACK = "track"
    IDENTIFY = "identify"
    ALIAS = "alias"
    SCREEN = "screen"
    PAGE = "page"


class PropertyType(StrEnum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
