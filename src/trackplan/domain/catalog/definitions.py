"""Incoming definitions handed to the catalog services.

Drafts describe entities that may not exist yet; ``*Changes`` records describe partial
updates where ``None`` means "leave untouched".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from trackplan.domain.model import NaturalKey

if TYPE_CHECKING:
    from datetime import datetime

    from trackplan.domain.model import EventType, PropertyType, ValidationRules


@dataclass(frozen=True, slots=True, kw_only=True)
class EventDraft:
    name: str
    type: EventType
    description: str
    create_time: datetime | None = None

    @property
    def natural_key(self) -> NaturalKey:
        return NaturalKey(self.name, self.type)


@dataclass(frozen=True, slots=True, kw_only=True)
class PropertyDraft:
    name: str
    type: PropertyType
    description: str
    validation_rules: ValidationRules | None = None
    create_time: datetime | None = None

    @property
    def natural_key(self) -> NaturalKey:
        return NaturalKey(self.name, self.type)


@dataclass(frozen=True, slots=True, kw_only=True)
class PlanPropertyDefinition:
    """A property reference inside a plan event, with its plan-scoped flag."""

    property: PropertyDraft
    required: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class PlanEventDefinition:
    """An event reference inside a plan, with its plan-scoped flag and properties."""

    event: EventDraft
    additional_properties: bool = False
    properties: tuple[PlanPropertyDefinition, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class TrackingPlanDraft:
    name: str
    description: str
    events: tuple[PlanEventDefinition, ...] = ()
    create_time: datetime | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class TrackingPlanChanges:
    """Partial update; an ``events`` tuple (even an empty one) replaces every link."""

    name: str | None = None
    description: str | None = None
    events: tuple[PlanEventDefinition, ...] | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class EventChanges:
    name: str | None = None
    type: EventType | None = None
    description: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class PropertyChanges:
    """Partial update; an empty ``ValidationRules`` clears the stored rules."""

    name: str | None = None
    type: PropertyType | None = None
    description: str | None = None
    validation_rules: ValidationRules | None = None
