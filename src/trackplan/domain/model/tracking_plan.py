"""Tracking plan aggregate and its link entities.

Aggregate root: TrackingPlan owns TrackingPlanEvent links, which own EventProperty links.
Soft-deleted links stay in the collections but are hidden from the read views.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from trackplan.domain.model.entity import SoftDeletableMixin, TimestampedMixin, utcnow
from trackplan.domain.model.enums import EntityType

if TYPE_CHECKING:
    from datetime import datetime

    from trackplan.domain.model.catalog import Event, Property


@dataclass(eq=False, kw_only=True)
class EventProperty(SoftDeletableMixin):
    """A property as used by one event inside one plan."""

    ENTITY_TYPE: ClassVar[EntityType] = EntityType.EVENT_PROPERTY

    _property: Property = field(repr=False)

    required: bool = False
    position: int = 0
    created_at: datetime = field(default_factory=utcnow)

    @property
    def property(self) -> Property:
        return self._property


@dataclass(eq=False, kw_only=True)
class TrackingPlanEvent(SoftDeletableMixin):
    """An event as used by one plan."""

    ENTITY_TYPE: ClassVar[EntityType] = EntityType.TRACKING_PLAN_EVENT

    _event: Event = field(repr=False)

    additional_properties: bool = False
    position: int = 0
    created_at: datetime = field(default_factory=utcnow)

    _properties: list[EventProperty] = field(default_factory=list["EventProperty"], repr=False)

    @property
    def event(self) -> Event:
        return self._event

    @property
    def properties(self) -> tuple[EventProperty, ...]:
        active = (link for link in self._properties if not link.is_deleted)
        return tuple(sorted(active, key=lambda link: link.position))

    def has_property(self, prop: Property) -> bool:
        return any(link.property.id == prop.id for link in self.properties)

    def add_property(self, prop: Property, *, required: bool) -> EventProperty:
        link = EventProperty(
            _property=prop,
            required=required,
            position=len(self._properties),
        )
        self._properties.append(link)
        return link


@dataclass(eq=False, kw_only=True)
class TrackingPlan(TimestampedMixin, SoftDeletableMixin):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.TRACKING_PLAN

    name: str
    description: str

    _events: list[TrackingPlanEvent] = field(
        default_factory=list["TrackingPlanEvent"], repr=False
    )

    @property
    def events(self) -> tuple[TrackingPlanEvent, ...]:
        active = (link for link in self._events if not link.is_deleted)
        return tuple(sorted(active, key=lambda link: link.position))

    def has_event(self, event: Event) -> bool:
        return any(link.event.id == event.id for link in self.events)

    def add_event(self, event: Event, *, additional_properties: bool) -> TrackingPlanEvent:
        link = TrackingPlanEvent(
            _event=event,
            additional_properties=additional_properties,
            position=len(self._events),
        )
        self._events.append(link)
        return link
