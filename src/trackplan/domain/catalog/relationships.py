"""Persistence of plan-scoped links between plans, events and properties."""

from __future__ import annotations

from typing import TYPE_CHECKING

from trackplan.domain.errors import UniqueConstraintError
from trackplan.domain.model import EntityType

if TYPE_CHECKING:
    from datetime import datetime

    from trackplan.domain.model import (
        Event,
        EventProperty,
        Property,
        TrackingPlan,
        TrackingPlanEvent,
    )
    from trackplan.domain.ports.unit_of_work import CatalogRepositories


class RelationshipWriter:
    """Create and retire link rows through the repositories of one unit of work."""

    def __init__(self, repositories: CatalogRepositories) -> None:
        self._repositories = repositories

    def link_event(
        self,
        plan: TrackingPlan,
        event: Event,
        *,
        additional_properties: bool,
    ) -> TrackingPlanEvent:
        if plan.has_event(event):
            raise UniqueConstraintError(EntityType.TRACKING_PLAN_EVENT, str(event.natural_key))
        link = plan.add_event(event, additional_properties=additional_properties)
        self._repositories.plan_events.add(link)
        return link

    def link_property(
        self,
        plan_event: TrackingPlanEvent,
        prop: Property,
        *,
        required: bool,
    ) -> EventProperty:
        if plan_event.has_property(prop):
            raise UniqueConstraintError(EntityType.EVENT_PROPERTY, str(prop.natural_key))
        link = plan_event.add_property(prop, required=required)
        self._repositories.event_properties.add(link)
        return link

    def retire_links(self, plan: TrackingPlan, *, at: datetime) -> int:
        """Soft-delete every active event link of ``plan`` and their property links."""

        retired = 0
        for link in plan.events:
            for property_link in link.properties:
                self._repositories.event_properties.soft_delete(property_link, at=at)
            self._repositories.plan_events.soft_delete(link, at=at)
            retired += 1
        return retired
