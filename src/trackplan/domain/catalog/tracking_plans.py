"""Tracking plan services: atomic create/update with catalog auto-creation.

Every write runs inside a single unit of work. Events and properties referenced by the
plan are resolved by identity (reused, created, or rejected as conflicting) and linked
with their plan-scoped flags. Any error leaves the unit of work without a commit, so the
store never sees a partially written plan.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from trackplan.domain.catalog.relationships import RelationshipWriter
from trackplan.domain.catalog.resolve import EventResolver, PropertyResolver
from trackplan.domain.catalog.views import TrackingPlanView
from trackplan.domain.errors import NotFoundError, UniqueConstraintError
from trackplan.domain.model import EntityType, TrackingPlan, utcnow

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime
    from uuid import UUID

    from trackplan.domain.catalog.definitions import (
        PlanEventDefinition,
        TrackingPlanChanges,
        TrackingPlanDraft,
    )
    from trackplan.domain.ports.unit_of_work import CatalogRepositories, CatalogUnitOfWorkFactory

log = getLogger(__name__)


class PlanWriteStage(StrEnum):
    VALIDATING = "validating"
    WRITING_PLAN = "writing_plan"
    WRITING_EVENTS = "writing_events"
    WRITING_PROPERTIES = "writing_properties"
    COMMITTING = "committing"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


@dataclass(slots=True)
class PlanWriteStats:
    events_created: int = 0
    events_reused: int = 0
    properties_created: int = 0
    properties_reused: int = 0
    links: int = 0


class TrackingPlanWriter:
    """Writes the event and property links of one plan within one unit of work."""

    def __init__(self, repositories: CatalogRepositories, *, now: datetime) -> None:
        self.stage = PlanWriteStage.VALIDATING
        self._events = EventResolver(repositories.events, now=now)
        self._properties = PropertyResolver(repositories.properties, now=now)
        self._links = RelationshipWriter(repositories)
        self._link_count = 0

    def write_events(
        self,
        plan: TrackingPlan,
        definitions: Iterable[PlanEventDefinition],
    ) -> None:
        for definition in definitions:
            self.stage = PlanWriteStage.WRITING_EVENTS
            event = self._events.resolve(definition.event)
            plan_event = self._links.link_event(
                plan,
                event,
                additional_properties=definition.additional_properties,
            )
            self._link_count += 1

            self.stage = PlanWriteStage.WRITING_PROPERTIES
            for property_definition in definition.properties:
                prop = self._properties.resolve(property_definition.property)
                self._links.link_property(
                    plan_event,
                    prop,
                    required=property_definition.required,
                )
                self._link_count += 1

    def retire_links(self, plan: TrackingPlan, *, at: datetime) -> int:
        return self._links.retire_links(plan, at=at)

    def abort(self) -> PlanWriteStage:
        """Mark the write rolled back and return the stage it stopped in."""

        stopped_in = self.stage
        self.stage = PlanWriteStage.ROLLED_BACK
        return stopped_in

    @property
    def stats(self) -> PlanWriteStats:
        return PlanWriteStats(
            events_created=self._events.created,
            events_reused=self._events.reused,
            properties_created=self._properties.created,
            properties_reused=self._properties.reused,
            links=self._link_count,
        )


def create_tracking_plan(
    draft: TrackingPlanDraft,
    *,
    unit_of_work_factory: CatalogUnitOfWorkFactory,
) -> TrackingPlanView:
    """Create a plan together with every event, property and link it references."""

    moment = draft.create_time or utcnow()
    with unit_of_work_factory() as uow:
        repositories = uow.repositories
        writer = TrackingPlanWriter(repositories, now=moment)
        try:
            if repositories.tracking_plans.find_by_name(draft.name) is not None:
                raise UniqueConstraintError(EntityType.TRACKING_PLAN, draft.name)

            writer.stage = PlanWriteStage.WRITING_PLAN
            plan = TrackingPlan(
                name=draft.name,
                description=draft.description,
                create_time=moment,
                update_time=moment,
            )
            repositories.tracking_plans.add(plan)

            writer.write_events(plan, draft.events)

            writer.stage = PlanWriteStage.COMMITTING
            view = TrackingPlanView.from_entity(plan)
            uow.commit()
            writer.stage = PlanWriteStage.COMMITTED
        except Exception:
            stopped_in = writer.abort()
            log.warning(
                "Tracking plan %r %s: aborted while %s", draft.name, writer.stage, stopped_in
            )
            raise

    stats = writer.stats
    log.info(
        "Tracking plan %s (%r) %s: events created=%s reused=%s, "
        "properties created=%s reused=%s, links=%s",
        view.id,
        view.name,
        writer.stage,
        stats.events_created,
        stats.events_reused,
        stats.properties_created,
        stats.properties_reused,
        stats.links,
    )
    return view


def update_tracking_plan(
    plan_id: UUID,
    changes: TrackingPlanChanges,
    *,
    unit_of_work_factory: CatalogUnitOfWorkFactory,
) -> TrackingPlanView:
    """Apply ``changes`` to an existing plan; a supplied event list replaces all links."""

    moment = utcnow()
    with unit_of_work_factory() as uow:
        repositories = uow.repositories
        writer = TrackingPlanWriter(repositories, now=moment)
        try:
            plan = repositories.tracking_plans.get(plan_id)
            if plan is None:
                raise NotFoundError(EntityType.TRACKING_PLAN, plan_id)

            if changes.name is not None and changes.name != plan.name:
                clash = repositories.tracking_plans.find_by_name_excluding(changes.name, plan.id)
                if clash is not None:
                    raise UniqueConstraintError(EntityType.TRACKING_PLAN, changes.name)
                plan.name = changes.name

            writer.stage = PlanWriteStage.WRITING_PLAN
            if changes.description is not None:
                plan.description = changes.description
            plan.touch(at=moment)
            repositories.tracking_plans.update(plan)

            if changes.events is not None:
                retired = writer.retire_links(plan, at=moment)
                log.debug("Retired %s event link(s) of tracking plan %s", retired, plan.id)
                writer.write_events(plan, changes.events)

            writer.stage = PlanWriteStage.COMMITTING
            view = TrackingPlanView.from_entity(plan)
            uow.commit()
            writer.stage = PlanWriteStage.COMMITTED
        except Exception:
            stopped_in = writer.abort()
            log.warning(
                "Tracking plan %s update %s: aborted while %s", plan_id, writer.stage, stopped_in
            )
            raise

    log.info("Tracking plan %s (%r) update %s", view.id, view.name, writer.stage)
    return view


def get_tracking_plan(
    plan_id: UUID,
    *,
    unit_of_work_factory: CatalogUnitOfWorkFactory,
) -> TrackingPlanView:
    with unit_of_work_factory() as uow:
        plan = uow.repositories.tracking_plans.get(plan_id)
        if plan is None:
            raise NotFoundError(EntityType.TRACKING_PLAN, plan_id)
        return TrackingPlanView.from_entity(plan)


def list_tracking_plans(
    *,
    unit_of_work_factory: CatalogUnitOfWorkFactory,
) -> list[TrackingPlanView]:
    with unit_of_work_factory() as uow:
        plans = uow.repositories.tracking_plans.list_active()
        return [TrackingPlanView.from_entity(plan) for plan in plans]


def delete_tracking_plan(
    plan_id: UUID,
    *,
    unit_of_work_factory: CatalogUnitOfWorkFactory,
) -> TrackingPlanView:
    """Soft-delete the plan row; its links and the shared catalog are left alone."""

    with unit_of_work_factory() as uow:
        repositories = uow.repositories
        plan = repositories.tracking_plans.get(plan_id)
        if plan is None:
            raise NotFoundError(EntityType.TRACKING_PLAN, plan_id)
        repositories.tracking_plans.soft_delete(plan, at=utcnow())
        view = TrackingPlanView.from_entity(plan)
        uow.commit()

    log.info("Deleted tracking plan %s", plan_id)
    return view
