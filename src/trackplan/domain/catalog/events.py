"""Direct CRUD services for events."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from trackplan.domain.catalog.views import EventView
from trackplan.domain.errors import NotFoundError, UniqueConstraintError
from trackplan.domain.model import EntityType, Event, NaturalKey, utcnow

if TYPE_CHECKING:
    from uuid import UUID

    from trackplan.domain.catalog.definitions import EventChanges, EventDraft
    from trackplan.domain.ports.persistence import EventRepository
    from trackplan.domain.ports.unit_of_work import CatalogUnitOfWorkFactory

log = getLogger(__name__)


def create_event(
    draft: EventDraft,
    *,
    unit_of_work_factory: CatalogUnitOfWorkFactory,
) -> EventView:
    moment = draft.create_time or utcnow()
    with unit_of_work_factory() as uow:
        events = uow.repositories.events
        if events.find_by_natural_key(draft.natural_key) is not None:
            raise UniqueConstraintError(EntityType.EVENT, str(draft.natural_key))
        event = Event(
            name=draft.name,
            type=draft.type,
            description=draft.description,
            create_time=moment,
            update_time=moment,
        )
        events.add(event)
        view = EventView.from_entity(event)
        uow.commit()

    log.info("Created event %s (%s)", view.id, draft.natural_key)
    return view


def get_event(event_id: UUID, *, unit_of_work_factory: CatalogUnitOfWorkFactory) -> EventView:
    with unit_of_work_factory() as uow:
        return EventView.from_entity(_require(uow.repositories.events, event_id))


def list_events(*, unit_of_work_factory: CatalogUnitOfWorkFactory) -> list[EventView]:
    with unit_of_work_factory() as uow:
        return [EventView.from_entity(event) for event in uow.repositories.events.list_active()]


def update_event(
    event_id: UUID,
    changes: EventChanges,
    *,
    unit_of_work_factory: CatalogUnitOfWorkFactory,
) -> EventView:
    """Apply ``changes``; a new ``(name, type)`` must not belong to another event."""

    with unit_of_work_factory() as uow:
        events = uow.repositories.events
        event = _require(events, event_id)

        key = NaturalKey(
            changes.name if changes.name is not None else event.name,
            changes.type if changes.type is not None else event.type,
        )
        if key != event.natural_key and events.find_by_natural_key_excluding(key, event.id):
            raise UniqueConstraintError(EntityType.EVENT, str(key))

        if changes.name is not None:
            event.name = changes.name
        if changes.type is not None:
            event.type = changes.type
        if changes.description is not None:
            event.description = changes.description
        event.touch()
        events.update(event)
        view = EventView.from_entity(event)
        uow.commit()

    log.info("Updated event %s", event_id)
    return view


def delete_event(event_id: UUID, *, unit_of_work_factory: CatalogUnitOfWorkFactory) -> EventView:
    """Soft-delete an event; plan links that reference it are left in place."""

    with unit_of_work_factory() as uow:
        events = uow.repositories.events
        event = _require(events, event_id)
        events.soft_delete(event, at=utcnow())
        view = EventView.from_entity(event)
        uow.commit()

    log.info("Deleted event %s", event_id)
    return view


def _require(events: EventRepository, event_id: UUID) -> Event:
    event = events.get(event_id)
    if event is None:
        raise NotFoundError(EntityType.EVENT, event_id)
    return event
