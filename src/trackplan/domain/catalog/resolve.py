"""Identity resolution for catalog entities referenced by tracking plans.

A resolver answers "which stored row does this definition mean?": it reuses a non-deleted
entity with the same ``(name, type)``, creates one when none exists, or raises
``ConflictError`` when the stored entity disagrees with the definition. One resolver
instance lives for exactly one unit of work; its table of resolved keys guarantees at most
one insert per identity per operation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from logging import getLogger
from typing import TYPE_CHECKING, ClassVar

from trackplan.domain.catalog.comparison import (
    Difference,
    compare_event,
    compare_property,
    normalize_rules,
)
from trackplan.domain.catalog.validation import validate_rules
from trackplan.domain.errors import ConflictError
from trackplan.domain.model import EntityType, Event, NaturalKey, Property

if TYPE_CHECKING:
    from datetime import datetime

    from trackplan.domain.catalog.definitions import EventDraft, PropertyDraft
    from trackplan.domain.model import CatalogEntity
    from trackplan.domain.ports.persistence import (
        EventRepository,
        NaturalKeyRepository,
        PropertyRepository,
    )

log = getLogger(__name__)


class IdentityResolver[TEntity: CatalogEntity, TDraft: (EventDraft, PropertyDraft)](ABC):
    entity_type: ClassVar[EntityType]

    def __init__(self, repository: NaturalKeyRepository[TEntity], *, now: datetime) -> None:
        self._repository = repository
        self._now = now
        self._resolved: dict[NaturalKey, TEntity] = {}
        self.created = 0
        self.reused = 0

    @abstractmethod
    def _compare(self, existing: TEntity, draft: TDraft) -> Difference | None: ...

    @abstractmethod
    def _build(self, draft: TDraft) -> TEntity: ...

    def resolve(self, draft: TDraft) -> TEntity:
        key = draft.natural_key
        cached = self._resolved.get(key)
        if cached is not None:
            self._ensure_compatible(cached, draft)
            return cached

        existing = self._repository.find_by_natural_key(key)
        if existing is None:
            entity = self._build(draft)
            self._repository.add(entity)
            self._resolved[key] = entity
            self.created += 1
            log.debug("Created %s %s (%s)", self.entity_type, key, entity.id)
            return entity

        self._ensure_compatible(existing, draft)
        self._resolved[key] = existing
        self.reused += 1
        return existing

    def _ensure_compatible(self, existing: TEntity, draft: TDraft) -> None:
        difference = self._compare(existing, draft)
        if difference is None:
            return
        raise ConflictError(
            self.entity_type,
            name=draft.name,
            type_=str(draft.type),
            difference=difference,
        )


class EventResolver(IdentityResolver[Event, "EventDraft"]):
    entity_type: ClassVar[EntityType] = EntityType.EVENT

    def __init__(self, repository: EventRepository, *, now: datetime) -> None:
        super().__init__(repository, now=now)

    def _compare(self, existing: Event, draft: EventDraft) -> Difference | None:
        return compare_event(existing, draft)

    def _build(self, draft: EventDraft) -> Event:
        moment = draft.create_time or self._now
        return Event(
            name=draft.name,
            type=draft.type,
            description=draft.description,
            create_time=moment,
            update_time=moment,
        )


class PropertyResolver(IdentityResolver[Property, "PropertyDraft"]):
    entity_type: ClassVar[EntityType] = EntityType.PROPERTY

    def __init__(self, repository: PropertyRepository, *, now: datetime) -> None:
        super().__init__(repository, now=now)

    def _compare(self, existing: Property, draft: PropertyDraft) -> Difference | None:
        return compare_property(existing, draft)

    def _build(self, draft: PropertyDraft) -> Property:
        validate_rules(draft.validation_rules, draft.type)
        moment = draft.create_time or self._now
        return Property(
            name=draft.name,
            type=draft.type,
            description=draft.description,
            validation_rules=normalize_rules(draft.validation_rules),
            create_time=moment,
            update_time=moment,
        )
