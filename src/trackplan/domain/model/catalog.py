"""Catalog entities shared by every tracking plan.

Events and properties are identified by ``(name, type)`` and reused across plans; the
plan-scoped flags live on the link entities in ``tracking_plan``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from trackplan.domain.model.entity import SoftDeletableMixin, TimestampedMixin
from trackplan.domain.model.enums import EntityType
from trackplan.domain.model.primitives import NaturalKey

if TYPE_CHECKING:
    from trackplan.domain.model.enums import EventType, PropertyType
    from trackplan.domain.model.primitives import ValidationRules


@dataclass(eq=False, kw_only=True)
class CatalogEntity(TimestampedMixin, SoftDeletableMixin):
    """Shared row shape for events and properties."""

    name: str
    description: str

    @property
    def natural_key(self) -> NaturalKey:
        raise NotImplementedError


@dataclass(eq=False, kw_only=True)
class Event(CatalogEntity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.EVENT

    type: EventType

    @property
    def natural_key(self) -> NaturalKey:
        return NaturalKey(self.name, self.type)


@dataclass(eq=False, kw_only=True)
class Property(CatalogEntity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.PROPERTY

    type: PropertyType
    validation_rules: ValidationRules | None = None

    @property
    def natural_key(self) -> NaturalKey:
        return NaturalKey(self.name, self.type)
