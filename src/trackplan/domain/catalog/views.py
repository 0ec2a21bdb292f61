"""Materialized read models returned by the catalog services.

Views are built while the unit of work is still open so callers never touch lazily
loaded state after the session is gone.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID

    from trackplan.domain.model import (
        Event,
        EventProperty,
        Property,
        TrackingPlan,
        TrackingPlanEvent,
    )


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


@dataclass(frozen=True, slots=True, kw_only=True)
class EventView:
    id: UUID
    name: str
    type: str
    description: str
    create_time: datetime
    update_time: datetime
    is_deleted: bool
    deleted_at: datetime | None

    @classmethod
    def from_entity(cls, event: Event) -> EventView:
        return cls(
            id=event.id,
            name=event.name,
            type=str(event.type),
            description=event.description,
            create_time=event.create_time,
            update_time=event.update_time,
            is_deleted=event.is_deleted,
            deleted_at=event.deleted_at,
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "id": str(self.id),
            "name": self.name,
            "type": self.type,
            "description": self.description,
            "create_time": _isoformat(self.create_time),
            "update_time": _isoformat(self.update_time),
            "is_deleted": self.is_deleted,
            "deleted_at": _isoformat(self.deleted_at),
        }


@dataclass(frozen=True, slots=True, kw_only=True)
class PropertyView:
    id: UUID
    name: str
    type: str
    description: str
    validation_rules: dict[str, object] | None
    create_time: datetime
    update_time: datetime
    is_deleted: bool
    deleted_at: datetime | None

    @classmethod
    def from_entity(cls, prop: Property) -> PropertyView:
        rules = prop.validation_rules
        return cls(
            id=prop.id,
            name=prop.name,
            type=str(prop.type),
            description=prop.description,
            validation_rules=rules.to_dict() if rules is not None else None,
            create_time=prop.create_time,
            update_time=prop.update_time,
            is_deleted=prop.is_deleted,
            deleted_at=prop.deleted_at,
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "id": str(self.id),
            "name": self.name,
            "type": self.type,
            "description": self.description,
            "validation_rules": self.validation_rules,
            "create_time": _isoformat(self.create_time),
            "update_time": _isoformat(self.update_time),
            "is_deleted": self.is_deleted,
            "deleted_at": _isoformat(self.deleted_at),
        }


@dataclass(frozen=True, slots=True, kw_only=True)
class PlanPropertyView:
    id: UUID
    name: str
    type: str
    description: str
    required: bool
    validation_rules: dict[str, object] | None

    @classmethod
    def from_link(cls, link: EventProperty) -> PlanPropertyView:
        prop = link.property
        rules = prop.validation_rules
        return cls(
            id=prop.id,
            name=prop.name,
            type=str(prop.type),
            description=prop.description,
            required=link.required,
            validation_rules=rules.to_dict() if rules is not None else None,
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "id": str(self.id),
            "name": self.name,
            "type": self.type,
            "description": self.description,
            "required": self.required,
            "validation_rules": self.validation_rules,
        }


@dataclass(frozen=True, slots=True, kw_only=True)
class PlanEventView:
    id: UUID
    name: str
    type: str
    description: str
    additional_properties: bool
    properties: tuple[PlanPropertyView, ...]

    @classmethod
    def from_link(cls, link: TrackingPlanEvent) -> PlanEventView:
        event = link.event
        return cls(
            id=event.id,
            name=event.name,
            type=str(event.type),
            description=event.description,
            additional_properties=link.additional_properties,
            properties=tuple(PlanPropertyView.from_link(item) for item in link.properties),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "id": str(self.id),
            "name": self.name,
            "type": self.type,
            "description": self.description,
            "additionalProperties": self.additional_properties,
            "properties": [item.to_dict() for item in self.properties],
        }


@dataclass(frozen=True, slots=True, kw_only=True)
class TrackingPlanView:
    id: UUID
    name: str
    description: str
    create_time: datetime
    update_time: datetime
    is_deleted: bool
    deleted_at: datetime | None
    events: tuple[PlanEventView, ...]

    @classmethod
    def from_entity(cls, plan: TrackingPlan) -> TrackingPlanView:
        return cls(
            id=plan.id,
            name=plan.name,
            description=plan.description,
            create_time=plan.create_time,
            update_time=plan.update_time,
            is_deleted=plan.is_deleted,
            deleted_at=plan.deleted_at,
            events=tuple(PlanEventView.from_link(link) for link in plan.events),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "id": str(self.id),
            "name": self.name,
            "description": self.description,
            "create_time": _isoformat(self.create_time),
            "update_time": _isoformat(self.update_time),
            "is_deleted": self.is_deleted,
            "deleted_at": _isoformat(self.deleted_at),
            "events": [item.to_dict() for item in self.events],
        }
