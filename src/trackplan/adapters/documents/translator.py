"""Translate validated documents into catalog definitions."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from trackplan.domain.catalog.definitions import (
    EventChanges,
    EventDraft,
    PlanEventDefinition,
    PlanPropertyDefinition,
    PropertyChanges,
    PropertyDraft,
    TrackingPlanChanges,
    TrackingPlanDraft,
)
from trackplan.domain.model import ValidationRules

from .schema import (
    EventCreateDocument,
    EventUpdateDocument,
    PropertyCreateDocument,
    PropertyUpdateDocument,
    TrackingPlanDocument,
    TrackingPlanUpdateDocument,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .schema import PlanEventDocument, PlanPropertyDocument


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _rules(raw: dict[str, Any] | None) -> ValidationRules | None:
    if raw is None:
        return None
    return ValidationRules.from_mapping(raw)


def translate_plan_property(
    document: PlanPropertyDocument,
    *,
    create_time: datetime | None = None,
) -> PlanPropertyDefinition:
    return PlanPropertyDefinition(
        property=PropertyDraft(
            name=document.name,
            type=document.type,
            description=document.description,
            validation_rules=_rules(document.validation_rules),
            create_time=create_time,
        ),
        required=document.required,
    )


def translate_plan_event(
    document: PlanEventDocument,
    *,
    create_time: datetime | None = None,
) -> PlanEventDefinition:
    return PlanEventDefinition(
        event=EventDraft(
            name=document.name,
            type=document.type,
            description=document.description,
            create_time=create_time,
        ),
        additional_properties=document.additional_properties,
        properties=tuple(
            translate_plan_property(item, create_time=create_time) for item in document.properties
        ),
    )


def load_tracking_plan_draft(payload: Mapping[str, object]) -> TrackingPlanDraft:
    document = TrackingPlanDocument.model_validate(payload)
    create_time = _as_utc(document.create_time)
    return TrackingPlanDraft(
        name=document.name,
        description=document.description,
        create_time=create_time,
        events=tuple(
            translate_plan_event(item, create_time=create_time) for item in document.events
        ),
    )


def load_tracking_plan_changes(payload: Mapping[str, object]) -> TrackingPlanChanges:
    document = TrackingPlanUpdateDocument.model_validate(payload)
    events = None
    if document.events is not None:
        events = tuple(translate_plan_event(item) for item in document.events)
    return TrackingPlanChanges(
        name=document.name,
        description=document.description,
        events=events,
    )


def load_event_draft(payload: Mapping[str, object]) -> EventDraft:
    document = EventCreateDocument.model_validate(payload)
    return EventDraft(
        name=document.name,
        type=document.type,
        description=document.description,
        create_time=_as_utc(document.create_time),
    )


def load_event_changes(payload: Mapping[str, object]) -> EventChanges:
    document = EventUpdateDocument.model_validate(payload)
    return EventChanges(name=document.name, type=document.type, description=document.description)


def load_property_draft(payload: Mapping[str, object]) -> PropertyDraft:
    document = PropertyCreateDocument.model_validate(payload)
    return PropertyDraft(
        name=document.name,
        type=document.type,
        description=document.description,
        validation_rules=_rules(document.validation_rules),
        create_time=_as_utc(document.create_time),
    )


def load_property_changes(payload: Mapping[str, object]) -> PropertyChanges:
    document = PropertyUpdateDocument.model_validate(payload)
    return PropertyChanges(
        name=document.name,
        type=document.type,
        description=document.description,
        validation_rules=_rules(document.validation_rules),
    )
