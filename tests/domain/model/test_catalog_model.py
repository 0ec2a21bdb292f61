from __future__ import annotations

from datetime import UTC, datetime

from trackplan.domain.model import (
    EntityType,
    Event,
    EventType,
    NaturalKey,
    Property,
    PropertyType,
    TrackingPlan,
    ValidationRules,
)


def test_natural_key_combines_name_and_type() -> None:
    event = Event(name="Signup", type=EventType.TRACK, description="")

    assert event.natural_key == NaturalKey("Signup", "track")
    assert str(event.natural_key) == "Signup:track"
    assert event.natural_key != NaturalKey("Signup", "page")


def test_entity_type_labels() -> None:
    assert EntityType.TRACKING_PLAN.label == "TrackingPlan"
    assert EntityType.EVENT_PROPERTY.label == "EventProperty"
    assert Property(name="x", type=PropertyType.BOOLEAN, description="").entity_type is (
        EntityType.PROPERTY
    )


def test_mark_deleted_is_idempotent() -> None:
    event = Event(name="Signup", type=EventType.TRACK, description="")
    first = datetime(2025, 1, 1, tzinfo=UTC)

    event.mark_deleted(at=first)
    event.mark_deleted(at=datetime(2025, 6, 1, tzinfo=UTC))

    assert event.is_deleted
    assert event.deleted_at == first


def test_plan_views_hide_deleted_links_and_keep_order() -> None:
    plan = TrackingPlan(name="Onboarding", description="")
    signup = Event(name="Signup", type=EventType.TRACK, description="")
    login = Event(name="Login", type=EventType.IDENTIFY, description="")

    first = plan.add_event(signup, additional_properties=False)
    second = plan.add_event(login, additional_properties=True)
    first.mark_deleted()

    assert plan.events == (second,)
    assert not plan.has_event(signup)
    assert plan.has_event(login)


def test_validation_rules_serialise_without_empty_fields() -> None:
    rules = ValidationRules.from_mapping({"enum": ["a", "b"], "regex": "^x"})

    assert rules.enum == ("a", "b")
    assert rules.to_dict() == {"regex": "^x", "enum": ["a", "b"]}
    assert not rules.is_empty
    assert ValidationRules().is_empty
