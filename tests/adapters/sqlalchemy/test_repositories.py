from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

import pytest
from sqlalchemy.exc import IntegrityError

from trackplan.adapters.sqlalchemy.repositories import (
    SqlAlchemyEventPropertyRepository,
    SqlAlchemyEventRepository,
    SqlAlchemyPropertyRepository,
    SqlAlchemyTrackingPlanEventRepository,
    SqlAlchemyTrackingPlanRepository,
)
from trackplan.domain.errors import UniqueConstraintError
from trackplan.domain.model import (
    Event,
    EventType,
    NaturalKey,
    Property,
    PropertyType,
    TrackingPlan,
    ValidationRules,
)

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)


def _event(name: str = "Signup", type_: EventType = EventType.TRACK) -> Event:
    return Event(name=name, type=type_, description="Signed up")


def test_find_by_natural_key_skips_deleted_rows(sqlite_session: Session) -> None:
    repo = SqlAlchemyEventRepository(sqlite_session)
    deleted = _event()
    repo.add(deleted)
    repo.soft_delete(deleted, at=NOW)

    assert repo.find_by_natural_key(NaturalKey("Signup", "track")) is None

    live = _event()
    repo.add(live)

    assert repo.find_by_natural_key(NaturalKey("Signup", EventType.TRACK)) is live
    assert repo.find_by_natural_key_excluding(NaturalKey("Signup", "track"), live.id) is None


def test_natural_key_is_scoped_by_type(sqlite_session: Session) -> None:
    repo = SqlAlchemyEventRepository(sqlite_session)
    tracked = _event("User Action", EventType.TRACK)
    paged = _event("User Action", EventType.PAGE)
    repo.add(tracked)
    repo.add(paged)

    assert repo.find_by_natural_key(NaturalKey("User Action", "page")) is paged
    assert {event.id for event in repo.list_active()} == {tracked.id, paged.id}


def test_duplicate_live_identity_is_a_unique_constraint_error(sqlite_session: Session) -> None:
    repo = SqlAlchemyEventRepository(sqlite_session)
    repo.add(_event())

    with pytest.raises(UniqueConstraintError) as excinfo:
        repo.add(_event())

    assert str(excinfo.value) == "Event 'Signup:track' already exists"


def test_get_hides_soft_deleted_rows(sqlite_session: Session) -> None:
    repo = SqlAlchemyPropertyRepository(sqlite_session)
    prop = Property(name="plan_tier", type=PropertyType.STRING, description="Tier")
    repo.add(prop)

    assert repo.get(prop.id) is prop

    repo.soft_delete(prop, at=NOW)

    assert repo.get(prop.id) is None
    assert repo.list_active() == []


def test_validation_rules_round_trip_through_json(sqlite_session: Session) -> None:
    repo = SqlAlchemyPropertyRepository(sqlite_session)
    prop = Property(
        name="plan_tier",
        type=PropertyType.STRING,
        description="Tier",
        validation_rules=ValidationRules(enum=("free", "pro"), min=1),
    )
    empty = Property(
        name="referrer",
        type=PropertyType.STRING,
        description="Referrer",
        validation_rules=ValidationRules(),
    )
    repo.add(prop)
    repo.add(empty)
    sqlite_session.commit()
    sqlite_session.expire_all()

    assert repo.get(prop.id).validation_rules == ValidationRules(enum=("free", "pro"), min=1)  # pyright: ignore[reportOptionalMemberAccess]
    assert repo.get(empty.id).validation_rules is None  # pyright: ignore[reportOptionalMemberAccess]


def test_timestamps_come_back_as_utc(sqlite_session: Session) -> None:
    repo = SqlAlchemyEventRepository(sqlite_session)
    event = Event(
        name="Signup",
        type=EventType.TRACK,
        description="Signed up",
        create_time=datetime(2025, 1, 2, 3, 4, 5),  # noqa: DTZ001
    )
    repo.add(event)
    sqlite_session.commit()
    sqlite_session.expire_all()

    stored = repo.get(event.id)
    assert stored is not None
    assert stored.create_time == datetime(2025, 1, 2, 3, 4, 5, tzinfo=UTC)


def test_tracking_plan_name_stays_reserved_after_soft_delete(sqlite_session: Session) -> None:
    repo = SqlAlchemyTrackingPlanRepository(sqlite_session)
    plan = TrackingPlan(name="Onboarding", description="")
    repo.add(plan)
    repo.soft_delete(plan, at=NOW)

    assert repo.find_by_name("Onboarding") is None

    with pytest.raises(UniqueConstraintError, match="TrackingPlan 'Onboarding' already exists"):
        repo.add(TrackingPlan(name="Onboarding", description=""))


def test_renaming_onto_reserved_plan_name_is_a_unique_constraint_error(
    sqlite_session: Session,
) -> None:
    repo = SqlAlchemyTrackingPlanRepository(sqlite_session)
    retired = TrackingPlan(name="Onboarding", description="")
    repo.add(retired)
    repo.soft_delete(retired, at=NOW)
    plan = TrackingPlan(name="Checkout", description="")
    repo.add(plan)

    plan.name = "Onboarding"
    with pytest.raises(UniqueConstraintError, match="TrackingPlan 'Onboarding' already exists"):
        repo.update(plan)


def test_renaming_onto_live_identity_is_a_unique_constraint_error(
    sqlite_session: Session,
) -> None:
    repo = SqlAlchemyEventRepository(sqlite_session)
    repo.add(_event("Signup"))
    other = _event("Login")
    repo.add(other)

    other.name = "Signup"
    with pytest.raises(UniqueConstraintError, match="Event 'Signup:track' already exists"):
        repo.update(other)


def test_non_unique_integrity_errors_propagate(sqlite_session: Session) -> None:
    repo = SqlAlchemyEventRepository(sqlite_session)
    nameless = Event(name=None, type=EventType.TRACK, description="No name")  # pyright: ignore[reportArgumentType]

    with pytest.raises(IntegrityError, match="NOT NULL"):
        repo.add(nameless)


def test_find_by_name_excluding_ignores_own_row(sqlite_session: Session) -> None:
    repo = SqlAlchemyTrackingPlanRepository(sqlite_session)
    plan = TrackingPlan(name="Onboarding", description="")
    repo.add(plan)

    assert repo.find_by_name("Onboarding") is plan
    assert repo.find_by_name_excluding("Onboarding", plan.id) is None


def test_links_persist_with_plan_scoped_flags(sqlite_session: Session) -> None:
    plans = SqlAlchemyTrackingPlanRepository(sqlite_session)
    events = SqlAlchemyEventRepository(sqlite_session)
    properties = SqlAlchemyPropertyRepository(sqlite_session)
    plan_events = SqlAlchemyTrackingPlanEventRepository(sqlite_session)
    event_properties = SqlAlchemyEventPropertyRepository(sqlite_session)

    plan = TrackingPlan(name="Onboarding", description="")
    event = _event()
    prop = Property(name="plan_tier", type=PropertyType.STRING, description="Tier")
    plans.add(plan)
    events.add(event)
    properties.add(prop)
    link = plan.add_event(event, additional_properties=True)
    plan_events.add(link)
    event_properties.add(link.add_property(prop, required=True))
    sqlite_session.commit()
    sqlite_session.expire_all()

    stored = plans.get(plan.id)
    assert stored is not None
    (stored_link,) = stored.events
    assert stored_link.event.id == event.id
    assert stored_link.additional_properties is True
    (stored_property_link,) = stored_link.properties
    assert stored_property_link.property.id == prop.id
    assert stored_property_link.required is True


def test_duplicate_live_link_is_rejected_by_the_store(sqlite_session: Session) -> None:
    plans = SqlAlchemyTrackingPlanRepository(sqlite_session)
    events = SqlAlchemyEventRepository(sqlite_session)
    plan_events = SqlAlchemyTrackingPlanEventRepository(sqlite_session)

    plan = TrackingPlan(name="Onboarding", description="")
    event = _event()
    plans.add(plan)
    events.add(event)
    plan_events.add(plan.add_event(event, additional_properties=False))

    # bypasses the in-memory duplicate check on purpose
    with pytest.raises(UniqueConstraintError, match="TrackingPlanEvent 'Signup:track'"):
        plan_events.add(plan.add_event(event, additional_properties=True))
