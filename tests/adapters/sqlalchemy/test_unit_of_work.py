from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine

from trackplan.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)
from trackplan.domain.model import Event, EventType
from trackplan.domain.ports.unit_of_work import CatalogRepositories

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine


@pytest.fixture(autouse=True)
def reset_unit_of_work_state() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


def test_sqlalchemy_unit_of_work_requires_startup() -> None:
    with pytest.raises(StartupError):
        SqlAlchemyCatalogUnitOfWork()


def test_startup_requires_force_for_reconfiguration() -> None:
    engine_a = create_engine("sqlite+pysqlite:///:memory:", future=True)
    engine_b = create_engine("sqlite+pysqlite:///:memory:", future=True)

    startup(engine=engine_a, force=True)

    with pytest.raises(StartupError):
        startup(engine=engine_b)

    startup(engine=engine_b, force=True)
    assert configured_engine() is engine_b
    assert is_started()


def test_shutdown_resets_state() -> None:
    startup(engine=create_engine("sqlite+pysqlite:///:memory:", future=True), force=True)

    shutdown()

    assert configured_engine() is None
    assert not is_started()


def test_repositories_unavailable_outside_context(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    uow = SqlAlchemyCatalogUnitOfWork()

    with pytest.raises(StartupError):
        _ = uow.repositories

    with uow:
        assert isinstance(uow.repositories, CatalogRepositories)

    with pytest.raises(StartupError):
        _ = uow.session


def test_unit_of_work_commits_events(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    with SqlAlchemyCatalogUnitOfWork() as uow:
        event = Event(name="Signup", type=EventType.TRACK, description="Signed up")
        uow.repositories.events.add(event)
        uow.commit()
        event_id = event.id

    with SqlAlchemyCatalogUnitOfWork() as uow:
        stored = uow.repositories.events.get(event_id)
        assert stored is not None
        assert stored.name == "Signup"
        assert stored.type is EventType.TRACK


def test_unit_of_work_discards_uncommitted_writes(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    with SqlAlchemyCatalogUnitOfWork() as uow:
        uow.repositories.events.add(
            Event(name="Signup", type=EventType.TRACK, description="Signed up")
        )

    with SqlAlchemyCatalogUnitOfWork() as uow:
        assert uow.repositories.events.list_active() == []


def test_unit_of_work_rolls_back_on_exception(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    with pytest.raises(RuntimeError), SqlAlchemyCatalogUnitOfWork() as uow:
        uow.repositories.events.add(
            Event(name="Signup", type=EventType.TRACK, description="Signed up")
        )
        raise RuntimeError("boom")

    with SqlAlchemyCatalogUnitOfWork() as uow:
        assert uow.repositories.events.list_active() == []
