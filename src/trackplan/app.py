"""Application entry points returning structured operation results.

Each function loads a parsed JSON payload, runs the matching catalog service inside a
SQLAlchemy unit of work and wraps the outcome in an ``OperationResult``. Domain errors
keep their stable code; malformed documents become ``VALIDATION_ERROR``; anything else
is logged and reported as ``OPERATION_FAILED``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Any
from uuid import UUID

import pydantic

from trackplan.adapters.documents import (
    load_event_changes,
    load_event_draft,
    load_property_changes,
    load_property_draft,
    load_tracking_plan_changes,
    load_tracking_plan_draft,
)
from trackplan.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    is_started,
    startup,
)
from trackplan.domain import catalog
from trackplan.domain.errors import CatalogError, ErrorCode, ValidationError

if TYPE_CHECKING:
    from trackplan.domain.ports.unit_of_work import CatalogUnitOfWorkFactory

log = getLogger(__name__)

type Payload = Mapping[str, Any]
type EntityId = UUID | str


@dataclass(frozen=True, slots=True)
class OperationError:
    code: ErrorCode
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"code": str(self.code), "message": self.message}


@dataclass(frozen=True, slots=True)
class OperationResult[T]:
    success: bool
    data: T | None = None
    error: OperationError | None = None

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {"success": self.success}
        if self.data is not None:
            payload["data"] = _serialize(self.data)
        if self.error is not None:
            payload["error"] = self.error.to_dict()
        return payload


def _serialize(value: object) -> object:
    if isinstance(value, Sequence) and not isinstance(value, str):
        return [_serialize(item) for item in value]
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return value


def _format_schema_error(exc: pydantic.ValidationError) -> str:
    parts: list[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "document"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


def _parse_id(value: EntityId) -> UUID:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(value)
    except ValueError as exc:
        raise ValidationError(f"Invalid id: {value!r}") from exc


def _default_unit_of_work_factory() -> CatalogUnitOfWorkFactory:
    if not is_started():
        startup()
    return SqlAlchemyCatalogUnitOfWork


def _run[T](operation: str, action: Callable[[], T]) -> OperationResult[T]:
    try:
        data = action()
    except CatalogError as exc:
        log.info("%s rejected (%s): %s", operation, exc.code, exc)
        return OperationResult(success=False, error=OperationError(exc.code, str(exc)))
    except pydantic.ValidationError as exc:
        message = _format_schema_error(exc)
        log.info("%s rejected (%s): %s", operation, ErrorCode.VALIDATION, message)
        return OperationResult(
            success=False,
            error=OperationError(ErrorCode.VALIDATION, message),
        )
    except Exception as exc:
        log.exception("%s failed", operation)
        return OperationResult(
            success=False,
            error=OperationError(ErrorCode.OPERATION_FAILED, str(exc) or type(exc).__name__),
        )
    return OperationResult(success=True, data=data)


# Tracking plans --------------------------------------------------------------


def create_tracking_plan(
    payload: Payload,
    *,
    unit_of_work_factory: CatalogUnitOfWorkFactory | None = None,
) -> OperationResult[catalog.TrackingPlanView]:
    def action() -> catalog.TrackingPlanView:
        draft = load_tracking_plan_draft(payload)
        return catalog.create_tracking_plan(
            draft,
            unit_of_work_factory=unit_of_work_factory or _default_unit_of_work_factory(),
        )

    return _run("create_tracking_plan", action)


def update_tracking_plan(
    plan_id: EntityId,
    payload: Payload,
    *,
    unit_of_work_factory: CatalogUnitOfWorkFactory | None = None,
) -> OperationResult[catalog.TrackingPlanView]:
    def action() -> catalog.TrackingPlanView:
        changes = load_tracking_plan_changes(payload)
        return catalog.update_tracking_plan(
            _parse_id(plan_id),
            changes,
            unit_of_work_factory=unit_of_work_factory or _default_unit_of_work_factory(),
        )

    return _run("update_tracking_plan", action)


def get_tracking_plan(
    plan_id: EntityId,
    *,
    unit_of_work_factory: CatalogUnitOfWorkFactory | None = None,
) -> OperationResult[catalog.TrackingPlanView]:
    return _run(
        "get_tracking_plan",
        lambda: catalog.get_tracking_plan(
            _parse_id(plan_id),
            unit_of_work_factory=unit_of_work_factory or _default_unit_of_work_factory(),
        ),
    )


def list_tracking_plans(
    *,
    unit_of_work_factory: CatalogUnitOfWorkFactory | None = None,
) -> OperationResult[list[catalog.TrackingPlanView]]:
    return _run(
        "list_tracking_plans",
        lambda: catalog.list_tracking_plans(
            unit_of_work_factory=unit_of_work_factory or _default_unit_of_work_factory(),
        ),
    )


def delete_tracking_plan(
    plan_id: EntityId,
    *,
    unit_of_work_factory: CatalogUnitOfWorkFactory | None = None,
) -> OperationResult[catalog.TrackingPlanView]:
    return _run(
        "delete_tracking_plan",
        lambda: catalog.delete_tracking_plan(
            _parse_id(plan_id),
            unit_of_work_factory=unit_of_work_factory or _default_unit_of_work_factory(),
        ),
    )


# Events ----------------------------------------------------------------------


def create_event(
    payload: Payload,
    *,
    unit_of_work_factory: CatalogUnitOfWorkFactory | None = None,
) -> OperationResult[catalog.EventView]:
    def action() -> catalog.EventView:
        draft = load_event_draft(payload)
        return catalog.create_event(
            draft,
            unit_of_work_factory=unit_of_work_factory or _default_unit_of_work_factory(),
        )

    return _run("create_event", action)


def get_event(
    event_id: EntityId,
    *,
    unit_of_work_factory: CatalogUnitOfWorkFactory | None = None,
) -> OperationResult[catalog.EventView]:
    return _run(
        "get_event",
        lambda: catalog.get_event(
            _parse_id(event_id),
            unit_of_work_factory=unit_of_work_factory or _default_unit_of_work_factory(),
        ),
    )


def list_events(
    *,
    unit_of_work_factory: CatalogUnitOfWorkFactory | None = None,
) -> OperationResult[list[catalog.EventView]]:
    return _run(
        "list_events",
        lambda: catalog.list_events(
            unit_of_work_factory=unit_of_work_factory or _default_unit_of_work_factory(),
        ),
    )


def update_event(
    event_id: EntityId,
    payload: Payload,
    *,
    unit_of_work_factory: CatalogUnitOfWorkFactory | None = None,
) -> OperationResult[catalog.EventView]:
    def action() -> catalog.EventView:
        changes = load_event_changes(payload)
        return catalog.update_event(
            _parse_id(event_id),
            changes,
            unit_of_work_factory=unit_of_work_factory or _default_unit_of_work_factory(),
        )

    return _run("update_event", action)


def delete_event(
    event_id: EntityId,
    *,
    unit_of_work_factory: CatalogUnitOfWorkFactory | None = None,
) -> OperationResult[catalog.EventView]:
    return _run(
        "delete_event",
        lambda: catalog.delete_event(
            _parse_id(event_id),
            unit_of_work_factory=unit_of_work_factory or _default_unit_of_work_factory(),
        ),
    )


# Properties ------------------------------------------------------------------


def create_property(
    payload: Payload,
    *,
    unit_of_work_factory: CatalogUnitOfWorkFactory | None = None,
) -> OperationResult[catalog.PropertyView]:
    def action() -> catalog.PropertyView:
        draft = load_property_draft(payload)
        return catalog.create_property(
            draft,
            unit_of_work_factory=unit_of_work_factory or _default_unit_of_work_factory(),
        )

    return _run("create_property", action)


def get_property(
    property_id: EntityId,
    *,
    unit_of_work_factory: CatalogUnitOfWorkFactory | None = None,
) -> OperationResult[catalog.PropertyView]:
    return _run(
        "get_property",
        lambda: catalog.get_property(
            _parse_id(property_id),
            unit_of_work_factory=unit_of_work_factory or _default_unit_of_work_factory(),
        ),
    )


def list_properties(
    *,
    unit_of_work_factory: CatalogUnitOfWorkFactory | None = None,
) -> OperationResult[list[catalog.PropertyView]]:
    return _run(
        "list_properties",
        lambda: catalog.list_properties(
            unit_of_work_factory=unit_of_work_factory or _default_unit_of_work_factory(),
        ),
    )


def update_property(
    property_id: EntityId,
    payload: Payload,
    *,
    unit_of_work_factory: CatalogUnitOfWorkFactory | None = None,
) -> OperationResult[catalog.PropertyView]:
    def action() -> catalog.PropertyView:
        changes = load_property_changes(payload)
        return catalog.update_property(
            _parse_id(property_id),
            changes,
            unit_of_work_factory=unit_of_work_factory or _default_unit_of_work_factory(),
        )

    return _run("update_property", action)


def delete_property(
    property_id: EntityId,
    *,
    unit_of_work_factory: CatalogUnitOfWorkFactory | None = None,
) -> OperationResult[catalog.PropertyView]:
    return _run(
        "delete_property",
        lambda: catalog.delete_property(
            _parse_id(property_id),
            unit_of_work_factory=unit_of_work_factory or _default_unit_of_work_factory(),
        ),
    )
