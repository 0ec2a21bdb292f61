"""Domain error kinds surfaced to callers with a stable code."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from uuid import UUID

    from trackplan.domain.model.enums import EntityType


class ErrorCode(StrEnum):
    UNIQUE_CONSTRAINT = "UNIQUE_CONSTRAINT"
    CONFLICT = "CONFLICT"
    VALIDATION = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    OPERATION_FAILED = "OPERATION_FAILED"


class CatalogError(Exception):
    """Base error for catalog operations; recoverable by the caller."""

    code: ClassVar[ErrorCode] = ErrorCode.OPERATION_FAILED


class UniqueConstraintError(CatalogError):
    """An entity with the same identity already exists."""

    code: ClassVar[ErrorCode] = ErrorCode.UNIQUE_CONSTRAINT

    def __init__(self, entity_type: EntityType, value: str) -> None:
        super().__init__(f"{entity_type.label} '{value}' already exists")
        self.entity_type = entity_type
        self.value = value


class ConflictError(CatalogError):
    """An existing entity shares the identity but differs in a compared attribute."""

    code: ClassVar[ErrorCode] = ErrorCode.CONFLICT

    def __init__(
        self,
        entity_type: EntityType,
        *,
        name: str,
        type_: str,
        difference: str,
    ) -> None:
        super().__init__(
            f"{entity_type.label} '{name}' of type '{type_}' already exists "
            f"with different {difference}"
        )
        self.entity_type = entity_type
        self.name = name
        self.type = type_
        self.difference = difference


class ValidationError(CatalogError):
    """A rule set or input document is malformed."""

    code: ClassVar[ErrorCode] = ErrorCode.VALIDATION


class NotFoundError(CatalogError):
    code: ClassVar[ErrorCode] = ErrorCode.NOT_FOUND

    def __init__(self, entity_type: EntityType, entity_id: UUID) -> None:
        super().__init__(f"{entity_type.label} '{entity_id}' not found")
        self.entity_type = entity_type
        self.entity_id = entity_id
