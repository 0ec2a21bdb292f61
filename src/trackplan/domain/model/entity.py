"""
Base building blocks:
identity, timestamps and soft-delete bookkeeping.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, ClassVar
from uuid import UUID, uuid4

if TYPE_CHECKING:
    from trackplan.domain.model.enums import EntityType


def new_id() -> UUID:
    return uuid4()


def utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(eq=False, kw_only=True)
class Entity:
    """Internal identity exists immediately in the domain."""

    id: UUID = field(default_factory=new_id)

    # class-level discriminator; subclasses must override
    ENTITY_TYPE: ClassVar[EntityType]

    @property
    def entity_type(self) -> EntityType:
        return self.ENTITY_TYPE


@dataclass(eq=False, kw_only=True)
class SoftDeletableMixin(Entity):
    """Rows are never hard-deleted; lookups skip anything flagged here."""

    is_deleted: bool = False
    deleted_at: datetime | None = None

    def mark_deleted(self, *, at: datetime | None = None) -> None:
        if self.is_deleted:
            return
        self.is_deleted = True
        self.deleted_at = at or utcnow()


@dataclass(eq=False, kw_only=True)
class TimestampedMixin(Entity):
    create_time: datetime = field(default_factory=utcnow)
    update_time: datetime = field(default_factory=utcnow)

    def touch(self, *, at: datetime | None = None) -> None:
        self.update_time = at or utcnow()
