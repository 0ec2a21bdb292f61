"""Domain primitives: natural keys and the validation-rule value object."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, Final, cast

from trackplan.domain.errors import ValidationError

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True)
class NaturalKey:
    """(name, type) tuple that decides Event and Property identity."""

    name: str
    type: str

    def __str__(self) -> str:
        return f"{self.name}:{self.type}"


@dataclass(frozen=True)
class ValidationRules:
    """Fixed record of optional rules attached to a property.

    Values are kept as supplied; ``trackplan.domain.catalog.validation`` decides whether
    they fit the property type before a new property is stored.
    """

    regex: str | None = None
    min: float | None = None
    max: float | None = None
    enum: tuple[str, ...] | None = None
    custom: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.enum, list):
            object.__setattr__(self, "enum", tuple(cast("list[str]", self.enum)))

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> ValidationRules:
        unknown = sorted(set(data) - set(RULE_NAMES))
        if unknown:
            raise ValidationError(f"Unknown validation rule(s): {', '.join(unknown)}")
        values = {name: data.get(name) for name in RULE_NAMES}
        return cls(**values)  # pyright: ignore[reportArgumentType]

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, name) is None for name in RULE_NAMES)

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {}
        for name in RULE_NAMES:
            value = getattr(self, name)
            if value is None:
                continue
            payload[name] = list(value) if isinstance(value, tuple) else value
        return payload


RULE_NAMES: Final[tuple[str, ...]] = tuple(f.name for f in fields(ValidationRules))
