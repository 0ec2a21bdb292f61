"""Equality-for-reuse between incoming drafts and stored catalog entities."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from trackplan.domain.catalog.definitions import EventDraft, PropertyDraft
    from trackplan.domain.model import Event, Property, ValidationRules


class Difference(StrEnum):
    """Attribute category named in conflict messages."""

    DESCRIPTION = "description"
    VALIDATION_RULES = "validation rules"


def normalize_rules(rules: ValidationRules | None) -> ValidationRules | None:
    """Collapse absent and empty rule sets into ``None``."""

    if rules is None or rules.is_empty:
        return None
    return rules


def compare_event(existing: Event, candidate: EventDraft) -> Difference | None:
    if existing.description != candidate.description:
        return Difference.DESCRIPTION
    return None


def compare_property(existing: Property, candidate: PropertyDraft) -> Difference | None:
    if existing.description != candidate.description:
        return Difference.DESCRIPTION
    if normalize_rules(existing.validation_rules) != normalize_rules(candidate.validation_rules):
        return Difference.VALIDATION_RULES
    return None
