"""Type-specific checks for property validation rules."""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import TYPE_CHECKING

from trackplan.domain.errors import ValidationError
from trackplan.domain.model import PropertyType

if TYPE_CHECKING:
    from trackplan.domain.model import ValidationRules


def _is_number(value: object) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _require_number(value: object, message: str) -> None:
    if value is not None and not _is_number(value):
        raise ValidationError(message)


def validate_rules(rules: ValidationRules | None, property_type: PropertyType) -> None:
    """Raise ``ValidationError`` when ``rules`` do not fit ``property_type``."""

    if rules is None:
        return

    match property_type:
        case PropertyType.STRING:
            _require_number(rules.min, "String property min length must be a number")
            _require_number(rules.max, "String property max length must be a number")
            if rules.regex is not None and not isinstance(rules.regex, str):
                raise ValidationError("String property regex must be a string")
        case PropertyType.NUMBER:
            _require_number(rules.min, "Number property min value must be a number")
            _require_number(rules.max, "Number property max value must be a number")
        case PropertyType.BOOLEAN:
            if rules.enum is not None and (
                isinstance(rules.enum, str) or not isinstance(rules.enum, Sequence)
            ):
                raise ValidationError("Boolean property enum must be an array")

    if rules.regex is not None:
        try:
            re.compile(rules.regex)
        except (re.error, TypeError) as exc:
            raise ValidationError("Invalid regex pattern in validation rules") from exc
