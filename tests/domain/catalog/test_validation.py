from __future__ import annotations

import pytest

from trackplan.domain.catalog import validate_rules
from trackplan.domain.errors import ErrorCode, ValidationError
from trackplan.domain.model import PropertyType, ValidationRules


def test_validate_rules_accepts_missing_rules() -> None:
    validate_rules(None, PropertyType.STRING)
    validate_rules(ValidationRules(), PropertyType.BOOLEAN)


def test_validate_rules_accepts_well_formed_string_rules() -> None:
    rules = ValidationRules(min=1, max=32, regex="^[a-z_]+$", enum=("free", "pro"))

    validate_rules(rules, PropertyType.STRING)


@pytest.mark.parametrize(
    ("rules", "property_type", "message"),
    [
        (
            ValidationRules(min="invalid"),  # pyright: ignore[reportArgumentType]
            PropertyType.STRING,
            "String property min length must be a number",
        ),
        (
            ValidationRules(max="10"),  # pyright: ignore[reportArgumentType]
            PropertyType.STRING,
            "String property max length must be a number",
        ),
        (
            ValidationRules(regex=42),  # pyright: ignore[reportArgumentType]
            PropertyType.STRING,
            "String property regex must be a string",
        ),
        (
            ValidationRules(min="low"),  # pyright: ignore[reportArgumentType]
            PropertyType.NUMBER,
            "Number property min value must be a number",
        ),
        (
            ValidationRules(max=True),
            PropertyType.NUMBER,
            "Number property max value must be a number",
        ),
        (
            ValidationRules(enum="yes"),  # pyright: ignore[reportArgumentType]
            PropertyType.BOOLEAN,
            "Boolean property enum must be an array",
        ),
        (
            ValidationRules(regex="[invalid-regex("),
            PropertyType.NUMBER,
            "Invalid regex pattern in validation rules",
        ),
    ],
)
def test_validate_rules_rejects_malformed_rules(
    rules: ValidationRules,
    property_type: PropertyType,
    message: str,
) -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_rules(rules, property_type)

    assert str(excinfo.value) == message
    assert excinfo.value.code is ErrorCode.VALIDATION


def test_validate_rules_only_checks_numbers_for_numeric_types() -> None:
    # min/max are not interpreted for booleans
    validate_rules(ValidationRules(min="n/a"), PropertyType.BOOLEAN)  # pyright: ignore[reportArgumentType]


def test_unknown_rule_keys_are_rejected() -> None:
    with pytest.raises(ValidationError, match="Unknown validation rule"):
        ValidationRules.from_mapping({"minimum": 1})
