"""Constraint checks shared by the type validators.

Every check returns a ValidationResult and passes the value through untouched
when the schema does not declare the corresponding keyword.
"""

from __future__ import annotations

import re
from typing import Any, Sequence

from .errors import (
    InvalidEnumValue,
    InvalidPattern,
    LessThanMinimum,
    LessThanMinItems,
    LessThanMinLength,
    MoreThanMaximum,
    MoreThanMaxItems,
    MoreThanMaxLength,
    NotUniqueItems,
)
from .result import ValidationResult
from .schema import Schema


def same_value(left: Any, right: Any) -> bool:
    """Value equality that does not confuse booleans with numbers."""
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    return left == right


def check_enum(value: Any, schema: Schema) -> ValidationResult:
    if schema.enum is None:
        return ValidationResult.success(value)

    if any(same_value(value, allowed) for allowed in schema.enum):
        return ValidationResult.success(value)
    return ValidationResult.failure(
        InvalidEnumValue(value, schema.enum, schema.object_reference)
    )


def check_pattern(value: str, schema: Schema) -> ValidationResult:
    """Unanchored search: the value must contain a match.

    A malformed pattern raises ``re.error``.
    """
    if not schema.pattern:
        return ValidationResult.success(value)

    if re.search(schema.pattern, value):
        return ValidationResult.success(value)
    return ValidationResult.failure(
        InvalidPattern(value, schema.pattern, schema.object_reference, schema.example)
    )


def check_length(value: str, schema: Schema) -> ValidationResult:
    """Length in code points; max is checked before min."""
    if schema.max_length is not None and len(value) > schema.max_length:
        return ValidationResult.failure(
            MoreThanMaxLength(value, schema.max_length, schema.object_reference)
        )
    if schema.min_length is not None and len(value) < schema.min_length:
        return ValidationResult.failure(
            LessThanMinLength(value, schema.min_length, schema.object_reference)
        )
    return ValidationResult.success(value)


def check_range(value: Any, schema: Schema) -> ValidationResult:
    """minimum/maximum with OpenAPI 3.0 boolean exclusive flags."""
    reference = schema.object_reference

    if schema.minimum is not None:
        if schema.exclusive_minimum and value <= schema.minimum:
            return ValidationResult.failure(
                LessThanMinimum(value, schema.minimum, reference, exclusive=True)
            )
        if value < schema.minimum:
            return ValidationResult.failure(LessThanMinimum(value, schema.minimum, reference))

    if schema.maximum is not None:
        if schema.exclusive_maximum and value >= schema.maximum:
            return ValidationResult.failure(
                MoreThanMaximum(value, schema.maximum, reference, exclusive=True)
            )
        if value > schema.maximum:
            return ValidationResult.failure(MoreThanMaximum(value, schema.maximum, reference))

    return ValidationResult.success(value)


def check_items_count(value: Sequence[Any], schema: Schema) -> ValidationResult:
    if schema.max_items is not None and len(value) > schema.max_items:
        return ValidationResult.failure(
            MoreThanMaxItems(value, schema.max_items, schema.object_reference)
        )
    if schema.min_items is not None and len(value) < schema.min_items:
        return ValidationResult.failure(
            LessThanMinItems(value, schema.min_items, schema.object_reference)
        )
    return ValidationResult.success(value)


def check_unique_items(value: Sequence[Any], schema: Schema) -> ValidationResult:
    if not schema.unique_items:
        return ValidationResult.success(value)

    # items may be unhashable (dicts, lists)
    for i, item in enumerate(value):
        if any(same_value(item, other) for other in value[i + 1:]):
            return ValidationResult.failure(NotUniqueItems(value, schema.object_reference))
    return ValidationResult.success(value)
