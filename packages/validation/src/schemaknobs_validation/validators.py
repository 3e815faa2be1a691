"""Type validators, one per schema kind plus composition and null handling.

All validators share the ``coerce_and_validate(value, schema, **context)``
contract: the first failing check wins and is returned as a failed
ValidationResult, otherwise the (possibly coerced) value is returned.
Container validators recurse through the owning SchemaValidator and never
mutate their input; they build new lists and dicts.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from numbers import Number
from typing import TYPE_CHECKING, Any, Mapping

from .constraints import (
    check_enum,
    check_items_count,
    check_length,
    check_pattern,
    check_range,
    check_unique_items,
)
from .errors import (
    NotAnyOf,
    NotExistPropertyDefinition,
    NotExistRequiredKey,
    NotNullError,
    NotOneOf,
    build_error_result,
)
from .formats import (
    check_date_format,
    check_email_format,
    check_uuid_format,
    coerce_date_time,
)
from .options import ValidatorOptions
from .result import ValidationResult
from .schema import Schema, SchemaKind, SchemaRef

if TYPE_CHECKING:
    from .dispatcher import SchemaValidator


class TypeValidator(ABC):
    """Abstract base validator."""

    KIND: SchemaKind | None = None

    def __init__(self, validatable: SchemaValidator, options: ValidatorOptions):
        """
        Args:
            validatable: Dispatcher used to validate child values
            options: Immutable validator settings
        """
        self.validatable = validatable
        self.options = options

    @abstractmethod
    def coerce_and_validate(self, value: Any, schema: Schema, **context: Any) -> ValidationResult:
        """Validate ``value`` against ``schema``, returning the coerced value or an error."""
        pass


class StringValidator(TypeValidator):
    """Strings: enum, pattern, date-time coercion, length, then email/uuid/date formats."""

    KIND = SchemaKind.STRING

    def coerce_and_validate(self, value: Any, schema: Schema, **context: Any) -> ValidationResult:
        if not isinstance(value, str):
            return build_error_result(value, schema)

        result = check_enum(value, schema)
        if not result:
            return result

        # pattern only applies to strings
        result = check_pattern(value, schema)
        if not result:
            return result

        coerced: Any = value
        if self.options.datetime_coerce_class is not None:
            result = coerce_date_time(value, schema, self.options.datetime_coerce_class)
            if not result:
                return result
            coerced = result.value

        # the remaining checks read the input text
        for check in (check_length, check_email_format, check_uuid_format, check_date_format):
            result = check(value, schema)
            if not result:
                return result

        return ValidationResult.success(coerced)


class IntegerValidator(TypeValidator):
    KIND = SchemaKind.INTEGER

    def coerce_and_validate(self, value: Any, schema: Schema, **context: Any) -> ValidationResult:
        if self.options.coerce_value:
            value = self._coerce(value)

        if not isinstance(value, int) or isinstance(value, bool):
            return build_error_result(value, schema)

        result = check_enum(value, schema)
        if not result:
            return result
        return check_range(value, schema)

    @staticmethod
    def _coerce(value: Any) -> Any:
        if not isinstance(value, str):
            return value
        try:
            return int(value)
        except ValueError:
            return value


class NumberValidator(TypeValidator):
    """Numbers: integers and floats are both accepted."""

    KIND = SchemaKind.NUMBER

    def coerce_and_validate(self, value: Any, schema: Schema, **context: Any) -> ValidationResult:
        if self.options.coerce_value:
            value = self._coerce(value)

        if not isinstance(value, Number) or isinstance(value, (bool, complex)):
            return build_error_result(value, schema)

        result = check_enum(value, schema)
        if not result:
            return result
        return check_range(value, schema)

    @staticmethod
    def _coerce(value: Any) -> Any:
        if not isinstance(value, str):
            return value
        try:
            return float(value)
        except ValueError:
            return value


class BooleanValidator(TypeValidator):
    KIND = SchemaKind.BOOLEAN

    def coerce_and_validate(self, value: Any, schema: Schema, **context: Any) -> ValidationResult:
        if self.options.coerce_value:
            value = {"true": True, "false": False}.get(value, value) if isinstance(value, str) else value

        if not isinstance(value, bool):
            return build_error_result(value, schema)
        return check_enum(value, schema)


class ArrayValidator(TypeValidator):
    KIND = SchemaKind.ARRAY

    def coerce_and_validate(self, value: Any, schema: Schema, **context: Any) -> ValidationResult:
        if not isinstance(value, (list, tuple)):
            return build_error_result(value, schema)

        for check in (check_items_count, check_unique_items):
            result = check(value, schema)
            if not result:
                return result

        coerced = []
        for idx, item in enumerate(value):
            result = self.validatable.validate_schema(item, schema.items)
            if not result:
                return ValidationResult.failure(result.error.at(idx))
            coerced.append(result.value)

        return ValidationResult.success(coerced)


class ObjectValidator(TypeValidator):
    """Objects: property schemas, unknown keys, then required keys."""

    KIND = SchemaKind.OBJECT

    def coerce_and_validate(
        self,
        value: Any,
        schema: Schema,
        parent_all_of: bool = False,
        discriminator_property_name: str | None = None,
        **context: Any,
    ) -> ValidationResult:
        if not isinstance(value, Mapping):
            return build_error_result(value, schema)

        additional = schema.additional_properties
        coerced = {}
        unknown = []
        for name, item in value.items():
            child = schema.properties.get(name)
            if child is None and isinstance(additional, (Schema, SchemaRef)):
                child = additional
            if child is None:
                if name != discriminator_property_name:
                    unknown.append(name)
                coerced[name] = item
                continue

            result = self.validatable.validate_schema(item, child)
            if not result:
                return ValidationResult.failure(result.error.at(name))
            coerced[name] = result.value

        if unknown and additional is False and not parent_all_of:
            return ValidationResult.failure(
                NotExistPropertyDefinition(unknown, schema.object_reference, value)
            )

        missing = [key for key in schema.required if key not in value]
        if missing:
            return ValidationResult.failure(
                NotExistRequiredKey(missing, schema.object_reference, value)
            )

        return ValidationResult.success(coerced)


class AllOfValidator(TypeValidator):
    """Every sub-schema must accept the value; coerced object fields are merged."""

    def coerce_and_validate(self, value: Any, schema: Schema, **context: Any) -> ValidationResult:
        context["parent_all_of"] = True
        coerced = dict(value) if isinstance(value, Mapping) else value

        for sub_schema in schema.all_of:
            result = self.validatable.validate_schema(value, sub_schema, **context)
            if not result:
                return result

            if isinstance(coerced, dict) and isinstance(result.value, Mapping):
                coerced.update(
                    (key, item) for key, item in result.value.items() if item is not value.get(key)
                )
            elif not isinstance(coerced, dict) and result.value is not value:
                coerced = result.value

        return ValidationResult.success(coerced)


class OneOfValidator(TypeValidator):
    """Exactly one sub-schema must accept the value."""

    def coerce_and_validate(self, value: Any, schema: Schema, **context: Any) -> ValidationResult:
        match = None
        for sub_schema in schema.one_of:
            result = self.validatable.validate_schema(value, sub_schema)
            if not result:
                continue
            if match is not None:
                return ValidationResult.failure(NotOneOf(value, schema.object_reference))
            match = result

        return match or ValidationResult.failure(NotOneOf(value, schema.object_reference))


class AnyOfValidator(TypeValidator):
    """The first sub-schema accepting the value wins."""

    def coerce_and_validate(self, value: Any, schema: Schema, **context: Any) -> ValidationResult:
        for sub_schema in schema.any_of:
            result = self.validatable.validate_schema(value, sub_schema)
            if result:
                return result
        return ValidationResult.failure(NotAnyOf(value, schema.object_reference))


class NilValidator(TypeValidator):
    def coerce_and_validate(self, value: Any, schema: Schema, **context: Any) -> ValidationResult:
        if schema.nullable:
            return ValidationResult.success(None)
        return ValidationResult.failure(NotNullError(schema.object_reference))


class UnspecifiedTypeValidator(TypeValidator):
    """Schemas without a declared type accept any value."""

    def coerce_and_validate(self, value: Any, schema: Schema, **context: Any) -> ValidationResult:
        return ValidationResult.success(value)
