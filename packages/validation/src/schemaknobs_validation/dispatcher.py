"""Entry point of the validation engine."""

from __future__ import annotations

import logging
from typing import Any, Dict, Tuple

from .discriminator import DiscriminatorResolver
from .errors import UnsupportedSchemaKind
from .options import ValidatorOptions
from .result import ValidationResult
from .schema import Schema, SchemaKind, SchemaLike, resolve_schema
from .validators import (
    AllOfValidator,
    AnyOfValidator,
    ArrayValidator,
    BooleanValidator,
    IntegerValidator,
    NilValidator,
    NumberValidator,
    ObjectValidator,
    OneOfValidator,
    StringValidator,
    TypeValidator,
    UnspecifiedTypeValidator,
)

logger = logging.getLogger(__name__)


class SchemaValidator:
    """Routes (value, schema) pairs to the matching type validator.

    A SchemaValidator holds only its immutable options and stateless
    validators, so one instance can serve concurrent calls against a shared
    schema tree.

    Example:
        ```python
        validator = SchemaValidator(ValidatorOptions(datetime_coerce_class=IsoDateTime))
        value, error = validator.validate(body, document.schema("#/components/schemas/Pet"))
        ```
    """

    def __init__(self, options: ValidatorOptions | None = None):
        self.options = options or ValidatorOptions()

        self._type_validators = self._build_type_validators()
        missing = set(SchemaKind) - set(self._type_validators)
        if missing:
            raise NotImplementedError(f"No validator for schema kinds: {sorted(missing)}")

        self._composition_validators: Dict[str, TypeValidator] = {
            "allOf": AllOfValidator(self, self.options),
            "oneOf": OneOfValidator(self, self.options),
            "anyOf": AnyOfValidator(self, self.options),
        }
        self._nil_validator = NilValidator(self, self.options)
        self._unspecified_validator = UnspecifiedTypeValidator(self, self.options)
        self._discriminator = DiscriminatorResolver(self)

    def _build_type_validators(self) -> Dict[SchemaKind, TypeValidator]:
        """The validator for each SchemaKind; every kind must be covered."""
        return {
            SchemaKind.STRING: StringValidator(self, self.options),
            SchemaKind.INTEGER: IntegerValidator(self, self.options),
            SchemaKind.NUMBER: NumberValidator(self, self.options),
            SchemaKind.BOOLEAN: BooleanValidator(self, self.options),
            SchemaKind.ARRAY: ArrayValidator(self, self.options),
            SchemaKind.OBJECT: ObjectValidator(self, self.options),
        }

    def validate(self, value: Any, schema: SchemaLike | None) -> ValidationResult:
        """Validate and coerce ``value`` against ``schema``.

        Returns:
            ValidationResult holding the coerced value or the first error found
        """
        return self.validate_schema(value, schema)

    def validate_or_raise(self, value: Any, schema: SchemaLike | None) -> Any:
        """Like validate(), but returns the coerced value and raises the error.

        Raises:
            SchemaValidationError: The first validation error found
        """
        return self.validate(value, schema).unwrap()

    def validate_schema(
        self,
        value: Any,
        schema: SchemaLike | None,
        parent_discriminator_schemas: Tuple[Schema, ...] = (),
        **context: Any,
    ) -> ValidationResult:
        """Dispatch one validation step; used by validators to recurse."""
        schema = resolve_schema(schema)
        if schema is None:
            return ValidationResult.success(value)

        if value is None and schema.nullable:
            return ValidationResult.success(None)

        if schema.discriminator is not None and not any(
            parent is schema for parent in parent_discriminator_schemas
        ):
            return self._discriminator.coerce_and_validate(
                value, schema, parent_discriminator_schemas=parent_discriminator_schemas
            )

        context["parent_discriminator_schemas"] = parent_discriminator_schemas
        validator = self.validator_for(value, schema)
        if validator is None:
            logger.debug(f"Unsupported schema type {schema.type!r} in {schema.object_reference}")
            return ValidationResult.failure(
                UnsupportedSchemaKind(value, schema.type, schema.object_reference)
            )
        return validator.coerce_and_validate(value, schema, **context)

    def validator_for(self, value: Any, schema: Schema) -> TypeValidator | None:
        """The validator responsible for ``value`` under ``schema``, or None."""
        composition = schema.composition
        if composition is not None:
            return self._composition_validators[composition]
        if value is None:
            return self._nil_validator
        if schema.type is None:
            return self._unspecified_validator
        kind = schema.kind
        if kind is None:
            return None
        return self._type_validators[kind]


def validate(
    value: Any, schema: SchemaLike | None, options: ValidatorOptions | None = None
) -> ValidationResult:
    """Validate ``value`` against ``schema`` with a fresh SchemaValidator."""
    return SchemaValidator(options).validate(value, schema)
