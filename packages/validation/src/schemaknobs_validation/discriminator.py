"""Discriminator-based selection of polymorphic variant schemas."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Mapping, Tuple

from .errors import (
    InvalidDiscriminatorMapping,
    NotExistDiscriminatorPropertyName,
    build_error_result,
)
from .result import ValidationResult
from .schema import Schema, SchemaLike, resolve_schema

if TYPE_CHECKING:
    from .dispatcher import SchemaValidator

logger = logging.getLogger(__name__)


class DiscriminatorResolver:
    """Selects a variant schema from the discriminant value, then validates against it.

    Once the discriminant selects a variant, the outcome of validating against
    that variant is final: no other mapping entry is tried. The owning schema
    is recorded in ``parent_discriminator_schemas`` so a variant that inherits
    it through ``allOf`` does not resolve the discriminator again.
    """

    def __init__(self, validatable: SchemaValidator):
        self.validatable = validatable

    def select_variant(self, value: Any, schema: Schema) -> ValidationResult:
        """Pick the variant schema for ``value``.

        Returns:
            A successful result whose value is the selected Schema, or a failure
            (InvalidType, NotExistDiscriminatorPropertyName, InvalidDiscriminatorMapping)
        """
        discriminator = schema.discriminator
        reference = discriminator.object_reference or schema.object_reference

        if not isinstance(value, Mapping):
            return build_error_result(value, schema, expected=schema.type or "object")

        property_name = discriminator.property_name
        if property_name not in value:
            return ValidationResult.failure(
                NotExistDiscriminatorPropertyName(value, property_name, reference)
            )

        discriminant = value[property_name]
        if not isinstance(discriminant, str):
            return ValidationResult.failure(
                InvalidDiscriminatorMapping(value, property_name, discriminant, reference)
            )

        target = discriminator.mapping.get(discriminant)
        if target is None and not discriminator.mapping:
            target = self._implicit_target(discriminant, schema)
        if target is None:
            return ValidationResult.failure(
                InvalidDiscriminatorMapping(value, property_name, discriminant, reference)
            )

        variant = resolve_schema(target)
        logger.debug(
            f"Discriminator {property_name}={discriminant!r} in {reference} "
            f"selected {variant.object_reference}"
        )
        return ValidationResult.success(variant)

    def coerce_and_validate(
        self,
        value: Any,
        schema: Schema,
        parent_discriminator_schemas: Tuple[Schema, ...] = (),
        **context: Any,
    ) -> ValidationResult:
        selected = self.select_variant(value, schema)
        if not selected:
            return selected

        return self.validatable.validate_schema(
            value,
            selected.value,
            parent_discriminator_schemas=parent_discriminator_schemas + (schema,),
            discriminator_property_name=schema.discriminator.property_name,
        )

    @staticmethod
    def _implicit_target(discriminant: str, schema: Schema) -> SchemaLike | None:
        """Without an explicit mapping, the value names a oneOf/anyOf candidate's component."""
        candidates = (schema.one_of or ()) + (schema.any_of or ())
        for candidate in candidates:
            reference = candidate.object_reference or ""
            if reference.rsplit("/", 1)[-1] == discriminant:
                return candidate
        return None
