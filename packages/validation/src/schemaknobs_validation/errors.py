"""Error taxonomy for schema validation.

Every expected validation failure is one of the classes below. They all derive
from :class:`SchemaValidationError` (a ``schemaknobs_common.ValidationError``),
carry the offending ``value``, the ``reference`` of the failing schema node and
the ``path`` of the value inside the validated document, and render a
deterministic message.

Errors are returned inside a :class:`~schemaknobs_validation.result.ValidationResult`
and only raised when a caller asks for it (``ValidationResult.unwrap``).
Anything that is not a taxonomy error (a malformed regex, an unexpected parser
exception) is a programming or environment error and propagates unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Sequence, Tuple, Union

from schemaknobs_common import ValidationError

from .result import ValidationResult

if TYPE_CHECKING:
    from .schema import Schema

PathSegment = Union[str, int]


class SchemaValidationError(ValidationError):
    """Base class of the validation error taxonomy."""

    def __init__(
        self,
        message: str,
        value: Any = None,
        reference: str | None = None,
        path: Sequence[PathSegment] = (),
        **context: Any,
    ):
        self.value = value
        self.reference = reference
        self.path: Tuple[PathSegment, ...] = tuple(path)
        super().__init__(
            message,
            context={"value": value, "reference": reference, "path": self.path, **context},
        )

    @property
    def message(self) -> str:
        return str(self)

    @property
    def location(self) -> str:
        """JSON pointer of the failing value inside the validated document."""
        return "".join(
            "/" + str(segment).replace("~", "~0").replace("/", "~1") for segment in self.path
        )

    def at(self, segment: PathSegment) -> SchemaValidationError:
        """Return a copy of this error located one level deeper under ``segment``."""
        clone = self.__class__.__new__(self.__class__)
        clone.__dict__.update(self.__dict__)
        Exception.__init__(clone, *self.args)
        clone.path = (segment,) + self.path
        clone.context = {**self.context, "path": clone.path}
        clone.details = clone.context
        return clone

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": type(self).__name__,
            "message": str(self),
            "location": self.location,
            **self.context,
        }


class InvalidType(SchemaValidationError):
    """Value's runtime kind does not match the schema's declared type."""

    def __init__(self, value: Any, expected: str | None, reference: str | None, **kwargs: Any):
        self.expected = expected
        super().__init__(
            f"{value!r} class is {type(value).__name__} but it's not valid {expected} in {reference}",
            value,
            reference,
            expected=expected,
            **kwargs,
        )


class InvalidEnumValue(SchemaValidationError):
    """Value is not a member of the schema's enum."""

    def __init__(self, value: Any, allowed: Iterable[Any], reference: str | None, **kwargs: Any):
        self.allowed = tuple(allowed)
        super().__init__(
            f"{value!r} isn't part of the enum in {reference}",
            value,
            reference,
            allowed=self.allowed,
            **kwargs,
        )


class InvalidPattern(SchemaValidationError):
    """String does not contain a match for the schema's pattern."""

    def __init__(
        self,
        value: Any,
        pattern: str,
        reference: str | None,
        example: Any = None,
        **kwargs: Any,
    ):
        self.pattern = pattern
        self.example = example
        message = f"{reference} pattern {pattern} does not match value: {value!r}"
        if example is not None:
            message += f", example: {example}"
        super().__init__(message, value, reference, pattern=pattern, **kwargs)


class MoreThanMaxLength(SchemaValidationError):
    def __init__(self, value: Any, max_length: int, reference: str | None, **kwargs: Any):
        self.max_length = max_length
        super().__init__(
            f"{reference} {value!r} is longer than max length",
            value,
            reference,
            max_length=max_length,
            **kwargs,
        )


class LessThanMinLength(SchemaValidationError):
    def __init__(self, value: Any, min_length: int, reference: str | None, **kwargs: Any):
        self.min_length = min_length
        super().__init__(
            f"{reference} {value!r} is shorter than min length",
            value,
            reference,
            min_length=min_length,
            **kwargs,
        )


class InvalidEmailFormat(SchemaValidationError):
    def __init__(self, value: Any, reference: str | None, **kwargs: Any):
        super().__init__(
            f"{reference} email address format does not match value: {value!r}",
            value,
            reference,
            **kwargs,
        )


class InvalidUUIDFormat(SchemaValidationError):
    def __init__(self, value: Any, reference: str | None, **kwargs: Any):
        super().__init__(
            f"{reference} Value: {value!r} is not conformant with UUID format",
            value,
            reference,
            **kwargs,
        )


class InvalidDateFormat(SchemaValidationError):
    def __init__(self, value: Any, reference: str | None, **kwargs: Any):
        super().__init__(
            f"{reference} Value: {value!r} is not conformant with date format",
            value,
            reference,
            **kwargs,
        )


class InvalidDiscriminatorMapping(SchemaValidationError):
    """Discriminant value is not a string or selects no variant schema."""

    def __init__(
        self,
        value: Any,
        property_name: str,
        discriminant: Any,
        reference: str | None,
        message: str | None = None,
        **kwargs: Any,
    ):
        self.property_name = property_name
        self.discriminant = discriminant
        if message is None:
            if isinstance(discriminant, str):
                message = (
                    f"discriminator mapped schema for {property_name}={discriminant!r} "
                    f"does not exist in {reference}"
                )
            else:
                message = (
                    f"discriminator propertyName {property_name} value {discriminant!r} "
                    f"is not a string in {reference}"
                )
        super().__init__(
            message,
            value,
            reference,
            property_name=property_name,
            discriminant=discriminant,
            **kwargs,
        )


class NotExistDiscriminatorPropertyName(InvalidDiscriminatorMapping):
    """The value lacks the property named by the discriminator."""

    def __init__(self, value: Any, property_name: str, reference: str | None, **kwargs: Any):
        super().__init__(
            value,
            property_name,
            None,
            reference,
            message=(
                f"discriminator propertyName {property_name} does not exist "
                f"in value {value!r} in {reference}"
            ),
            **kwargs,
        )


class NotExistRequiredKey(SchemaValidationError):
    """Required properties are absent from the value."""

    def __init__(self, keys: Sequence[str], reference: str | None, value: Any = None, **kwargs: Any):
        self.keys = tuple(keys)
        super().__init__(
            f"required parameters {','.join(self.keys)} not exist in {reference}",
            value,
            reference,
            keys=self.keys,
            **kwargs,
        )


class UnsupportedSchemaKind(SchemaValidationError):
    """The schema declares a type no validator handles."""

    def __init__(self, value: Any, declared_type: Any, reference: str | None, **kwargs: Any):
        self.declared_type = declared_type
        super().__init__(
            f"{reference} schema type {declared_type!r} is not supported",
            value,
            reference,
            declared_type=declared_type,
            **kwargs,
        )


class NotNullError(SchemaValidationError):
    def __init__(self, reference: str | None, **kwargs: Any):
        super().__init__(f"{reference} does not allow null values", None, reference, **kwargs)


class NotExistPropertyDefinition(SchemaValidationError):
    """Keys are present that the schema does not define (additionalProperties: false)."""

    def __init__(self, keys: Sequence[str], reference: str | None, value: Any = None, **kwargs: Any):
        self.keys = tuple(keys)
        super().__init__(
            f"properties {','.join(self.keys)} are not defined in {reference}",
            value,
            reference,
            keys=self.keys,
            **kwargs,
        )


class LessThanMinimum(SchemaValidationError):
    def __init__(
        self, value: Any, minimum: Any, reference: str | None, exclusive: bool = False, **kwargs: Any
    ):
        self.minimum = minimum
        self.exclusive = exclusive
        bound = "exclusive minimum" if exclusive else "minimum"
        super().__init__(
            f"{reference} {value!r} is less than {bound} value {minimum!r}",
            value,
            reference,
            minimum=minimum,
            exclusive=exclusive,
            **kwargs,
        )


class MoreThanMaximum(SchemaValidationError):
    def __init__(
        self, value: Any, maximum: Any, reference: str | None, exclusive: bool = False, **kwargs: Any
    ):
        self.maximum = maximum
        self.exclusive = exclusive
        bound = "exclusive maximum" if exclusive else "maximum"
        super().__init__(
            f"{reference} {value!r} is more than {bound} value {maximum!r}",
            value,
            reference,
            maximum=maximum,
            exclusive=exclusive,
            **kwargs,
        )


class LessThanMinItems(SchemaValidationError):
    def __init__(self, value: Any, min_items: int, reference: str | None, **kwargs: Any):
        self.min_items = min_items
        super().__init__(
            f"{reference} {value!r} contains fewer than min items",
            value,
            reference,
            min_items=min_items,
            **kwargs,
        )


class MoreThanMaxItems(SchemaValidationError):
    def __init__(self, value: Any, max_items: int, reference: str | None, **kwargs: Any):
        self.max_items = max_items
        super().__init__(
            f"{reference} {value!r} contains more than max items",
            value,
            reference,
            max_items=max_items,
            **kwargs,
        )


class NotUniqueItems(SchemaValidationError):
    def __init__(self, value: Any, reference: str | None, **kwargs: Any):
        super().__init__(
            f"{reference} {value!r} contains duplicate items", value, reference, **kwargs
        )


class NotOneOf(SchemaValidationError):
    def __init__(self, value: Any, reference: str | None, **kwargs: Any):
        super().__init__(f"{value!r} isn't one of in {reference}", value, reference, **kwargs)


class NotAnyOf(SchemaValidationError):
    def __init__(self, value: Any, reference: str | None, **kwargs: Any):
        super().__init__(f"{value!r} isn't any of in {reference}", value, reference, **kwargs)


def build_error_result(value: Any, schema: Schema, expected: str | None = None) -> ValidationResult:
    """Standard type-mismatch failure for ``value`` against ``schema``.

    Used for runtime kind mismatches and for malformed date-time strings.
    """
    return ValidationResult.failure(
        InvalidType(value, expected or schema.type, schema.object_reference)
    )


__all__ = [
    "SchemaValidationError",
    "InvalidType",
    "InvalidEnumValue",
    "InvalidPattern",
    "MoreThanMaxLength",
    "LessThanMinLength",
    "InvalidEmailFormat",
    "InvalidUUIDFormat",
    "InvalidDateFormat",
    "InvalidDiscriminatorMapping",
    "NotExistDiscriminatorPropertyName",
    "NotExistRequiredKey",
    "UnsupportedSchemaKind",
    "NotNullError",
    "NotExistPropertyDefinition",
    "LessThanMinimum",
    "MoreThanMaximum",
    "LessThanMinItems",
    "MoreThanMaxItems",
    "NotUniqueItems",
    "NotOneOf",
    "NotAnyOf",
    "build_error_result",
]
