"""Schemaknobs Validation Package

Validates and coerces decoded values (JSON bodies, query strings, headers)
against OpenAPI 3.0 style schema trees:
- Predictable return type (always ValidationResult, errors raised only on request)
- Closed error taxonomy carrying the failing value, schema reference and path
- Discriminator-based polymorphism with first-match-wins variant selection
- Pluggable date-time coercion
"""

from .discriminator import DiscriminatorResolver
from .dispatcher import SchemaValidator, validate
from .errors import (
    InvalidDateFormat,
    InvalidDiscriminatorMapping,
    InvalidEmailFormat,
    InvalidEnumValue,
    InvalidPattern,
    InvalidType,
    InvalidUUIDFormat,
    LessThanMinimum,
    LessThanMinItems,
    LessThanMinLength,
    MoreThanMaximum,
    MoreThanMaxItems,
    MoreThanMaxLength,
    NotAnyOf,
    NotExistDiscriminatorPropertyName,
    NotExistPropertyDefinition,
    NotExistRequiredKey,
    NotNullError,
    NotOneOf,
    NotUniqueItems,
    SchemaValidationError,
    UnsupportedSchemaKind,
    build_error_result,
)
from .factory import (
    SchemaDocumentFactory,
    ValidatorFactory,
    document_factory,
    validator_factory,
)
from .formats import IsoDateTime, MalformedDateTimeError
from .loader import PointerNotFoundError, SchemaDocument, SchemaDocumentError, build_schema
from .options import ValidatorOptions
from .result import ValidationResult
from .schema import Discriminator, Schema, SchemaKind, SchemaRef

__version__ = "0.1.0"

__all__ = [
    # Engine
    "SchemaValidator",
    "validate",
    "ValidatorOptions",
    "DiscriminatorResolver",
    # Result types
    "ValidationResult",
    # Schema model
    "Schema",
    "SchemaKind",
    "SchemaRef",
    "Discriminator",
    # Documents
    "SchemaDocument",
    "SchemaDocumentError",
    "PointerNotFoundError",
    "build_schema",
    # Date-time coercion
    "IsoDateTime",
    "MalformedDateTimeError",
    # Errors
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
    # Factories
    "validator_factory",
    "document_factory",
    "ValidatorFactory",
    "SchemaDocumentFactory",
]
