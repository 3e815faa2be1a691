"""Common exception hierarchy for all schemaknobs packages.

Every schemaknobs package raises errors derived from :class:`SchemaknobsError`.
Each error may carry a ``context`` dictionary with structured information about
the failure, so callers can both render a message and inspect the failure
programmatically.

Example:
    ```python
    from schemaknobs_common.exceptions import ValidationError, NotFoundError

    # Simple exception
    raise ValidationError("Invalid email format")

    # Context-rich exception
    raise NotFoundError(
        "Schema not found",
        context={"pointer": "#/components/schemas/Cat"}
    )

    # Catch any schemaknobs error
    try:
        operation()
    except SchemaknobsError as e:
        logger.error(f"Error: {e}")
        if e.context:
            logger.error(f"Context: {e.context}")
    ```

Package-Specific Extensions:
    ```python
    from schemaknobs_common.exceptions import ValidationError

    class InvalidThing(ValidationError):
        '''A value failed a thing-specific check.'''
        def __init__(self, value, reference):
            super().__init__(
                f"{value!r} is not a thing in {reference}",
                context={"value": value, "reference": reference}
            )
    ```
"""

from typing import Any, Dict


class SchemaknobsError(Exception):
    """Base exception for all schemaknobs packages.

    Attributes:
        context: Dictionary containing contextual information about the error
        details: Alias for context

    Args:
        message: Human-readable error message
        context: Optional dictionary with error context (values, references, keys)
        details: Alternative to context (both are supported)

    Example:
        ```python
        error = SchemaknobsError(
            "Operation failed",
            context={"operation": "load", "pointer": "#/components"}
        )
        str(error)
        # 'Operation failed'
        error.context
        # {'operation': 'load', 'pointer': '#/components'}
        ```
    """

    def __init__(
        self,
        message: str,
        context: Dict[str, Any] | None = None,
        details: Dict[str, Any] | None = None,
    ):
        """Initialize the exception with optional context.

        Args:
            message: Error message
            context: Optional context dictionary
            details: Optional details dictionary (takes precedence over context)
        """
        super().__init__(message)
        self.context = details or context or {}
        self.details = self.context


class ValidationError(SchemaknobsError):
    """Raised when a value or a configuration fails validation.

    Every member of the validation engine's error taxonomy derives from this
    class, so ``except ValidationError`` catches all expected validation
    outcomes while leaving programming errors (bad regexes, parser crashes)
    untouched.

    Example:
        ```python
        raise ValidationError(
            "Email format invalid",
            context={"value": "not-an-email", "reference": "#/components/schemas/User"}
        )
        ```
    """

    pass


class ConfigurationError(SchemaknobsError):
    """Raised when configuration is invalid or missing.

    Example:
        ```python
        raise ConfigurationError(
            "Unknown date-time coercion target",
            context={"datetime_coerce_class": "nope.Nothing"}
        )
        ```
    """

    pass


class NotFoundError(SchemaknobsError):
    """Raised when a requested item is not found.

    Common scenarios include a configuration name that is not defined, a
    configuration file that does not exist, or a JSON pointer that does not
    resolve inside a schema document.

    Example:
        ```python
        raise NotFoundError(
            "Pointer does not resolve",
            context={"pointer": "#/components/schemas/Dog"}
        )
        ```
    """

    pass


class SerializationError(SchemaknobsError):
    """Raised when a document cannot be decoded.

    Example:
        ```python
        raise SerializationError(
            "Cannot decode schema document",
            context={"format": "yaml", "path": "petstore.yaml"}
        )
        ```
    """

    pass


__all__ = [
    "SchemaknobsError",
    "ValidationError",
    "ConfigurationError",
    "NotFoundError",
    "SerializationError",
]
