"""Common base classes for schemaknobs packages.

This package provides the exception hierarchy shared by the config and
validation packages.

Example:
    ```python
    from schemaknobs_common import SchemaknobsError

    raise SchemaknobsError("Something went wrong", context={"details": "here"})
    ```
"""

from schemaknobs_common.exceptions import (
    ConfigurationError,
    NotFoundError,
    SchemaknobsError,
    SerializationError,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    "SchemaknobsError",
    "ValidationError",
    "ConfigurationError",
    "NotFoundError",
    "SerializationError",
]
