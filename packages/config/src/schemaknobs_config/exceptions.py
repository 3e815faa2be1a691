"""Custom exceptions for the config package.

Built on the common exception framework from schemaknobs_common.
"""

from schemaknobs_common import (
    ConfigurationError,
    NotFoundError,
    ValidationError,
)

ConfigError = ConfigurationError


class ConfigNotFoundError(NotFoundError):
    """Raised when a requested configuration is not found."""

    pass


class ConfigFileNotFoundError(NotFoundError):
    """Raised when a configuration file does not exist."""

    pass


class InvalidOverrideError(ValidationError):
    """Raised when an environment override variable is malformed."""

    pass
