"""Schemaknobs Config Package

Named, typed configuration entries loaded from YAML, JSON or dictionaries,
with environment overrides and factory-based object construction.
"""

from .builders import FactoryBase, ObjectBuilder, load_class
from .config import Config, read_document
from .environment import EnvironmentOverrides
from .exceptions import (
    ConfigError,
    ConfigFileNotFoundError,
    ConfigNotFoundError,
    InvalidOverrideError,
)

__version__ = "0.1.0"
__all__ = [
    "Config",
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigNotFoundError",
    "EnvironmentOverrides",
    "FactoryBase",
    "InvalidOverrideError",
    "ObjectBuilder",
    "load_class",
    "read_document",
]
