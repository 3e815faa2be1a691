"""Object construction from atomic configurations."""

from __future__ import annotations

import copy
import importlib
from typing import Any, Dict, Type

from .exceptions import ConfigError

# Keys that describe a configuration rather than parameterize the built object
METADATA_KEYS = ("type", "name", "factory", "class")


def load_class(class_path: str) -> Type[Any]:
    """Load a class (or any module attribute) from a dotted path.

    Args:
        class_path: Full path, e.g. ``"schemaknobs_validation.formats.IsoDateTime"``

    Returns:
        The loaded attribute

    Raises:
        ConfigError: If the path is malformed or cannot be imported
    """
    if not isinstance(class_path, str) or "." not in class_path:
        raise ConfigError(f"Invalid class path: {class_path!r}", context={"path": class_path})

    module_path, attr_name = class_path.rsplit(".", 1)
    try:
        module = importlib.import_module(module_path)
    except ImportError as e:
        raise ConfigError(
            f"Failed to import {class_path}: {e}", context={"path": class_path}
        ) from e

    if not hasattr(module, attr_name):
        raise ConfigError(
            f"{attr_name} not found in {module_path}", context={"path": class_path}
        )
    attr: Type[Any] = getattr(module, attr_name)
    return attr


class ObjectBuilder:
    """Builds objects from configuration dictionaries.

    Supports:
        - Factory pattern via a 'factory' attribute (FactoryBase or callable)
        - Direct class instantiation via a 'class' attribute
    """

    def __init__(self) -> None:
        self._factories: Dict[str, Any] = {}

    def build(self, config: Dict[str, Any], **kwargs: Any) -> Any:
        """Build an object from a configuration dictionary.

        Args:
            config: Atomic configuration
            **kwargs: Extra parameters merged over the configuration

        Returns:
            Built object

        Raises:
            ConfigError: If the configuration has neither 'factory' nor 'class'
        """
        config = copy.deepcopy(config)
        config.update(kwargs)

        if "factory" in config:
            return self._build_with_factory(config)
        if "class" in config:
            return self._build_with_class(config)

        raise ConfigError(
            "Configuration must specify either 'class' or 'factory' for object construction",
            context={"name": config.get("name"), "type": config.get("type")},
        )

    def get_factory(self, factory_path: str) -> Any:
        """Load and cache the factory for a dotted path."""
        if factory_path not in self._factories:
            factory_cls = load_class(factory_path)
            try:
                self._factories[factory_path] = factory_cls()
            except TypeError:
                # module-level callable
                self._factories[factory_path] = factory_cls
        return self._factories[factory_path]

    def _build_with_factory(self, config: Dict[str, Any]) -> Any:
        factory_path = config["factory"]
        factory = self.get_factory(factory_path)
        params = _strip_metadata(config)

        if hasattr(factory, "create"):
            return factory.create(**params)
        if callable(factory):
            return factory(**params)
        raise ConfigError(
            f"Factory {factory_path} must have a 'create' method or be callable",
            context={"factory": factory_path},
        )

    def _build_with_class(self, config: Dict[str, Any]) -> Any:
        class_path = config["class"]
        cls = load_class(class_path)
        params = _strip_metadata(config)

        if hasattr(cls, "from_config"):
            return cls.from_config(params)
        try:
            return cls(**params)
        except TypeError as e:
            raise ConfigError(
                f"Failed to instantiate {class_path}: {e}", context={"class": class_path}
            ) from e


def _strip_metadata(config: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in config.items() if k not in METADATA_KEYS}


class FactoryBase:
    """Base class for factory objects.

    Factories that inherit from this should implement the create method.
    """

    def create(self, **config: Any) -> Any:
        """Create an object from configuration parameters."""
        raise NotImplementedError("Subclasses must implement create method")
