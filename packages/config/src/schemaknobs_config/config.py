"""Core Config class implementation."""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Union

import yaml  # type: ignore[import-untyped]

from schemaknobs_common import SerializationError

from .builders import ObjectBuilder
from .environment import EnvironmentOverrides
from .exceptions import (
    ConfigError,
    ConfigFileNotFoundError,
    ConfigNotFoundError,
)

logger = logging.getLogger(__name__)


def read_document(path: Union[str, Path]) -> Any:
    """Read a YAML or JSON file into plain Python data.

    Args:
        path: File path; the suffix selects the decoder

    Returns:
        Decoded document (None for an empty YAML file)

    Raises:
        ConfigFileNotFoundError: If the file does not exist
        ConfigError: If the suffix is not supported
        SerializationError: If the file cannot be decoded
    """
    path = Path(path).resolve()
    if not path.exists():
        raise ConfigFileNotFoundError(f"File not found: {path}", context={"path": str(path)})

    suffix = path.suffix.lower()
    with open(path, encoding="utf-8") as f:
        try:
            if suffix in (".yaml", ".yml"):
                return yaml.safe_load(f)
            if suffix == ".json":
                return json.load(f)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise SerializationError(
                f"Cannot decode {path}: {e}",
                context={"path": str(path), "format": suffix.lstrip(".")},
            ) from e

    raise ConfigError(f"Unsupported file format: {suffix}", context={"path": str(path)})


class Config:
    """A configuration made of named atomic configurations grouped by type.

    Sources look like::

        validators:
          - name: default
            factory: schemaknobs_validation.factory.ValidatorFactory
            coerce_value: true
            datetime_coerce_class: iso

    Each entry of a type list is normalized to carry ``type`` and ``name``
    (the list index when unnamed). A single mapping is accepted in place of a
    one-element list.
    """

    def __init__(
        self,
        *sources: Union[str, Path, Mapping[str, Any]],
        use_env: bool = True,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize a Config from one or more sources.

        Args:
            *sources: File paths or dictionaries, loaded in order
            use_env: Apply SCHEMAKNOBS_* environment overrides after loading
            environ: Environment mapping to read overrides from (defaults to os.environ)
        """
        self._data: Dict[str, List[Dict[str, Any]]] = {}
        self._builder = ObjectBuilder()

        for source in sources:
            self.load(source)

        if use_env:
            self.apply_overrides(EnvironmentOverrides().get_overrides(environ))

    @classmethod
    def from_file(cls, path: Union[str, Path], **kwargs: Any) -> "Config":
        return cls(path, **kwargs)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], **kwargs: Any) -> "Config":
        return cls(data, **kwargs)

    def load(self, source: Union[str, Path, Mapping[str, Any]]) -> None:
        """Load configuration from a file path or a mapping."""
        if isinstance(source, Mapping):
            self._load_dict(source)
        elif isinstance(source, (str, Path)):
            data = read_document(source)
            if data:
                if not isinstance(data, Mapping):
                    raise ConfigError(
                        f"Configuration file must contain a mapping: {source}",
                        context={"path": str(source)},
                    )
                self._load_dict(data)
        else:
            raise ConfigError(f"Invalid source type: {type(source)}")

    def _load_dict(self, data: Mapping[str, Any]) -> None:
        for type_name, configs in data.items():
            if not isinstance(configs, list):
                configs = [configs]
            entries = self._data.setdefault(type_name, [])
            for config in configs:
                entries.append(self._normalize(config, type_name, len(entries)))

    @staticmethod
    def _normalize(config: Any, type_name: str, idx: int) -> Dict[str, Any]:
        if not isinstance(config, Mapping):
            raise ConfigError(
                f"Configuration entries must be mappings: {type_name}[{idx}]",
                context={"type": type_name, "index": idx},
            )
        config = copy.deepcopy(dict(config))
        if config.setdefault("type", type_name) != type_name:
            raise ConfigError(
                f"Type mismatch: expected {type_name}, got {config['type']}",
                context={"type": type_name, "index": idx},
            )
        config.setdefault("name", str(idx))
        return config

    def apply_overrides(self, overrides: Mapping[tuple, Any]) -> None:
        """Apply (type, name_or_index, attribute) -> value overrides.

        Overrides naming an unknown configuration are logged and skipped.
        """
        for (type_name, name_or_index, attribute), value in overrides.items():
            try:
                entry = self._find(type_name, name_or_index)
            except ConfigNotFoundError:
                logger.warning(
                    f"Environment override for unknown configuration {type_name}[{name_or_index}]"
                )
                continue
            entry[attribute] = value

    def _find(self, type_name: str, name_or_index: Union[str, int]) -> Dict[str, Any]:
        if type_name not in self._data:
            raise ConfigNotFoundError(f"Type not found: {type_name}", context={"type": type_name})

        configs = self._data[type_name]
        if isinstance(name_or_index, int):
            try:
                return configs[name_or_index]
            except IndexError:
                raise ConfigNotFoundError(
                    f"Index out of range: {type_name}[{name_or_index}]",
                    context={"type": type_name, "index": name_or_index},
                ) from None

        for config in configs:
            if str(config.get("name")).lower() == str(name_or_index).lower():
                return config
        raise ConfigNotFoundError(
            f"Configuration not found: {type_name}[{name_or_index}]",
            context={"type": type_name, "name": name_or_index},
        )

    def get_types(self) -> List[str]:
        return list(self._data.keys())

    def get_names(self, type_name: str) -> List[str]:
        return [config["name"] for config in self._data.get(type_name, [])]

    def get(self, type_name: str, name_or_index: Union[str, int] = 0) -> Dict[str, Any]:
        """Get a copy of a configuration by type and name or index.

        Raises:
            ConfigNotFoundError: If no such configuration exists
        """
        return copy.deepcopy(self._find(type_name, name_or_index))

    def set(self, type_name: str, config: Mapping[str, Any]) -> None:
        """Add a configuration, replacing an existing one with the same name."""
        entries = self._data.setdefault(type_name, [])
        normalized = self._normalize(config, type_name, len(entries))
        for i, existing in enumerate(entries):
            if existing["name"] == normalized["name"]:
                entries[i] = normalized
                return
        entries.append(normalized)

    def build_object(self, type_name: str, name_or_index: Union[str, int] = 0, **kwargs: Any) -> Any:
        """Build the object described by a configuration's 'factory' or 'class'."""
        return self._builder.build(self._find(type_name, name_or_index), **kwargs)

    def get_instance(self, type_name: str, name_or_index: Union[str, int] = 0, **kwargs: Any) -> Any:
        """Build an object if the configuration describes one, else return the config."""
        config = self.get(type_name, name_or_index)
        if "class" in config or "factory" in config:
            return self._builder.build(config, **kwargs)
        return config

    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        return copy.deepcopy(self._data)
