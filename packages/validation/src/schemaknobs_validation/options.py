"""Validator configuration."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from schemaknobs_config import ConfigError, load_class

from .formats import IsoDateTime

logger = logging.getLogger(__name__)

# Short names accepted for datetime_coerce_class in configuration files
DATETIME_TARGETS: Mapping[str, Any] = {
    "iso": IsoDateTime,
    "none": None,
    "": None,
}


@dataclass(frozen=True)
class ValidatorOptions:
    """Immutable settings handed to a SchemaValidator at construction.

    Attributes:
        coerce_value: Convert numeric and boolean strings (as found in query
            strings or headers) before type checks
        datetime_coerce_class: Date-time coercion target, an object with a
            ``parse(str)`` method or a callable. None leaves date-time strings
            unchanged and unchecked.
    """

    coerce_value: bool = False
    datetime_coerce_class: Any = None

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> ValidatorOptions:
        """Build options from configuration values.

        ``datetime_coerce_class`` may be an object, a short name (``"iso"``,
        ``"none"``) or a dotted import path.

        Raises:
            ConfigError: If the coercion target cannot be loaded
        """
        known = {"coerce_value", "datetime_coerce_class"}
        for key in config:
            if key not in known:
                logger.warning(f"Unknown validator option: {key}")

        target = config.get("datetime_coerce_class")
        if isinstance(target, str):
            target = cls._load_target(target)

        return cls(
            coerce_value=bool(config.get("coerce_value", False)),
            datetime_coerce_class=target,
        )

    @staticmethod
    def _load_target(name: str) -> Any:
        key = name.strip().lower()
        if key in DATETIME_TARGETS:
            return DATETIME_TARGETS[key]
        if "." not in name:
            raise ConfigError(
                f"Unknown date-time coercion target: {name}",
                context={"datetime_coerce_class": name, "known": sorted(DATETIME_TARGETS)},
            )
        return load_class(name.strip())
