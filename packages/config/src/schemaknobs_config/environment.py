"""Environment variable override system."""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Mapping, Tuple, Union

from .exceptions import InvalidOverrideError

logger = logging.getLogger(__name__)

OverrideKey = Tuple[str, Union[str, int], str]


class EnvironmentOverrides:
    """Reads configuration overrides from environment variables.

    Environment variable format:
    SCHEMAKNOBS_<TYPE>__<NAME_OR_INDEX>__<ATTRIBUTE>

    Examples:
        - SCHEMAKNOBS_VALIDATORS__DEFAULT__COERCE_VALUE=true
          -> validators[default].coerce_value = True
        - SCHEMAKNOBS_VALIDATORS__0__DATETIME_COERCE_CLASS=iso
          -> validators[0].datetime_coerce_class = "iso"
    """

    ENV_PREFIX = "SCHEMAKNOBS_"
    ENV_SEPARATOR = "__"

    def __init__(self, prefix: str | None = None) -> None:
        self.prefix = prefix or self.ENV_PREFIX

    def get_overrides(self, environ: Mapping[str, str] | None = None) -> Dict[OverrideKey, Any]:
        """Collect all overrides present in the environment.

        Args:
            environ: Environment mapping (defaults to ``os.environ``)

        Returns:
            Dictionary mapping (type, name_or_index, attribute) to typed values
        """
        environ = os.environ if environ is None else environ
        overrides: Dict[OverrideKey, Any] = {}

        for key, value in environ.items():
            if not key.startswith(self.prefix):
                continue
            try:
                overrides[self.parse_env_var(key)] = self.parse_value(value)
            except InvalidOverrideError as e:
                logger.warning(f"Ignoring environment override {key}: {e}")

        return overrides

    def parse_env_var(self, env_var: str) -> OverrideKey:
        """Split an environment variable name into its override key.

        Raises:
            InvalidOverrideError: If the variable does not have three parts
        """
        if not env_var.startswith(self.prefix):
            raise InvalidOverrideError(f"Environment variable must start with {self.prefix}")

        parts = env_var[len(self.prefix):].split(self.ENV_SEPARATOR)
        if len(parts) < 3 or not all(parts):
            raise InvalidOverrideError(
                f"Invalid environment variable format: {env_var}",
                context={"env_var": env_var},
            )

        type_name = parts[0].lower()
        selector = parts[1]
        attribute = self.ENV_SEPARATOR.join(parts[2:]).lower()

        name_or_index: Union[str, int]
        if selector.isdigit() or (selector.startswith("-") and selector[1:].isdigit()):
            name_or_index = int(selector)
        else:
            name_or_index = selector.lower()

        return type_name, name_or_index, attribute

    def to_env_var(self, type_name: str, name_or_index: Union[str, int], attribute: str) -> str:
        """Build the environment variable name for an override key."""
        return self.ENV_SEPARATOR.join(
            [
                f"{self.prefix}{type_name.upper()}",
                str(name_or_index).upper(),
                attribute.upper().replace(".", self.ENV_SEPARATOR),
            ]
        )

    @staticmethod
    def parse_value(value: str) -> Any:
        """Convert an environment string into a bool, int, float or str."""
        lowered = value.lower()
        if lowered in ("true", "yes"):
            return True
        if lowered in ("false", "no"):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value
