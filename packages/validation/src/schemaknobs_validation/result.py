"""Validation result type with a strict two-outcome contract.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterator

if TYPE_CHECKING:
    from .errors import SchemaValidationError


@dataclass(frozen=True)
class ValidationResult:
    """Result of validating one value against one schema.

    Exactly one outcome is populated: either the (possibly coerced) ``value``
    with no ``error``, or an ``error`` with no value. Results unpack like a
    pair, so ``value, error = validator.validate(data, schema)`` works.
    """

    value: Any = None
    error: SchemaValidationError | None = None

    def __post_init__(self) -> None:
        if self.error is not None and self.value is not None:
            raise ValueError("A ValidationResult carries either a value or an error, not both")

    @property
    def valid(self) -> bool:
        return self.error is None

    def __bool__(self) -> bool:
        """Allow 'if result:' usage to check validity."""
        return self.valid

    def __iter__(self) -> Iterator[Any]:
        return iter((self.value, self.error))

    def unwrap(self) -> Any:
        """Return the coerced value, or raise the carried error.

        Raises:
            SchemaValidationError: If the result is a failure
        """
        if self.error is not None:
            raise self.error
        return self.value

    @classmethod
    def success(cls, value: Any) -> ValidationResult:
        return cls(value=value)

    @classmethod
    def failure(cls, error: SchemaValidationError) -> ValidationResult:
        return cls(error=error)
