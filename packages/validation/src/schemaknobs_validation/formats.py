"""Format validators for string schemas.

Each check is a no-op unless ``schema.format`` names it. Only the date-time
check changes the value: with a coercion target configured, a valid date-time
string is replaced by the parsed object.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Callable

from .errors import (
    InvalidDateFormat,
    InvalidEmailFormat,
    InvalidUUIDFormat,
    build_error_result,
)
from .result import ValidationResult
from .schema import Schema

# Mail-to address grammar: dot-atom local part, hostname labels of at most 63 chars
EMAIL_REGEXP = re.compile(
    r"[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*"
)

UUID_REGEXP = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}", re.IGNORECASE
)

DATE_REGEXP = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")

DATE_TIME_REGEXP = re.compile(
    r"(?P<date>[0-9]{4}-[0-9]{2}-[0-9]{2})"
    r"[Tt ]"
    r"(?P<time>[0-9]{2}:[0-9]{2}:[0-9]{2})"
    r"(?:\.(?P<fraction>[0-9]+))?"
    r"(?P<offset>[Zz]|[+-][0-9]{2}:?[0-9]{2})"
)

# ValueError messages that describe bad input rather than a broken parser
_MALFORMED_MESSAGE = re.compile(
    r"invalid (iso)?(date|format)|invalid isoformat string|out of range|unknown string format"
    r"|does not match format",
    re.IGNORECASE,
)


class MalformedDateTimeError(ValueError):
    """Raised by date-time coercion targets for syntactically bad input."""

    pass


class IsoDateTime:
    """Date-time coercion target for ISO-8601 / RFC 3339 date-times.

    Requires a date, a time and an offset (``Z`` or ``+hh:mm``); fractional
    seconds are optional and truncated to microseconds.
    """

    @staticmethod
    def parse(value: str) -> datetime:
        match = DATE_TIME_REGEXP.fullmatch(value)
        if match is None:
            raise MalformedDateTimeError(f"invalid date-time: {value!r}")

        fraction = (match.group("fraction") or "")[:6].ljust(6, "0")
        offset = match.group("offset")
        if offset in ("Z", "z"):
            offset = "+00:00"
        elif ":" not in offset:
            offset = f"{offset[:3]}:{offset[3:]}"

        try:
            return datetime.fromisoformat(
                f"{match.group('date')}T{match.group('time')}.{fraction}{offset}"
            )
        except ValueError as e:
            raise MalformedDateTimeError(f"invalid date-time: {value!r} ({e})") from e


def is_malformed_date_time(error: ValueError) -> bool:
    """Whether a parser's ValueError reports malformed input."""
    return isinstance(error, MalformedDateTimeError) or bool(
        _MALFORMED_MESSAGE.search(str(error))
    )


def coercion_function(datetime_coerce_class: Any) -> Callable[[str], Any]:
    """The callable used to parse with a coercion target.

    Targets expose ``parse(str)`` (like :class:`IsoDateTime`) or are callables.
    """
    parse = getattr(datetime_coerce_class, "parse", None)
    if callable(parse):
        return parse
    if callable(datetime_coerce_class):
        return datetime_coerce_class
    raise TypeError(f"{datetime_coerce_class!r} is not a usable date-time coercion target")


def coerce_date_time(value: str, schema: Schema, datetime_coerce_class: Any) -> ValidationResult:
    """Replace a date-time string with the coercion target's parsed value.

    Malformed input yields the standard type-mismatch failure. Any other
    exception raised by the target propagates.
    """
    if schema.format != "date-time":
        return ValidationResult.success(value)

    try:
        return ValidationResult.success(coercion_function(datetime_coerce_class)(value))
    except ValueError as e:
        if not is_malformed_date_time(e):
            raise
    return build_error_result(value, schema, expected="date-time")


def check_email_format(value: str, schema: Schema) -> ValidationResult:
    if schema.format != "email":
        return ValidationResult.success(value)

    if EMAIL_REGEXP.fullmatch(value):
        return ValidationResult.success(value)
    return ValidationResult.failure(InvalidEmailFormat(value, schema.object_reference))


def check_uuid_format(value: str, schema: Schema) -> ValidationResult:
    if schema.format != "uuid":
        return ValidationResult.success(value)

    if UUID_REGEXP.fullmatch(value):
        return ValidationResult.success(value)
    return ValidationResult.failure(InvalidUUIDFormat(value, schema.object_reference))


def check_date_format(value: str, schema: Schema) -> ValidationResult:
    """Strict ``YYYY-MM-DD`` with calendar validation (no Feb 30)."""
    if schema.format != "date":
        return ValidationResult.success(value)

    match = DATE_REGEXP.fullmatch(value)
    if match is not None:
        try:
            date(*(int(part) for part in match.groups()))
            return ValidationResult.success(value)
        except ValueError:
            pass
    return ValidationResult.failure(InvalidDateFormat(value, schema.object_reference))
