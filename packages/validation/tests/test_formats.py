"""Tests for format checks and date-time coercion helpers."""

from datetime import datetime, timedelta, timezone

import pytest

from schemaknobs_validation import (
    InvalidDateFormat,
    InvalidEmailFormat,
    InvalidType,
    InvalidUUIDFormat,
    IsoDateTime,
    MalformedDateTimeError,
    Schema,
)
from schemaknobs_validation.formats import (
    check_date_format,
    check_email_format,
    check_uuid_format,
    coerce_date_time,
    coercion_function,
    is_malformed_date_time,
)


def schema_with(fmt):
    return Schema(type="string", format=fmt, object_reference="#/f")


class TestEmail:
    @pytest.mark.parametrize(
        "value",
        ["user@example.com", "first.last+tag@sub.example.org", "x@localhost", "o'brien@example.ie"],
    )
    def test_valid(self, value):
        assert check_email_format(value, schema_with("email")).valid

    @pytest.mark.parametrize(
        "value",
        ["not-an-email", "@example.com", "user@", "user@-example.com", "user@exa mple.com", ""],
    )
    def test_invalid(self, value):
        _, error = check_email_format(value, schema_with("email"))
        assert isinstance(error, InvalidEmailFormat)
        assert error.value == value

    def test_label_length(self):
        """Hostname labels are limited to 63 characters."""
        schema = schema_with("email")
        assert check_email_format(f"u@{'a' * 63}.com", schema).valid
        assert not check_email_format(f"u@{'a' * 64}.com", schema).valid

    def test_other_format_skipped(self):
        assert check_email_format("not-an-email", schema_with("uuid")).valid


class TestUUID:
    def test_valid(self):
        assert check_uuid_format("550e8400-e29b-41d4-a716-446655440000", schema_with("uuid")).valid

    def test_case_insensitive(self):
        assert check_uuid_format("550E8400-E29B-41D4-A716-446655440000", schema_with("uuid")).valid

    @pytest.mark.parametrize(
        "value",
        [
            "not-a-uuid",
            "550e8400e29b41d4a716446655440000",
            "550e8400-e29b-41d4-a716-4466554400000",
            "x550e8400-e29b-41d4-a716-446655440000",
            "550e8400-e29b-41d4-a716-44665544000g",
        ],
    )
    def test_invalid(self, value):
        """The whole value must be a UUID."""
        _, error = check_uuid_format(value, schema_with("uuid"))
        assert isinstance(error, InvalidUUIDFormat)


class TestDate:
    @pytest.mark.parametrize("value", ["2020-02-29", "1999-12-31", "2000-01-01"])
    def test_valid(self, value):
        assert check_date_format(value, schema_with("date")).valid

    @pytest.mark.parametrize(
        "value",
        ["2020-13-40", "2019-02-29", "2020-2-29", "2020-02-29T00:00:00Z", "20200229", " 2020-02-29"],
    )
    def test_invalid(self, value):
        _, error = check_date_format(value, schema_with("date"))
        assert isinstance(error, InvalidDateFormat)
        assert str(error) == f"#/f Value: {value!r} is not conformant with date format"


class TestIsoDateTime:
    """Test the bundled coercion target."""

    def test_utc(self):
        assert IsoDateTime.parse("2019-05-16T11:37:02Z") == datetime(
            2019, 5, 16, 11, 37, 2, tzinfo=timezone.utc
        )

    def test_offset_without_colon(self):
        parsed = IsoDateTime.parse("2019-05-16T11:37:02+0530")
        assert parsed.utcoffset() == timedelta(hours=5, minutes=30)

    def test_long_fraction_truncated(self):
        assert IsoDateTime.parse("2019-05-16T11:37:02.123456789Z").microsecond == 123456

    def test_lowercase_separators(self):
        assert IsoDateTime.parse("2019-05-16t11:37:02z").tzinfo is not None

    @pytest.mark.parametrize(
        "value",
        ["2019-05-16", "2019-05-16T11:37:02", "2019-05-16T25:00:00Z", "2019-02-30T00:00:00Z", "soon"],
    )
    def test_malformed(self, value):
        with pytest.raises(MalformedDateTimeError):
            IsoDateTime.parse(value)


class TestCoercion:
    """Test the coercion helpers."""

    def test_only_date_time_format(self):
        result = coerce_date_time("2019-05-16T11:37:02Z", schema_with("date"), IsoDateTime)
        assert result.value == "2019-05-16T11:37:02Z"

    def test_malformed_maps_to_invalid_type(self):
        _, error = coerce_date_time("soon", schema_with("date-time"), IsoDateTime)
        assert isinstance(error, InvalidType)
        assert error.expected == "date-time"

    def test_coercion_function_prefers_parse(self):
        assert coercion_function(IsoDateTime) == IsoDateTime.parse
        assert coercion_function(datetime.fromisoformat) == datetime.fromisoformat

    def test_unusable_target(self):
        with pytest.raises(TypeError):
            coercion_function(42)

    @pytest.mark.parametrize(
        "error, malformed",
        [
            (MalformedDateTimeError("anything"), True),
            (ValueError("Invalid isoformat string: 'x'"), True),
            (ValueError("month must be in 1..12, day is out of range"), True),
            (ValueError("Unknown string format: x"), True),
            (ValueError("time data 'x' does not match format"), True),
            (ValueError("connection refused"), False),
            (ValueError("unsupported locale setting: invalid codeset"), False),
            (ValueError("invalid literal for int() with base 10: 'x'"), False),
        ],
    )
    def test_is_malformed(self, error, malformed):
        assert is_malformed_date_time(error) is malformed
