"""Tests for the shared constraint checks."""

import pytest

from schemaknobs_validation import (
    InvalidEnumValue,
    LessThanMinimum,
    LessThanMinItems,
    MoreThanMaximum,
    MoreThanMaxItems,
    NotUniqueItems,
    Schema,
)
from schemaknobs_validation.constraints import (
    check_enum,
    check_items_count,
    check_range,
    check_unique_items,
    same_value,
)


class TestSameValue:
    """Test equality that keeps booleans apart from numbers."""

    @pytest.mark.parametrize(
        "left, right, expected",
        [
            (1, 1, True),
            (1, 1.0, True),
            (True, True, True),
            (True, 1, False),
            (0, False, False),
            ("a", "a", True),
            ({"a": 1}, {"a": 1}, True),
        ],
    )
    def test_same_value(self, left, right, expected):
        assert same_value(left, right) is expected


class TestEnumCheck:
    def test_no_enum(self):
        assert check_enum("anything", Schema()).valid

    def test_boolean_is_not_integer_member(self):
        _, error = check_enum(True, Schema(enum=[1, 2]))
        assert isinstance(error, InvalidEnumValue)

    def test_none_member(self):
        assert check_enum(None, Schema(enum=[None, "a"])).valid


class TestRangeCheck:
    """Test minimum/maximum with boolean exclusive flags."""

    def test_inclusive_bounds(self):
        schema = Schema(minimum=1, maximum=3)
        assert check_range(1, schema).valid
        assert check_range(3, schema).valid

    def test_below_minimum(self):
        _, error = check_range(0, Schema(minimum=1, object_reference="#/n"))
        assert isinstance(error, LessThanMinimum)
        assert error.exclusive is False
        assert str(error) == "#/n 0 is less than minimum value 1"

    def test_exclusive_minimum(self):
        _, error = check_range(1, Schema(minimum=1, exclusive_minimum=True))
        assert isinstance(error, LessThanMinimum)
        assert error.exclusive is True

    def test_above_maximum(self):
        _, error = check_range(4, Schema(maximum=3))
        assert isinstance(error, MoreThanMaximum)

    def test_exclusive_maximum(self):
        _, error = check_range(3.0, Schema(maximum=3, exclusive_maximum=True))
        assert isinstance(error, MoreThanMaximum)
        assert error.exclusive is True


class TestArrayChecks:
    def test_item_counts(self):
        schema = Schema(min_items=1, max_items=2)
        assert check_items_count([1], schema).valid
        assert isinstance(check_items_count([], schema).error, LessThanMinItems)
        assert isinstance(check_items_count([1, 2, 3], schema).error, MoreThanMaxItems)

    def test_unique_items(self):
        schema = Schema(unique_items=True)
        assert check_unique_items([1, 2, 3], schema).valid
        assert isinstance(check_unique_items([1, 2, 1], schema).error, NotUniqueItems)

    def test_unique_unhashable_items(self):
        schema = Schema(unique_items=True)
        assert check_unique_items([{"a": 1}, {"a": 2}], schema).valid
        assert not check_unique_items([{"a": 1}, {"a": 1}], schema).valid

    def test_unique_booleans_and_numbers(self):
        """True and 1 are different items."""
        assert check_unique_items([True, 1], Schema(unique_items=True)).valid

    def test_uniqueness_not_required(self):
        assert check_unique_items([1, 1], Schema()).valid
