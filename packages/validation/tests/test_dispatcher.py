"""Tests for the dispatcher, results and the error taxonomy."""

import pytest

from schemaknobs_common import ValidationError
from schemaknobs_validation import (
    InvalidType,
    NotExistRequiredKey,
    Schema,
    SchemaKind,
    SchemaValidationError,
    SchemaValidator,
    UnsupportedSchemaKind,
    ValidationResult,
    ValidatorOptions,
    validate,
)


class TestDispatch:
    """Test routing of values to validators."""

    def test_every_kind_has_a_validator(self, validator):
        for kind in SchemaKind:
            assert validator.validator_for("x", Schema(type=kind.value)) is not None

    def test_incomplete_validator_table(self):
        """A validator table missing a kind is rejected at construction."""

        class WithoutArrays(SchemaValidator):
            def _build_type_validators(self):
                table = super()._build_type_validators()
                del table[SchemaKind.ARRAY]
                return table

        with pytest.raises(NotImplementedError, match="array"):
            WithoutArrays()

    def test_unknown_type(self, validator):
        _, error = validator.validate("x", Schema(type="file", object_reference="#/u"))
        assert isinstance(error, UnsupportedSchemaKind)
        assert error.declared_type == "file"

    def test_missing_schema_passes_through(self, validator):
        assert validator.validate({"a": 1}, None).value == {"a": 1}

    def test_module_level_validate(self):
        assert validate("abc", Schema(type="string")).value == "abc"
        assert validate("12", Schema(type="integer"), ValidatorOptions(coerce_value=True)).value == 12

    def test_options_are_held_by_instance(self):
        """Two validators with different options do not affect each other."""
        plain = SchemaValidator()
        coercing = SchemaValidator(ValidatorOptions(coerce_value=True))
        schema = Schema(type="integer")
        assert coercing.validate("3", schema).value == 3
        assert isinstance(plain.validate("3", schema).error, InvalidType)

    def test_options_are_immutable(self):
        options = ValidatorOptions()
        with pytest.raises(AttributeError):
            options.coerce_value = True

    def test_validate_or_raise(self, validator):
        assert validator.validate_or_raise("a", Schema(type="string")) == "a"
        with pytest.raises(InvalidType):
            validator.validate_or_raise(1, Schema(type="string"))

    def test_schema_is_shared_across_validators(self):
        schema = Schema(type="object", required=["a"])
        for validator in (SchemaValidator(), SchemaValidator(ValidatorOptions(coerce_value=True))):
            assert isinstance(validator.validate({}, schema).error, NotExistRequiredKey)


class TestValidationResult:
    """Test the two-outcome result type."""

    def test_success(self):
        result = ValidationResult.success(5)
        assert result.valid
        assert bool(result) is True
        value, error = result
        assert (value, error) == (5, None)
        assert result.unwrap() == 5

    def test_success_with_none_value(self):
        assert ValidationResult.success(None).valid

    def test_failure(self):
        error = InvalidType(1, "string", "#/s")
        result = ValidationResult.failure(error)
        assert not result
        assert result.value is None
        with pytest.raises(InvalidType):
            result.unwrap()

    def test_both_outcomes_rejected(self):
        with pytest.raises(ValueError):
            ValidationResult(value=1, error=InvalidType(1, "string", "#/s"))


class TestErrors:
    """Test error attributes and locations."""

    def test_hierarchy(self):
        error = InvalidType(1, "string", "#/s")
        assert isinstance(error, SchemaValidationError)
        assert isinstance(error, ValidationError)
        assert error.context["reference"] == "#/s"

    def test_message(self):
        error = InvalidType(1, "string", "#/components/schemas/Cat/properties/name")
        assert str(error) == (
            "1 class is int but it's not valid string in #/components/schemas/Cat/properties/name"
        )

    def test_at_prefixes_path(self):
        error = NotExistRequiredKey(["a"], "#/o", {})
        located = error.at(2).at("items")
        assert located.path == ("items", 2)
        assert located.location == "/items/2"
        assert error.path == ()
        assert str(located) == str(error)
        assert located.keys == ("a",)

    def test_location_escapes_segments(self):
        error = InvalidType(1, "string", "#/s").at("a/b").at("c~d")
        assert error.location == "/c~0d/a~1b"

    def test_to_dict(self):
        data = InvalidType(1, "string", "#/s").at("age").to_dict()
        assert data["error"] == "InvalidType"
        assert data["location"] == "/age"
        assert data["expected"] == "string"
        assert data["value"] == 1
