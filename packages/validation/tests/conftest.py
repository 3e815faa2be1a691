"""Pytest configuration and fixtures for validation package tests."""

from pathlib import Path

import pytest

from schemaknobs_validation import (
    IsoDateTime,
    SchemaDocument,
    SchemaValidator,
    ValidatorOptions,
)

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def petstore_path():
    """Path of the petstore-with-discriminator document."""
    return FIXTURES / "petstore-with-discriminator.yaml"


@pytest.fixture
def petstore(petstore_path):
    """Loaded petstore-with-discriminator document."""
    return SchemaDocument.from_file(petstore_path)


@pytest.fixture
def validator():
    """Validator with default options."""
    return SchemaValidator()


@pytest.fixture
def datetime_validator():
    """Validator coercing date-time strings with IsoDateTime."""
    return SchemaValidator(ValidatorOptions(datetime_coerce_class=IsoDateTime))


@pytest.fixture
def coercing_validator():
    """Validator coercing query-string style scalars."""
    return SchemaValidator(ValidatorOptions(coerce_value=True))


@pytest.fixture
def cat_body():
    """Request body whose single basket holds a cat."""
    return {
        "baskets": [
            {
                "name": "cats",
                "content": [
                    {
                        "name": "Mr. Cat",
                        "born_at": "2019-05-16T11:37:02.160Z",
                        "description": "Cat gentleman",
                        "milk_stock": 10,
                    }
                ],
            }
        ]
    }
