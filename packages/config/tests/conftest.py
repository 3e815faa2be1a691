"""Pytest configuration and fixtures for config package tests."""

import pytest


@pytest.fixture
def sample_config_dict():
    """Sample configuration dictionary."""
    return {
        "validators": [
            {
                "name": "default",
                "coerce_value": False,
            },
            {
                "name": "query",
                "coerce_value": True,
                "datetime_coerce_class": "iso",
            },
        ],
        "documents": {
            "name": "petstore",
            "path": "petstore.yaml",
        },
    }


@pytest.fixture
def yaml_config_file(tmp_path):
    """Write a YAML configuration file and return its path."""
    path = tmp_path / "config.yaml"
    path.write_text(
        "validators:\n"
        "  - name: default\n"
        "    coerce_value: false\n"
        "  - name: query\n"
        "    coerce_value: true\n"
    )
    return path
