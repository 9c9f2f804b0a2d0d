from __future__ import annotations

"""
Unit tests for configuration validation.

Verifies type coercion, fallback to defaults with warnings, and strict
mode failures.
"""

import pytest

from sitemaptree.core.services.validator import validate_config
from sitemaptree.domain.config import get_default_config


def test_defaults_pass_untouched() -> None:
    clean, warnings = validate_config(get_default_config())
    assert clean == get_default_config()
    assert warnings == []


def test_missing_keys_are_filled() -> None:
    clean, warnings = validate_config({"node_spacing": 30})
    assert clean["node_spacing"] == 30.0
    assert clean["depth_spacing"] == get_default_config()["depth_spacing"]
    assert warnings == []


def test_numeric_strings_are_coerced() -> None:
    clean, _ = validate_config({"depth_spacing": "200", "slow_duration_ms": "1500.0", "margin_top": "0"})
    assert clean["depth_spacing"] == 200.0
    assert clean["slow_duration_ms"] == 1500
    assert isinstance(clean["slow_duration_ms"], int)
    assert clean["margin_top"] == 0.0


@pytest.mark.parametrize("field, value", [
    ("node_spacing", 0),
    ("node_spacing", -5),
    ("depth_spacing", "wide"),
    ("margin_left", -1),
    ("normal_duration_ms", True),
    ("slow_duration_ms", [1]),
])
def test_invalid_values_fall_back_with_warning(field, value) -> None:
    clean, warnings = validate_config({field: value})
    assert clean[field] == get_default_config()[field]
    assert len(warnings) == 1
    assert field in warnings[0]


@pytest.mark.parametrize("value, expected", [
    (0, 0),
    (3, 3),
    ("2", 2),
    ("all", None),
    (None, None),
])
def test_initial_depth_values(value, expected) -> None:
    clean, warnings = validate_config({"initial_depth": value})
    assert clean["initial_depth"] == expected
    assert warnings == []


def test_negative_initial_depth_falls_back() -> None:
    clean, warnings = validate_config({"initial_depth": -2})
    assert clean["initial_depth"] == get_default_config()["initial_depth"]
    assert warnings


@pytest.mark.parametrize("value, expected", [("yes", True), ("off", False), (1, True), (False, False)])
def test_bool_coercion(value, expected) -> None:
    clean, _ = validate_config({"slow_animations": value})
    assert clean["slow_animations"] is expected


def test_last_directory_is_stripped() -> None:
    clean, _ = validate_config({"last_directory": "  /tmp/sites  "})
    assert clean["last_directory"] == "/tmp/sites"


def test_non_dict_returns_defaults() -> None:
    clean, warnings = validate_config(["not", "a", "dict"])
    assert clean == get_default_config()
    assert "expected dict" in warnings[0]


def test_strict_mode_raises() -> None:
    with pytest.raises(ValueError):
        validate_config({"node_spacing": -1}, strict=True)
    with pytest.raises(TypeError):
        validate_config({"slow_animations": "maybe"}, strict=True)
    with pytest.raises(TypeError):
        validate_config("config", strict=True)


@pytest.mark.parametrize("field, value", [
    ("normal_duration_ms", "inf"),
    ("slow_duration_ms", float("inf")),
    ("node_spacing", "nan"),
    ("depth_spacing", float("nan")),
    ("margin_top", "-inf"),
    ("slow_duration_ms", 10 ** 400),
])
def test_non_finite_values_fall_back(field, value) -> None:
    clean, warnings = validate_config({field: value})
    assert clean[field] == get_default_config()[field]
    assert len(warnings) == 1
    assert field in warnings[0]


def test_non_finite_strict_mode_raises() -> None:
    with pytest.raises(ValueError):
        validate_config({"normal_duration_ms": "inf"}, strict=True)
