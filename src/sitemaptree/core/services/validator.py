from __future__ import annotations

"""
Configuration Validation Service.

Normalises configuration dictionaries coming from the preferences file or
the command line before they reach the renderer. Coerces types, rejects
non-positive geometry, and fills missing keys with domain defaults.
"""

import logging
import math
from typing import Any, Dict, List, Optional, Tuple

from sitemaptree.domain.config import get_default_config

logger = logging.getLogger(__name__)

_POSITIVE_FLOAT_FIELDS = ("node_spacing", "depth_spacing")
_NON_NEGATIVE_FLOAT_FIELDS = ("margin_top", "margin_bottom", "margin_left")
_POSITIVE_INT_FIELDS = ("normal_duration_ms", "slow_duration_ms")
_BOOL_FIELDS = ("slow_animations",)
_STRING_FIELDS = ("last_directory",)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalise a configuration dictionary.

    Args:
        config: Raw configuration data.
        strict: Raise on the first invalid value instead of falling back.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalised configuration and
        the warnings produced while falling back to defaults.

    Raises:
        TypeError: In strict mode, for a value of the wrong type.
        ValueError: In strict mode, for an out-of-range value.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    for field in _POSITIVE_FLOAT_FIELDS:
        merged[field] = _as_number(merged.get(field), float, defaults[field], field, warnings, strict, minimum=None)
    for field in _NON_NEGATIVE_FLOAT_FIELDS:
        merged[field] = _as_number(merged.get(field), float, defaults[field], field, warnings, strict, minimum=0)
    for field in _POSITIVE_INT_FIELDS:
        merged[field] = _as_number(merged.get(field), int, defaults[field], field, warnings, strict, minimum=None)
    for field in _BOOL_FIELDS:
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)
    for field in _STRING_FIELDS:
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    merged["initial_depth"] = _as_depth(merged.get("initial_depth"), defaults["initial_depth"], warnings, strict)

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _reject(msg: str, exc: type, warnings: List[str], strict: bool) -> None:
    if strict:
        raise exc(msg)
    warnings.append(f"{msg} Using fallback.")
    logger.warning(msg)


def _as_number(
        value: Any,
        kind: type,
        fallback: Any,
        field: str,
        warnings: List[str],
        strict: bool,
        minimum: Optional[float],
) -> Any:
    """
    Coerce numbers and numeric strings.

    `minimum=None` requires a strictly positive value; otherwise the value
    must be >= minimum.
    """
    if value is None:
        return fallback
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        _reject(f"Invalid field '{field}': expected number, received {type(value).__name__}.",
                TypeError, warnings, strict)
        return fallback
    try:
        as_float = float(value)
    except (ValueError, OverflowError):
        _reject(f"Invalid field '{field}': '{value}' is not a number.", TypeError, warnings, strict)
        return fallback
    if not math.isfinite(as_float):
        _reject(f"Invalid field '{field}': {value} is not a finite number.", ValueError, warnings, strict)
        return fallback
    number = kind(as_float)

    too_small = number <= 0 if minimum is None else number < minimum
    if too_small:
        bound = "> 0" if minimum is None else f">= {minimum}"
        _reject(f"Invalid field '{field}': {number} must be {bound}.", ValueError, warnings, strict)
        return fallback
    return number


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    if value is None:
        return fallback
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        v = value.strip().lower()
        if v in ("1", "true", "yes", "y", "on"):
            return True
        if v in ("0", "false", "no", "n", "off"):
            return False

    _reject(f"Invalid field '{field}': expected bool, received {type(value).__name__}.",
            TypeError, warnings, strict)
    return fallback


def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    if value is None:
        return fallback
    if isinstance(value, str):
        return value.strip()

    _reject(f"Invalid field '{field}': expected str, received {type(value).__name__}.",
            TypeError, warnings, strict)
    return fallback


def _as_depth(value: Any, fallback: Optional[int], warnings: List[str], strict: bool) -> Optional[int]:
    """`initial_depth` accepts a non-negative int or None ("all")."""
    if value is None:
        return None
    if isinstance(value, str) and value.strip().lower() in ("all", "none", ""):
        return None
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        _reject(f"Invalid field 'initial_depth': expected int, received {type(value).__name__}.",
                TypeError, warnings, strict)
        return fallback
    try:
        depth = int(value)
    except ValueError:
        _reject(f"Invalid field 'initial_depth': '{value}' is not an integer.", TypeError, warnings, strict)
        return fallback
    if depth < 0:
        _reject(f"Invalid field 'initial_depth': {depth} must be >= 0.", ValueError, warnings, strict)
        return fallback
    return depth
