from __future__ import annotations

"""
Unit tests for Internationalization (i18n) consistency.

Ensures that all locale files (en.json, es.json) share the exact
same key structure and dot-notation resolution works as expected.
"""

import json
from typing import Any, Dict, Set

from sitemaptree.utils.i18n import LOCALES_DIR, I18n


def _get_flat_keys(d: Dict[str, Any], prefix: str = "") -> Set[str]:
    """Helper to flatten nested dictionary keys into dot-notation sets."""
    keys = set()
    for k, v in d.items():
        new_key = f"{prefix}.{k}" if prefix else k
        if isinstance(v, dict):
            keys.update(_get_flat_keys(v, new_key))
        else:
            keys.add(new_key)
    return keys


def _load_keys(locale: str) -> Set[str]:
    with open(f"{LOCALES_DIR}/{locale}.json", "r", encoding="utf-8") as f:
        return _get_flat_keys(json.load(f))


def test_locales_key_parity() -> None:
    """EN and ES locales have identical keys."""
    en_keys = _load_keys("en")
    es_keys = _load_keys("es")

    assert not en_keys - es_keys, f"Keys present in EN but missing in ES: {en_keys - es_keys}"
    assert not es_keys - en_keys, f"Keys present in ES but missing in EN: {es_keys - en_keys}"


def test_interface_keys_presence() -> None:
    required_keys = [
        "cli.errors.no_input",
        "cli.status.summary",
        "gui.sidebar.open",
        "gui.sidebar.expand_all",
        "gui.dialogs.load_failed",
        "gui.crash.title",
    ]
    for lang in ("en", "es"):
        flat_keys = _load_keys(lang)
        for key in required_keys:
            assert key in flat_keys, f"Key '{key}' is missing in {lang}.json"


def test_available_locales() -> None:
    assert {"en", "es"} <= set(I18n("en").available_locales())


def test_i18n_resolution_logic(tmp_path) -> None:
    """Dot-notation resolution, interpolation and fallbacks."""
    locale_file = tmp_path / "test_locale.json"
    locale_file.write_text(json.dumps({
        "test": {
            "hello": "Hello {name}!",
            "simple": "Simple Text",
        }
    }), encoding="utf-8")

    service = I18n("test_locale", locales_dir=str(tmp_path))

    assert service.is_loaded
    assert service.locale == "test_locale"
    assert service.t("test.simple") == "Simple Text"
    assert service.t("test.hello", name="World") == "Hello World!"
    assert service.t("test.hello") == "Hello {name}!"
    assert service.t("missing.key") == "missing.key"
    assert service.t("missing.key", default="Count: {n}", n=3) == "Count: 3"
    assert service.t("test") == "test"


def test_missing_locale_keeps_working(tmp_path) -> None:
    service = I18n("xx", locales_dir=str(tmp_path))

    assert not service.is_loaded
    assert service.t("gui.sidebar.open", default="Open Sitemap") == "Open Sitemap"
