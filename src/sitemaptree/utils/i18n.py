from __future__ import annotations

"""
Internationalization (i18n) Utility.

Loads nested JSON string tables from `interface/locales` and resolves
dot-notation keys such as `gui.dialogs.error_title`, with optional
`str.format` interpolation. Missing keys resolve to the supplied default or
to the key itself, so a partial translation never breaks the interface.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en"
LOCALES_DIR = os.path.abspath(
    os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "interface", "locales")
)


class I18n:
    """Translation table for one active locale."""

    def __init__(self, locale: str = DEFAULT_LOCALE, locales_dir: str = LOCALES_DIR):
        self._locales_dir = locales_dir
        self._locale = locale
        self._translations: Dict[str, Any] = {}
        self.is_loaded = False
        self.load_locale(locale)

    @property
    def locale(self) -> str:
        return self._locale

    def available_locales(self) -> List[str]:
        if not os.path.isdir(self._locales_dir):
            return []
        return sorted(
            os.path.splitext(name)[0]
            for name in os.listdir(self._locales_dir)
            if name.endswith(".json")
        )

    def load_locale(self, locale: str) -> None:
        """Replace the active table with `<locale>.json`; empty on failure."""
        file_path = os.path.join(self._locales_dir, f"{locale}.json")

        if not os.path.exists(file_path):
            logger.warning(f"I18n: locale file missing: {file_path}")
            self._translations = {}
            self.is_loaded = False
            return

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                self._translations = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"I18n: cannot read locale file {file_path}: {e}")
            self._translations = {}
            self.is_loaded = False
            return

        self._locale = locale
        self.is_loaded = True
        logger.debug(f"I18n: loaded locale '{locale}'")

    def t(self, key: str, default: Optional[str] = None, **kwargs: Any) -> str:
        """
        Resolve a dot-notation key and interpolate `kwargs` into it.

        Args:
            key: Path into the nested table, e.g. 'cli.errors.not_found'.
            default: Text used when the key is missing.
            **kwargs: Values for `str.format` placeholders.

        Returns:
            str: The translated text, `default`, or the key itself.
        """
        value: Any = self._translations
        for part in key.split("."):
            value = value.get(part) if isinstance(value, dict) else None

        template = value if isinstance(value, str) else default
        if template is None:
            return key

        try:
            return template.format(**kwargs) if kwargs else template
        except (KeyError, IndexError, ValueError) as e:
            logger.debug(f"I18n: cannot format '{key}': {e}")
            return template


# Shared instance used by every interface module
i18n = I18n(DEFAULT_LOCALE)
