from __future__ import annotations

"""
Main Application Window Factory.

Creates the root CustomTkinter window, applies the saved appearance mode and
prepares the two-column grid (sidebar, content area).
"""

from typing import Any, Dict

import customtkinter as ctk

from sitemaptree.domain import constants as const

_APPEARANCE_MODES = ("System", "Light", "Dark")

# -----------------------------------------------------------------------------
# ROOT WINDOW CONSTRUCTION
# -----------------------------------------------------------------------------

def create_main_window(app_settings: Dict[str, Any]) -> ctk.CTk:
    """
    Instantiate and configure the primary application window.

    Args:
        app_settings: The `app_settings` block of the persisted state.

    Returns:
        ctk.CTk: The configured root application instance.
    """
    mode = app_settings.get("appearance_mode", "System")
    ctk.set_appearance_mode(mode if mode in _APPEARANCE_MODES else "System")
    ctk.set_default_color_theme("blue")

    app = ctk.CTk()
    app.title(f"{const.APP_NAME} - v{const.CURRENT_CONFIG_VERSION}")
    app.geometry("1200x760")
    app.minsize(720, 480)

    # Column 0: sidebar, column 1: content
    app.grid_columnconfigure(1, weight=1)
    app.grid_rowconfigure(0, weight=1)

    return app
