from __future__ import annotations

"""
Sidebar Navigation Component.

Persistent left panel holding the sitemap actions (open, expand all,
collapse all), the view routing buttons and the slow-animation switch.
"""

import logging
from typing import Any, Callable

import customtkinter as ctk

from sitemaptree.domain import constants as const
from sitemaptree.utils.i18n import i18n

logger = logging.getLogger(__name__)

_NAV_TEXT_COLOR = ("gray10", "#DCE4EE")
_ACTIVE_COLOR = ("gray75", "gray25")


class SidebarFrame(ctk.CTkFrame):
    """Actions, navigation and loaded-file status."""

    def __init__(self, master: Any, nav_callback: Callable[[str], None], **kwargs: Any):
        super().__init__(master, width=200, corner_radius=0, **kwargs)

        self.nav_callback = nav_callback

        # -----------------------------------------------------------------------------
        # COMPONENT: BRANDING AND VERSIONING
        # -----------------------------------------------------------------------------
        self.logo_label = ctk.CTkLabel(
            self,
            text=const.APP_NAME,
            font=ctk.CTkFont(size=20, weight="bold")
        )
        self.logo_label.grid(row=0, column=0, padx=20, pady=(20, 10))

        self.version_label = ctk.CTkLabel(
            self,
            text=f"v{const.CURRENT_CONFIG_VERSION}",
            font=ctk.CTkFont(size=10),
            text_color="gray"
        )
        self.version_label.grid(row=1, column=0, padx=20, pady=(0, 20))

        # -----------------------------------------------------------------------------
        # COMPONENT: SITEMAP ACTIONS
        # -----------------------------------------------------------------------------
        # Commands are bound by the application assembler
        self.btn_open = ctk.CTkButton(self, text=i18n.t("gui.sidebar.open", default="Open Sitemap"))
        self.btn_open.grid(row=2, column=0, padx=20, pady=(10, 5))

        self.btn_expand_all = ctk.CTkButton(
            self,
            text=i18n.t("gui.sidebar.expand_all", default="Expand All"),
            state="disabled"
        )
        self.btn_expand_all.grid(row=3, column=0, padx=20, pady=5)

        self.btn_collapse_all = ctk.CTkButton(
            self,
            text=i18n.t("gui.sidebar.collapse_all", default="Collapse All"),
            state="disabled"
        )
        self.btn_collapse_all.grid(row=4, column=0, padx=20, pady=(5, 20))

        # -----------------------------------------------------------------------------
        # COMPONENT: NAVIGATION ROUTING
        # -----------------------------------------------------------------------------
        self.btn_diagram = self._nav_button(i18n.t("gui.sidebar.diagram", default="Diagram"), "diagram")
        self.btn_diagram.grid(row=5, column=0, padx=20, pady=10)

        self.btn_logs = self._nav_button(i18n.t("gui.sidebar.logs", default="Logs"), "logs")
        self.btn_logs.grid(row=6, column=0, padx=20, pady=10)

        # Push footer to the bottom
        self.grid_rowconfigure(7, weight=1)

        # -----------------------------------------------------------------------------
        # COMPONENT: FOOTER
        # -----------------------------------------------------------------------------
        self.sw_slow = ctk.CTkSwitch(self, text=i18n.t("gui.sidebar.slow", default="Slow animations"))
        self.sw_slow.grid(row=8, column=0, padx=20, pady=(0, 10), sticky="w")

        self.status_label = ctk.CTkLabel(
            self,
            text=i18n.t("gui.sidebar.no_file", default="No sitemap loaded"),
            font=ctk.CTkFont(size=11),
            text_color="gray",
            wraplength=170,
            justify="left"
        )
        self.status_label.grid(row=9, column=0, padx=20, pady=(0, 20), sticky="w")

    def _nav_button(self, text: str, target: str) -> ctk.CTkButton:
        return ctk.CTkButton(
            self,
            text=text,
            command=lambda: self.nav_callback(target),
            fg_color="transparent",
            border_width=2,
            text_color=_NAV_TEXT_COLOR
        )

    def set_active(self, name: str) -> None:
        """Highlight the navigation button of the visible view."""
        self.btn_diagram.configure(fg_color=_ACTIVE_COLOR if name == "diagram" else "transparent")
        self.btn_logs.configure(fg_color=_ACTIVE_COLOR if name == "logs" else "transparent")

    def set_tree_actions_enabled(self, enabled: bool) -> None:
        state = "normal" if enabled else "disabled"
        self.btn_expand_all.configure(state=state)
        self.btn_collapse_all.configure(state=state)

    def set_status(self, text: str) -> None:
        self.status_label.configure(text=text)
