from __future__ import annotations

"""
Tree Diagram Controller.

Bridges the sidebar and canvas views with the core: opens sitemap files,
runs load -> build -> initial layout, forwards indicator clicks to the
renderer and hands every new RenderState to the canvas. Owns the current
RenderState; a failed load leaves the previous diagram untouched.
"""

import logging
import os
import tkinter.messagebox as mb
import webbrowser
from typing import Any, Callable, Dict, Optional

import customtkinter as ctk

from sitemaptree.core.analysis import tree_renderer
from sitemaptree.core.services.sitemap_loader import load_sitemap_tree
from sitemaptree.domain.errors import SitemapTreeError, UnknownNodeError
from sitemaptree.domain.layout_models import LayoutSettings, RenderState
from sitemaptree.infra.fs import get_initial_browse_dir
from sitemaptree.utils.i18n import i18n

logger = logging.getLogger(__name__)

_FILE_TYPES = [("Sitemap XML", "*.xml"), ("All files", "*.*")]


class TreeController:
    """
    Event handler layer of the diagram view.

    Attributes:
        state: RenderState of the loaded sitemap (None before the first load).
        current_path: File the current state was built from.
    """

    def __init__(self, app: ctk.CTk, config: Dict[str, Any], app_state: Dict[str, Any]):
        self.app = app
        self.config = config
        self.app_state = app_state

        self.state: Optional[RenderState] = None
        self.current_path = ""

        self.canvas_view: Any = None
        self.sidebar_view: Any = None
        self.logs_view: Any = None

    # -------------------------------------------------------------------------
    # VIEW REGISTRATION
    # -------------------------------------------------------------------------

    def register_views(self, canvas: Any, sidebar: Any, logs: Any) -> None:
        self.canvas_view = canvas
        self.sidebar_view = sidebar
        self.logs_view = logs

    def sync_view_from_config(self) -> None:
        if not self.sidebar_view:
            return
        if self.config.get("slow_animations"):
            self.sidebar_view.sw_slow.select()
        else:
            self.sidebar_view.sw_slow.deselect()

    def sync_config_from_view(self) -> None:
        if self.sidebar_view:
            self.config["slow_animations"] = bool(self.sidebar_view.sw_slow.get())

    # -------------------------------------------------------------------------
    # FILE LOADING
    # -------------------------------------------------------------------------

    def open_sitemap(self) -> None:
        """Ask for a sitemap file and load it."""
        path = ctk.filedialog.askopenfilename(
            parent=self.app,
            title=i18n.t("gui.dialogs.open_title", default="Open Sitemap"),
            initialdir=get_initial_browse_dir(self.config.get("last_directory", "")),
            filetypes=_FILE_TYPES,
        )
        if not path:
            logger.debug("Open dialog cancelled")
            return
        self.load_path(path)

    def load_path(self, path: str) -> bool:
        """
        Build and display the tree of a sitemap file.

        Args:
            path: Sitemap file selected by the user.

        Returns:
            bool: True if the diagram was replaced.
        """
        try:
            tree = load_sitemap_tree(path)
        except SitemapTreeError as e:
            logger.error(f"Cannot load sitemap '{path}': {e}")
            mb.showerror(
                i18n.t("gui.dialogs.error_title", default="Error"),
                i18n.t("gui.dialogs.load_failed", default="Could not load {path}:\n\n{error}",
                       path=os.path.basename(path), error=str(e)),
            )
            return False

        measure = self.canvas_view.measure_label if self.canvas_view else None
        self.state = tree_renderer.initialize(tree, LayoutSettings.from_config(self.config), measure)
        self.current_path = path
        self.config["last_directory"] = os.path.dirname(os.path.abspath(path))

        if self.canvas_view:
            self.canvas_view.clear()
            self.canvas_view.render(self.state)
        if self.sidebar_view:
            self.sidebar_view.set_tree_actions_enabled(True)
            self.sidebar_view.set_status(i18n.t(
                "gui.sidebar.loaded",
                default="{name}\n{count} nodes",
                name=os.path.basename(path),
                count=tree.count_nodes(),
            ))
        return True

    # -------------------------------------------------------------------------
    # TREE INTERACTION
    # -------------------------------------------------------------------------

    def toggle(self, node_id: int, slow: bool = False) -> None:
        """Handle a click on a disclosure indicator."""
        if self.state is None:
            return
        try:
            next_state = tree_renderer.toggle(self.state, node_id, slow=slow or self._slow_default())
        except UnknownNodeError as e:
            logger.warning(f"Ignoring click: {e}")
            return
        self._apply(next_state)

    def expand_all(self) -> None:
        self._run_bulk(tree_renderer.expand_all)

    def collapse_all(self) -> None:
        self._run_bulk(tree_renderer.collapse_all)

    def open_url(self, url: str) -> None:
        logger.info(f"Opening {url}")
        webbrowser.open_new_tab(url)

    # -------------------------------------------------------------------------
    # INTERNAL HELPERS
    # -------------------------------------------------------------------------

    def _run_bulk(self, operation: Callable[..., RenderState]) -> None:
        if self.state is None:
            return
        self._apply(operation(self.state, slow=self._slow_default()))

    def _apply(self, next_state: RenderState) -> None:
        self.state = next_state
        if self.canvas_view:
            self.canvas_view.render(next_state)

    def _slow_default(self) -> bool:
        if self.sidebar_view:
            return bool(self.sidebar_view.sw_slow.get())
        return bool(self.config.get("slow_animations", False))
