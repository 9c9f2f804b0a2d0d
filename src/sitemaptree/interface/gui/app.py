from __future__ import annotations

"""
GUI Entrypoint and Application Lifecycle Orchestrator.

Initializes the CustomTkinter environment, restores saved preferences,
assembles the sidebar, diagram and logs views, binds them to the
TreeController and runs the Tk main loop. Preferences are written back when
the window closes.
"""

import logging
import queue

from sitemaptree.core.services.validator import validate_config
from sitemaptree.domain import config as cfg
from sitemaptree.domain import constants as const
from sitemaptree.infra.logging import (
    LoggingConfig,
    configure_logging,
    create_ui_queue_handler,
    get_default_log_path,
)
from sitemaptree.interface.gui.components.logs_console import LogsFrame
from sitemaptree.interface.gui.components.main_window import create_main_window
from sitemaptree.interface.gui.components.sidebar import SidebarFrame
from sitemaptree.interface.gui.components.tree_canvas import TreeCanvas
from sitemaptree.interface.gui.controllers.tree_controller import TreeController
from sitemaptree.utils.i18n import i18n

logger = logging.getLogger(__name__)

LOG_POLL_INTERVAL_MS = 100


# -----------------------------------------------------------------------------
# MAIN APPLICATION LOOP
# -----------------------------------------------------------------------------

def main() -> None:
    """Initialize and launch the Graphical User Interface."""
    # -----------------------------------------------------------------------------
    # PHASE 1: DIAGNOSTIC INFRASTRUCTURE SETUP
    # -----------------------------------------------------------------------------
    configure_logging(LoggingConfig(level="INFO", console=True, log_file=get_default_log_path()))
    logger.info(f"GUI Lifecycle: Initializing v{const.CURRENT_CONFIG_VERSION}")

    gui_log_queue: queue.Queue = queue.Queue()
    gui_log_handler = create_ui_queue_handler(gui_log_queue, logging.INFO)
    logging.getLogger().addHandler(gui_log_handler)

    # -----------------------------------------------------------------------------
    # PHASE 2: PERSISTENT STATE RECOVERY
    # -----------------------------------------------------------------------------
    app_state = cfg.load_app_state()
    config, warnings = validate_config(cfg.load_config(), strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    locale = app_state["app_settings"].get("locale", "en")
    if locale != i18n.locale:
        i18n.load_locale(locale)

    # -----------------------------------------------------------------------------
    # PHASE 3: VIEW COMPONENT HIERARCHY CONSTRUCTION
    # -----------------------------------------------------------------------------
    app = create_main_window(app_state["app_settings"])
    controller = TreeController(app, config, app_state)

    def show_frame(name: str) -> None:
        """Switch the visible content view."""
        canvas_frame.grid_forget()
        logs_frame.grid_forget()
        target = logs_frame if name == "logs" else canvas_frame
        target.grid(row=0, column=1, sticky="nsew", padx=20, pady=20)
        sidebar_frame.set_active(name)

    sidebar_frame = SidebarFrame(app, nav_callback=show_frame)
    sidebar_frame.grid(row=0, column=0, sticky="nsew")

    canvas_frame = TreeCanvas(app, on_toggle=controller.toggle, on_open_url=controller.open_url)
    logs_frame = LogsFrame(app)

    show_frame("diagram")

    # -----------------------------------------------------------------------------
    # PHASE 4: CONTROLLER INTEGRATION AND EVENT BINDING
    # -----------------------------------------------------------------------------
    controller.register_views(canvas_frame, sidebar_frame, logs_frame)
    controller.sync_view_from_config()

    sidebar_frame.btn_open.configure(command=controller.open_sitemap)
    sidebar_frame.btn_expand_all.configure(command=controller.expand_all)
    sidebar_frame.btn_collapse_all.configure(command=controller.collapse_all)

    # -----------------------------------------------------------------------------
    # PHASE 5: BACKGROUND POLLING
    # -----------------------------------------------------------------------------
    log_formatter = logging.Formatter("%(asctime)s | %(levelname)s | %(message)s", "%H:%M:%S")

    def poll_log_queue() -> None:
        """Flush queued records into the logs console."""
        while True:
            try:
                record = gui_log_queue.get_nowait()
            except queue.Empty:
                break
            logs_frame.append_log(log_formatter.format(record))
        app.after(LOG_POLL_INTERVAL_MS, poll_log_queue)

    # -----------------------------------------------------------------------------
    # PHASE 6: LIFECYCLE FINALIZATION
    # -----------------------------------------------------------------------------
    def on_closing() -> None:
        """Persist preferences and terminate."""
        controller.sync_config_from_view()
        app_state["last_session"] = config
        cfg.save_app_state(app_state)
        logging.getLogger().removeHandler(gui_log_handler)
        app.destroy()

    app.protocol("WM_DELETE_WINDOW", on_closing)
    app.after(LOG_POLL_INTERVAL_MS, poll_log_queue)

    app.mainloop()


if __name__ == "__main__":
    main()
