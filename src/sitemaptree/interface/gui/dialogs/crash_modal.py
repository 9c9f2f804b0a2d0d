from __future__ import annotations

"""
Crash Reporting Modal.

Shows an unhandled error with its traceback and the tail of the log file,
with a button to copy both for a bug report.
"""

import logging
from typing import Optional

import customtkinter as ctk

from sitemaptree.infra.logging import get_recent_logs
from sitemaptree.utils.i18n import i18n

logger = logging.getLogger(__name__)


def build_crash_report(error_msg: str, stack_trace: str, recent_logs: str) -> str:
    return f"Error: {error_msg}\n\n{stack_trace}\n--- Recent log ---\n{recent_logs}"


def show_crash_modal(error_msg: str, stack_trace: str, parent: Optional[ctk.CTk] = None) -> None:
    """
    Display critical error details.

    Creates (and runs) a hidden root window when no parent is available,
    which is the case when the supervisor catches an error before or after
    the main loop.
    """
    is_root_created = False
    if parent is None:
        parent = ctk.CTk()
        parent.withdraw()
        is_root_created = True

    report = build_crash_report(error_msg, stack_trace, get_recent_logs(80))

    toplevel = ctk.CTkToplevel(parent)
    toplevel.title(i18n.t("gui.crash.title", default="Unexpected Error"))
    toplevel.geometry("700x520")
    toplevel.grab_set()

    ctk.CTkLabel(
        toplevel,
        text=i18n.t("gui.crash.header", default="SitemapTree stopped unexpectedly"),
        font=ctk.CTkFont(size=18, weight="bold"),
        text_color="#E04F5F"
    ).pack(pady=(20, 10))

    textbox = ctk.CTkTextbox(toplevel, font=("Consolas", 10))
    textbox.insert("1.0", report)
    textbox.configure(state="disabled")
    textbox.pack(fill="both", expand=True, padx=20, pady=10)

    def _copy() -> None:
        parent.clipboard_clear()
        parent.clipboard_append(report)

    def _close() -> None:
        if is_root_created:
            parent.destroy()
        else:
            toplevel.destroy()

    btn_frame = ctk.CTkFrame(toplevel, fg_color="transparent")
    btn_frame.pack(fill="x", padx=20, pady=20)

    ctk.CTkButton(
        btn_frame,
        text=i18n.t("gui.crash.copy", default="Copy Report"),
        command=_copy
    ).pack(side="left", padx=5)

    ctk.CTkButton(
        btn_frame,
        text=i18n.t("gui.crash.close", default="Close"),
        fg_color="#3B8ED0",
        hover_color="#36719F",
        command=_close
    ).pack(side="right", padx=5)

    toplevel.protocol("WM_DELETE_WINDOW", _close)

    if is_root_created:
        parent.mainloop()
