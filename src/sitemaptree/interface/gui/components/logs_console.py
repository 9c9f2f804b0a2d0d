from __future__ import annotations

"""
Diagnostics Console.

Read-only text view fed from the logging queue, so loading problems and
layout passes can be followed without leaving the application.
"""

from typing import Any

import customtkinter as ctk

from sitemaptree.utils.i18n import i18n

MAX_LINES = 2000


class LogsFrame(ctk.CTkFrame):
    """Monospaced log buffer with copy and clear actions."""

    def __init__(self, master: Any, **kwargs: Any):
        super().__init__(master, corner_radius=10, fg_color="transparent", **kwargs)
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)

        self.textbox = ctk.CTkTextbox(self, state="disabled", font=("Consolas", 10))
        self.textbox.grid(row=0, column=0, columnspan=2, sticky="nsew")

        self.btn_clear = ctk.CTkButton(
            self,
            text=i18n.t("gui.logs.clear", default="Clear"),
            fg_color="transparent",
            border_width=1,
            text_color=("gray10", "#DCE4EE"),
            command=self.clear
        )
        self.btn_clear.grid(row=1, column=0, pady=10, padx=10, sticky="e")

        self.btn_copy = ctk.CTkButton(
            self,
            text=i18n.t("gui.logs.copy", default="Copy to Clipboard"),
            command=self._copy_logs
        )
        self.btn_copy.grid(row=1, column=1, pady=10, sticky="e")

    def append_log(self, msg: str) -> None:
        """Append one formatted record, trimming the oldest lines past MAX_LINES."""
        self.textbox.configure(state="normal")
        self.textbox.insert("end", msg + "\n")
        line_count = int(self.textbox.index("end-1c").split(".")[0])
        if line_count > MAX_LINES:
            self.textbox.delete("1.0", f"{line_count - MAX_LINES + 1}.0")
        self.textbox.see("end")
        self.textbox.configure(state="disabled")

    def clear(self) -> None:
        self.textbox.configure(state="normal")
        self.textbox.delete("1.0", "end")
        self.textbox.configure(state="disabled")

    def _copy_logs(self) -> None:
        self.master.clipboard_clear()
        self.master.clipboard_append(self.textbox.get("1.0", "end"))
