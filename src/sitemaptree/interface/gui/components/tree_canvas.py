from __future__ import annotations

"""
Tree Diagram Canvas.

Draws a RenderState on a scrollable `tkinter.Canvas` and animates its
TransitionPlan frame by frame with `after()`. Each visible node is a marker
circle, a clickable label (opens the URL) and a disclosure indicator
(toggles the node). Canvas items have no alpha channel, so fading is drawn
by blending item colours towards the background.
"""

import logging
import tkinter as tk
import tkinter.font as tkfont
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import customtkinter as ctk

from sitemaptree.core.analysis.transitions import (
    Frame,
    frame_at,
    frame_count,
    link_polyline,
    to_screen,
    viewport_at,
)
from sitemaptree.core.analysis.tree_renderer import indicator_position
from sitemaptree.domain import constants as const
from sitemaptree.domain.layout_models import LayoutNode, RenderState, Viewport

logger = logging.getLogger(__name__)

# Tk event.state bits: Shift, Mod1 (Alt on X11), Alt on Windows
_SLOW_MODIFIER_MASK = 0x0001 | 0x0008 | 0x20000

_PALETTES: Dict[str, Dict[str, str]] = {
    "Light": {
        "background": "#FFFFFF",
        "text": "#333333",
        "link": "#BBBBBB",
        "marker_collapsed": "#555555",
        "marker": "#999999",
    },
    "Dark": {
        "background": "#1D1E1E",
        "text": "#DCE4EE",
        "link": "#5A5F66",
        "marker_collapsed": "#DCE4EE",
        "marker": "#8A9099",
    },
}

_SCROLL_PADDING = 200


def is_slow_modifier(event_state: int) -> bool:
    """True when Shift or Alt was held during the click."""
    return bool(event_state & _SLOW_MODIFIER_MASK)


def blend(color: str, background: str, opacity: float) -> str:
    """Mix two `#RRGGBB` colours; opacity 1 yields `color`, 0 yields `background`."""
    opacity = min(max(opacity, 0.0), 1.0)
    fg = [int(color[i:i + 2], 16) for i in (1, 3, 5)]
    bg = [int(background[i:i + 2], 16) for i in (1, 3, 5)]
    mixed = [round(b + (f - b) * opacity) for f, b in zip(fg, bg)]
    return "#{:02X}{:02X}{:02X}".format(*mixed)


@dataclass
class _NodeItems:
    marker: int
    label: int
    indicator: int
    indicator_dx: float
    collapsed: bool


# -----------------------------------------------------------------------------
# CANVAS VIEW CLASS
# -----------------------------------------------------------------------------

class TreeCanvas(ctk.CTkFrame):
    """
    Scrollable drawing surface for the URL tree.

    Args:
        master: Parent container.
        on_toggle: Called with `(node_id, slow)` when an indicator is clicked.
        on_open_url: Called with the node URL when a label is clicked.
    """

    def __init__(
            self,
            master: Any,
            on_toggle: Callable[[int, bool], None],
            on_open_url: Callable[[str], None],
            **kwargs: Any
    ):
        super().__init__(master, corner_radius=10, **kwargs)
        self.on_toggle = on_toggle
        self.on_open_url = on_open_url

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)

        self.palette = _PALETTES["Dark" if ctk.get_appearance_mode() == "Dark" else "Light"]

        self.canvas = tk.Canvas(self, background=self.palette["background"], highlightthickness=0)
        self.canvas.grid(row=0, column=0, sticky="nsew")

        self.scroll_y = ctk.CTkScrollbar(self, orientation="vertical", command=self.canvas.yview)
        self.scroll_y.grid(row=0, column=1, sticky="ns")
        self.scroll_x = ctk.CTkScrollbar(self, orientation="horizontal", command=self.canvas.xview)
        self.scroll_x.grid(row=1, column=0, sticky="ew")
        self.canvas.configure(yscrollcommand=self.scroll_y.set, xscrollcommand=self.scroll_x.set)

        self.label_font = tkfont.Font(family="Helvetica", size=12)
        self.hover_font = tkfont.Font(family="Helvetica", size=12, underline=True)

        self._nodes: Dict[int, _NodeItems] = {}
        self._links: Dict[int, int] = {}
        self._state: Optional[RenderState] = None
        self._from_viewport: Optional[Viewport] = None
        self._after_id: Optional[str] = None
        self._step = 0
        self._total_steps = 1

        self.canvas.bind("<MouseWheel>", self._on_mousewheel)
        self.canvas.bind("<Button-4>", lambda e: self.canvas.yview_scroll(-3, "units"))
        self.canvas.bind("<Button-5>", lambda e: self.canvas.yview_scroll(3, "units"))

    # -------------------------------------------------------------------------
    # PUBLIC API
    # -------------------------------------------------------------------------

    def measure_label(self, text: str) -> float:
        """Rendered width of a label in canvas pixels."""
        return float(self.label_font.measure(text))

    def clear(self) -> None:
        """Drop every item; used before drawing a newly loaded sitemap."""
        self._cancel_animation()
        self.canvas.delete("all")
        self._nodes.clear()
        self._links.clear()
        self._state = None
        self._from_viewport = None

    def render(self, state: RenderState) -> None:
        """
        Animate from what is on screen to `state`.

        A transition still running is first completed instantly, so items
        always match the previous state when the new plan starts.
        """
        if self._after_id is not None:
            self._cancel_animation()
            self._finish()

        self._from_viewport = self._state.viewport if self._state is not None else state.viewport
        self._state = state
        plan = state.plan

        for tr in plan.entering:
            self._create_node(state.nodes[tr.node_id])
        for tr in plan.entering_links:
            self._create_link(tr.target_id)

        for node_id, layout_node in state.nodes.items():
            self._sync_indicator(node_id, layout_node, state)

        self._step = 0
        self._total_steps = frame_count(plan.duration_ms)
        logger.debug(f"Animating {self._total_steps} frames over {plan.duration_ms} ms")
        self._tick()

    # -------------------------------------------------------------------------
    # ANIMATION LOOP
    # -------------------------------------------------------------------------

    def _tick(self) -> None:
        self._after_id = None
        if self._state is None:
            return
        self._step += 1
        t = min(1.0, self._step / self._total_steps)
        self._apply_frame(frame_at(self._state.plan, t), self._viewport_at(t))
        if t >= 1.0:
            self._discard_exiting()
        else:
            self._after_id = self.after(const.FRAME_INTERVAL_MS, self._tick)

    def _finish(self) -> None:
        if self._state is None:
            return
        self._apply_frame(frame_at(self._state.plan, 1.0), self._state.viewport)
        self._discard_exiting()

    def _viewport_at(self, t: float) -> Viewport:
        return viewport_at(self._from_viewport or self._state.viewport, self._state.viewport, t)

    def _cancel_animation(self) -> None:
        if self._after_id is not None:
            self.after_cancel(self._after_id)
            self._after_id = None

    def _apply_frame(self, frame: Frame, viewport: Viewport) -> None:
        top = viewport.top
        margin_left = viewport.margin_left
        self._update_scrollregion(self._state, viewport)
        bg = self.palette["background"]
        r = const.MARKER_RADIUS

        for target_id, path in frame.links.items():
            line = self._links.get(target_id)
            if line is not None:
                self.canvas.coords(line, *link_polyline(path, top, margin_left))

        for node_id, node_frame in frame.nodes.items():
            items = self._nodes.get(node_id)
            if items is None:
                continue
            sx, sy = to_screen(node_frame.position, top, margin_left)
            opacity = node_frame.opacity
            marker_color = self.palette["marker_collapsed" if items.collapsed else "marker"]

            self.canvas.coords(items.marker, sx - r, sy - r, sx + r, sy + r)
            self.canvas.coords(items.label, sx + const.LABEL_OFFSET, sy)
            self.canvas.coords(items.indicator, sx + items.indicator_dx, sy)

            self.canvas.itemconfigure(items.marker, fill=blend(marker_color, bg, opacity), outline="")
            self.canvas.itemconfigure(items.label, fill=blend(self.palette["text"], bg, opacity))
            self.canvas.itemconfigure(items.indicator, fill=blend(self.palette["text"], bg, opacity))

    def _discard_exiting(self) -> None:
        plan = self._state.plan
        for tr in plan.exiting:
            items = self._nodes.pop(tr.node_id, None)
            if items is not None:
                self.canvas.delete(items.marker, items.label, items.indicator)
        for tr in plan.exiting_links:
            line = self._links.pop(tr.target_id, None)
            if line is not None:
                self.canvas.delete(line)

    # -------------------------------------------------------------------------
    # ITEM MANAGEMENT
    # -------------------------------------------------------------------------

    def _create_node(self, layout_node: LayoutNode) -> None:
        node = layout_node.node
        bg = self.palette["background"]

        marker = self.canvas.create_oval(0, 0, 0, 0, fill=bg, outline="", tags=("node", "marker"))
        label = self.canvas.create_text(
            0, 0, text=node.name, anchor="w", font=self.label_font, fill=bg, tags=("node", "label")
        )
        indicator = self.canvas.create_text(
            0, 0, text="", anchor="w", font=self.label_font, fill=bg, tags=("node", "indicator")
        )
        self.canvas.tag_bind(label, "<Button-1>", lambda e, url=node.url: self.on_open_url(url))
        self.canvas.tag_bind(label, "<Enter>", lambda e, item=label: self._hover(item, True))
        self.canvas.tag_bind(label, "<Leave>", lambda e, item=label: self._hover(item, False))

        if node.has_children:
            toggle = (lambda e, node_id=node.node_id: self.on_toggle(node_id, is_slow_modifier(e.state)))
            self.canvas.tag_bind(indicator, "<Button-1>", toggle)
            self.canvas.tag_bind(marker, "<Button-1>", toggle)
            self.canvas.tag_bind(indicator, "<Enter>", lambda e: self.canvas.configure(cursor="hand2"))
            self.canvas.tag_bind(indicator, "<Leave>", lambda e: self.canvas.configure(cursor=""))

        self._nodes[node.node_id] = _NodeItems(
            marker=marker,
            label=label,
            indicator=indicator,
            indicator_dx=0.0,
            collapsed=False,
        )

    def _create_link(self, target_id: int) -> None:
        line = self.canvas.create_line(
            0, 0, 0, 0, fill=self.palette["link"], width=1.5, smooth=False, tags=("link",)
        )
        self.canvas.tag_lower(line)
        self._links[target_id] = line

    def _sync_indicator(self, node_id: int, layout_node: LayoutNode, state: RenderState) -> None:
        items = self._nodes.get(node_id)
        if items is None:
            return
        width = state.label_widths.get(node_id, 0.0)
        items.indicator_dx = indicator_position(width)
        items.collapsed = layout_node.has_hidden_children
        self.canvas.itemconfigure(items.indicator, text=layout_node.indicator.glyph)

    def _update_scrollregion(self, state: RenderState, viewport: Viewport) -> None:
        deepest = max((n.y + state.label_widths.get(i, 0.0) for i, n in state.nodes.items()), default=0.0)
        width = viewport.margin_left + deepest + _SCROLL_PADDING
        self.canvas.configure(scrollregion=(0, 0, width, viewport.height))

    # -------------------------------------------------------------------------
    # EVENT HANDLERS
    # -------------------------------------------------------------------------

    def _hover(self, item: int, active: bool) -> None:
        self.canvas.itemconfigure(item, font=self.hover_font if active else self.label_font)
        self.canvas.configure(cursor="hand2" if active else "")

    def _on_mousewheel(self, event: Any) -> None:
        self.canvas.yview_scroll(int(-event.delta / 120) or (-1 if event.delta > 0 else 1), "units")
