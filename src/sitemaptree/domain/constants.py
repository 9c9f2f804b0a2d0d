from __future__ import annotations

"""
Domain Constants.

Provides centralized access to application-wide constants: versioning,
diagram geometry defaults, animation timings, and the glyphs used by the
disclosure indicators.
"""

from typing import Dict

CURRENT_CONFIG_VERSION = "1.0.0"
APP_NAME = "SitemapTree"

# -----------------------------------------------------------------------------
# DIAGRAM GEOMETRY
# -----------------------------------------------------------------------------

# Vertical distance between neighbouring slots (breadth axis)
DEFAULT_NODE_SPACING = 48.0
# Horizontal distance between consecutive depths
DEFAULT_DEPTH_SPACING = 320.0

DEFAULT_MARGIN_TOP = 10.0
DEFAULT_MARGIN_BOTTOM = 10.0
DEFAULT_MARGIN_LEFT = 240.0

# Offsets measured from the node anchor point along the depth axis
LABEL_OFFSET = 6.0
INDICATOR_GAP = 5.0
LINK_GAP = 12.0
MARKER_OFFSET = 6.0
MARKER_RADIUS = 2.5

# Fallback label measurement when no font metrics are available
AVERAGE_CHAR_WIDTH = 9.0

# Nodes shallower than this start expanded; None expands everything
DEFAULT_INITIAL_DEPTH = 1

# -----------------------------------------------------------------------------
# ANIMATION
# -----------------------------------------------------------------------------

NORMAL_DURATION_MS = 250
SLOW_DURATION_MS = 2500
FRAME_INTERVAL_MS = 16

# -----------------------------------------------------------------------------
# INDICATOR GLYPHS
# -----------------------------------------------------------------------------

INDICATOR_GLYPHS: Dict[str, str] = {
    "expanded": "▾",
    "collapsed": "▸",
    "none": "",
}

# -----------------------------------------------------------------------------
# SITEMAP INPUT
# -----------------------------------------------------------------------------

SITEMAP_EXTENSIONS = (".xml",)
SITEMAP_MIME_TYPES = ("text/xml", "application/xml")
