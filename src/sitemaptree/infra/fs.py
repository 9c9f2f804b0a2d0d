from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform resolution of the per-user data directory where the
application keeps its preferences and diagnostic logs.
"""

import os

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "SitemapTree"
UNIX_APP_DIR_NAME = ".sitemaptree"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------


def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/SitemapTree
    - Linux/Mac: ~/.sitemaptree

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    # Windows specific resolution
    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    # Posix fallback (Linux/Mac)
    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    # Idempotent directory creation
    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


def get_initial_browse_dir(last_dir: str) -> str:
    """Return `last_dir` if it still exists, else the user's home directory."""
    if last_dir and os.path.isdir(last_dir):
        return last_dir
    return os.path.expanduser("~")
