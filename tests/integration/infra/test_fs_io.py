from __future__ import annotations

"""
Integration tests for FileSystem Infrastructure.

Validates cross-platform data directory resolution and the starting folder
of the Open Sitemap dialog.
"""

import os
from pathlib import Path
from unittest.mock import patch

from sitemaptree.infra.fs import get_initial_browse_dir, get_user_data_dir

# -----------------------------------------------------------------------------
# PATH RESOLUTION TESTS
# -----------------------------------------------------------------------------

def test_get_user_data_dir_windows() -> None:
    """Resolution of %LOCALAPPDATA% on Windows systems."""
    mock_appdata = "C:/Users/Test/AppData/Local"
    with patch("os.name", "nt"):
        with patch.dict(os.environ, {"LOCALAPPDATA": mock_appdata}):
            with patch("os.makedirs"):
                path = get_user_data_dir()
                assert "SitemapTree" in path
                assert path.lower().startswith(os.path.abspath(mock_appdata).lower())


def test_get_user_data_dir_unix() -> None:
    """Resolution of ~/.sitemaptree on Unix-like systems."""
    mock_home = "/home/testuser"
    with patch("os.name", "posix"):
        with patch("os.path.expanduser", return_value=mock_home):
            with patch("os.makedirs"):
                path = get_user_data_dir()
                normalized_path = path.replace("\\", "/")
                assert normalized_path.endswith("/home/testuser/.sitemaptree")


def test_get_user_data_dir_creates_directory(tmp_path: Path) -> None:
    with patch("os.name", "posix"):
        with patch("os.path.expanduser", return_value=str(tmp_path)):
            path = get_user_data_dir()
    assert os.path.isdir(path)

# -----------------------------------------------------------------------------
# BROWSE DIRECTORY TESTS
# -----------------------------------------------------------------------------

def test_initial_browse_dir_keeps_existing_folder(tmp_path: Path) -> None:
    assert get_initial_browse_dir(str(tmp_path)) == str(tmp_path)


def test_initial_browse_dir_falls_back_to_home(tmp_path: Path) -> None:
    with patch("os.path.expanduser", return_value="/home/testuser"):
        assert get_initial_browse_dir(str(tmp_path / "gone")) == "/home/testuser"
        assert get_initial_browse_dir("") == "/home/testuser"
