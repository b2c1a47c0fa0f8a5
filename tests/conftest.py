"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path
from typing import Any

import pytest


@pytest.fixture
def hubio_spec() -> dict[str, Any]:
    """Structure with a repairable Hubio directory containing projects."""
    return {
        "dirs": {
            "Hubio": {
                "options": {"repair": True},
                "dirs": {"projects": {}},
            },
        },
    }


@pytest.fixture
def nested_spec() -> dict[str, Any]:
    """Structure mixing files and nested directories."""
    return {
        "files": ["settings.json"],
        "dirs": {
            "projects": {
                "files": ["index.db"],
                "dirs": {"archive": {}},
            },
            "logs": {},
        },
    }


@pytest.fixture
def isolated_xdg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME at a temporary directory and clear XDG overrides."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for var in (
        "XDG_CONFIG_HOME",
        "XDG_CACHE_HOME",
        "XDG_DATA_HOME",
        "XDG_BIN_HOME",
        "XDG_RUNTIME_DIR",
        "XDG_MUSIC_DIR",
        "XDG_DESKTOP_DIR",
        "XDG_DOCUMENTS_DIR",
        "XDG_DOWNLOAD_DIR",
        "XDG_PICTURES_DIR",
        "XDG_PUBLICSHARE_DIR",
        "XDG_TEMPLATES_DIR",
        "XDG_VIDEOS_DIR",
    ):
        monkeypatch.delenv(var, raising=False)
    return home
