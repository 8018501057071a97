"""Locations of the settings file and the default sound font."""

from __future__ import annotations

import os
import sys
from pathlib import Path

APP_NAME = "neothesia"
SETTINGS_FILE = "settings.ron"
SOUNDFONT_FILE = "default.sf2"
FLATPAK_SOUNDFONT = Path("/app/share/neothesia/default.sf2")


def _env_path(name: str) -> Path | None:
    value = os.environ.get(name)
    return Path(value) if value else None


def _is_windows() -> bool:
    return sys.platform.startswith("win")


def config_dir() -> Path | None:
    """Return the per-user configuration directory, if one can be found."""
    xdg = _env_path("XDG_CONFIG_HOME")
    if xdg is not None:
        return xdg / APP_NAME
    home = _env_path("HOME")
    if home is not None:
        return home / ".config" / APP_NAME
    return None


def settings_path() -> Path | None:
    """Return where the settings file lives."""
    if _is_windows():
        return Path(SETTINGS_FILE)
    directory = config_dir()
    return directory / SETTINGS_FILE if directory is not None else None


def default_soundfont_path() -> Path | None:
    """Return the first existing default sound font, if any."""
    if _is_windows():
        return Path(SOUNDFONT_FILE)

    candidates: list[Path] = []
    directory = config_dir()
    if directory is not None:
        candidates.append(directory / SOUNDFONT_FILE)
    # <prefix>/share/neothesia/default.sf2
    candidates.append(Path(sys.prefix) / "share" / APP_NAME / SOUNDFONT_FILE)
    candidates.append(FLATPAK_SOUNDFONT)
    return next((path for path in candidates if path.exists()), None)