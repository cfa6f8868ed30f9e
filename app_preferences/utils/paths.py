"""Path helpers used across the application."""

from __future__ import annotations

import os
from pathlib import Path

APP_NAME = "app-preferences"
HOME_ENV = "APP_PREFERENCES_HOME"


def default_user_data_dir(app_name: str = APP_NAME) -> Path:
    """Return the per-user directory where settings files are kept.

    ``APP_PREFERENCES_HOME`` wins when set. Otherwise ``%APPDATA%`` is used on
    Windows and ``$XDG_CONFIG_HOME`` (``~/.config``) everywhere else.
    """

    override = os.getenv(HOME_ENV)
    if override:
        return Path(override).expanduser()
    if os.name == "nt":
        base = Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
    else:
        base = Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
    return base.expanduser() / app_name


def home_dir() -> str:
    return str(Path.home())


def resolve_home(file: str) -> str:
    """Replace a leading ``~`` with the user's home directory.

    Only the first character is inspected; anything else is returned as given.
    """

    if file and file[0] == "~":
        return home_dir() + file[1:]
    return file
