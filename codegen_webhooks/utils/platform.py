"""Platform detection and config path lookup."""

from __future__ import annotations

import os
import sys
from pathlib import Path

APP_NAME = "codegen-webhooks"


def get_platform() -> str:
    if sys.platform == "win32":
        return "windows"
    if sys.platform == "darwin":
        return "macos"
    return "linux"


def get_config_dir() -> Path:
    env = os.environ.get("CODEGEN_WEBHOOKS_CONFIG_DIR")
    if env:
        return Path(env)

    platform = get_platform()
    if platform == "windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / APP_NAME
    if platform == "macos":
        return Path.home() / "Library" / "Application Support" / APP_NAME
    # Linux / XDG
    xdg = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg) / APP_NAME
