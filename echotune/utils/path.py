"""
Utilities for resolving the per-user configuration and data directories.
"""

import os
from pathlib import Path

from echotune.exceptions import DataDirectoryError

APP_DIR_NAME = "echotune"


def _resolve_base(windows_var: str, xdg_var: str, xdg_default: str) -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv(windows_var, "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv(xdg_var) or xdg_default)
    try:
        return base_dir.expanduser()
    except RuntimeError as e:
        # expanduser() raises when the home directory cannot be determined
        raise DataDirectoryError(f"Could not resolve home directory: {e}") from e


def get_config_dir() -> Path:
    """Returns the directory holding the optional config.ini."""
    return _resolve_base("APPDATA", "XDG_CONFIG_HOME", "~/.config") / APP_DIR_NAME


def get_data_dir() -> Path:
    """Returns the directory where the cached datasets are stored."""
    return _resolve_base("LOCALAPPDATA", "XDG_DATA_HOME", "~/.local/share") / APP_DIR_NAME


def create_dir(directory_path: Path) -> None:
    """Creates a directory if it does not already exist."""
    try:
        directory_path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DataDirectoryError(
            f"Could not create directory '{directory_path}': {e}"
        ) from e
