"""
Locates the VLC binary on the host.
"""

import logging
import shutil
from pathlib import Path

from echotune.exceptions import PlayerNotFoundError

log = logging.getLogger(__name__)

VLC_LOCATIONS = (
    # macOS
    "/Applications/VLC.app/Contents/MacOS/VLC",
    "/Applications/VLC.app/Contents/MacOS/lib/vlc",
    "/Applications/VLC.app/Contents/MacOS/lib/vlc/vlc",
    # Windows
    "C:\\Program Files\\VideoLAN\\VLC\\vlc.exe",
    "C:\\Program Files (x86)\\VideoLAN\\VLC\\vlc.exe",
    # Linux
    "/usr/bin/vlc",
    "/usr/local/bin/vlc",
    "/snap/bin/vlc",
    "/var/lib/snapd/snap/bin/vlc",
)


def find_player(
    explicit: str | Path | None = None, candidates: tuple[str, ...] = VLC_LOCATIONS
) -> Path:
    """
    Returns the player binary to launch.

    An explicit path wins when it exists; otherwise the well-known install
    locations are probed in order, then `vlc` on PATH.

    Raises:
        PlayerNotFoundError: If no candidate exists.
    """
    if explicit:
        explicit_path = Path(explicit).expanduser()
        if explicit_path.is_file():
            return explicit_path
        raise PlayerNotFoundError(f"Configured player '{explicit_path}' does not exist.")

    for location in candidates:
        if Path(location).exists():
            log.debug(f"Found player at '{location}'.")
            return Path(location)

    if on_path := shutil.which("vlc"):
        log.debug(f"Found player on PATH at '{on_path}'.")
        return Path(on_path)

    raise PlayerNotFoundError("VLC is not installed.")
