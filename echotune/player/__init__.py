"""
Player Layer.

Locates the external media player and supervises its process.
"""

from .locator import find_player
from .process import is_process_alive, kill_process
from .supervisor import PlaybackSession, PlayerState, PlayerSupervisor, TerminationFlag

__all__ = [
    "PlaybackSession",
    "PlayerState",
    "PlayerSupervisor",
    "TerminationFlag",
    "find_player",
    "is_process_alive",
    "kill_process",
]
