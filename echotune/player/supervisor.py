"""
Spawns the external media player and supervises it until it exits.

Three contexts can end playback: the primary wait on the process, the
SIGINT/SIGTERM handler, and a background watchdog task. The handler and the
watchdog only share the player's PID and a write-once termination flag, and
both terminate by PID, which is idempotent.
"""

import asyncio
import logging
import signal
import threading
from contextlib import suppress
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from echotune.exceptions import PlaybackError, SpawnError

from .process import kill_process

log = logging.getLogger(__name__)

DEFAULT_VOLUME = 10
DEFAULT_WATCHDOG_INTERVAL = 0.1
TERMINATION_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class TerminationFlag:
    """A monotonic false -> true flag, safe to set from a signal handler."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def set(self) -> None:
        self._event.set()

    def is_set(self) -> bool:
        return self._event.is_set()


class PlayerState(Enum):
    IDLE = "idle"
    SPAWNING = "spawning"
    RUNNING = "running"
    EXITED = "exited"


@dataclass
class PlaybackSession:
    """One spawned player process, from spawn to observed exit."""

    process: asyncio.subprocess.Process = field(repr=False)
    pid: int
    terminated: bool = False
    return_code: int | None = None

    def mark_terminated(self, return_code: int | None) -> None:
        if not self.terminated:
            self.terminated = True
            self.return_code = return_code


class PlayerSupervisor:
    """
    Owns the lifecycle of a single player process.

    Usage:
        supervisor = PlayerSupervisor(find_player(), volume=20)
        return_code = await supervisor.play(station.stream_url)
    """

    def __init__(
        self,
        player_path: str | Path,
        volume: int = DEFAULT_VOLUME,
        watchdog_interval: float = DEFAULT_WATCHDOG_INTERVAL,
        flag: TerminationFlag | None = None,
    ):
        self.player_path = Path(player_path)
        self.volume = volume
        self.watchdog_interval = watchdog_interval
        self.flag = flag or TerminationFlag()
        self.state = PlayerState.IDLE
        self.session: PlaybackSession | None = None
        self._watchdog_task: asyncio.Task | None = None
        self._installed_signals: list[tuple[int, object, bool]] = []

    def build_command(self, url: str) -> list[str]:
        """Headless VLC with its interface chatter suppressed."""
        return [
            str(self.player_path),
            "-I",
            "dummy",
            "--dummy-quiet",
            "--volume",
            str(self.volume),
            url,
        ]

    async def play(self, url: str, handle_signals: bool = True) -> int:
        """
        Spawns the player on url and blocks until it exits.

        Returns:
            The player's exit code.

        Raises:
            SpawnError: If the player cannot be started. No session is created.
            PlaybackError: If waiting on the process fails.
        """
        if self.state is not PlayerState.IDLE:
            raise RuntimeError("A supervisor can only run one playback session.")

        self.state = PlayerState.SPAWNING
        try:
            process = await asyncio.create_subprocess_exec(
                *self.build_command(url), stdin=asyncio.subprocess.DEVNULL
            )
        except OSError as e:
            self.state = PlayerState.IDLE
            raise SpawnError(f"Failed to start '{self.player_path}': {e}") from e

        session = PlaybackSession(process=process, pid=process.pid)
        self.session = session
        self.state = PlayerState.RUNNING
        log.debug(f"Player started with PID {session.pid}.")

        loop = asyncio.get_running_loop()
        if handle_signals:
            self._install_signal_handlers(loop)
        self._watchdog_task = asyncio.create_task(self._watchdog(session))

        try:
            return_code = await process.wait()
        except asyncio.CancelledError:
            kill_process(session.pid)
            raise
        except OSError as e:
            kill_process(session.pid)
            raise PlaybackError(f"Lost track of player PID {session.pid}: {e}") from e
        finally:
            session.mark_terminated(process.returncode)
            self.state = PlayerState.EXITED
            await self._stop_watchdog()
            if handle_signals:
                self._remove_signal_handlers(loop)

        log.debug(f"Player PID {session.pid} exited with code {return_code}.")
        return return_code

    def handle_signal(self, signum: int | None = None) -> None:
        """
        Raises the termination flag and kills the player right away.

        Safe to call any number of times, before, during or after playback.
        """
        self.flag.set()
        session = self.session
        if session is None or session.terminated:
            return
        name = signal.Signals(signum).name if signum else "shutdown request"
        log.info(f"Received {name}, killing player... {session.pid}")
        kill_process(session.pid)

    def request_shutdown(self) -> None:
        """Raises the termination flag and leaves the kill to the watchdog."""
        self.flag.set()

    async def _watchdog(self, session: PlaybackSession) -> None:
        """Re-asserts termination every interval once the flag is raised."""
        while not session.terminated:
            await asyncio.sleep(self.watchdog_interval)
            if self.flag.is_set() and not session.terminated:
                if kill_process(session.pid):
                    log.debug(f"Watchdog sent termination to PID {session.pid}.")

    async def _stop_watchdog(self) -> None:
        if self._watchdog_task and not self._watchdog_task.done():
            self._watchdog_task.cancel()
            with suppress(asyncio.CancelledError):
                await self._watchdog_task
        self._watchdog_task = None

    def _install_signal_handlers(self, loop: asyncio.AbstractEventLoop) -> None:
        for signum in TERMINATION_SIGNALS:
            try:
                loop.add_signal_handler(signum, self.handle_signal, signum)
                self._installed_signals.append((signum, None, True))
            except NotImplementedError:
                # Windows event loops have no add_signal_handler
                previous = signal.signal(
                    signum, lambda s, _frame: self.handle_signal(s)
                )
                self._installed_signals.append((signum, previous, False))

    def _remove_signal_handlers(self, loop: asyncio.AbstractEventLoop) -> None:
        while self._installed_signals:
            signum, previous, via_loop = self._installed_signals.pop()
            if via_loop:
                loop.remove_signal_handler(signum)
            else:
                signal.signal(signum, previous or signal.SIG_DFL)
