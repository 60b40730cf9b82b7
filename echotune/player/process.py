"""
Process-identifier based termination helpers.

These work on a bare PID so they can be called from contexts that do not own
the structured process handle (signal handlers, the watchdog task).
"""

import logging
import os
import signal

log = logging.getLogger(__name__)


def _is_valid_pid(pid: int | None) -> bool:
    return pid is not None and pid > 0


def kill_process(pid: int | None) -> bool:
    """
    Forcibly terminates a process by PID.

    On Windows os.kill with SIGTERM maps to TerminateProcess. Returns True if
    the termination request was delivered. An invalid PID or a process that is
    already gone is a no-op and never raises.
    """
    if not _is_valid_pid(pid):
        return False
    try:
        os.kill(pid, signal.SIGTERM)
    except OSError as e:
        log.debug(f"Termination request for PID {pid} was not delivered: {e}")
        return False
    return True


def is_process_alive(pid: int | None) -> bool:
    """Returns True if a process with this PID currently exists."""
    if not _is_valid_pid(pid):
        return False
    if os.name == "nt":
        # signal 0 is not supported on Windows
        import ctypes

        kernel32 = ctypes.windll.kernel32
        handle = kernel32.OpenProcess(0x1000, False, pid)
        if not handle:
            return False
        exit_code = ctypes.c_ulong()
        kernel32.GetExitCodeProcess(handle, ctypes.byref(exit_code))
        kernel32.CloseHandle(handle)
        return exit_code.value == 259  # STILL_ACTIVE
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        return True
    return True
