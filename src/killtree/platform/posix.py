from __future__ import annotations

import os
import signal
import sys
from pathlib import Path
from typing import ClassVar, Literal

from killtree.config import Config
from killtree.errors import InvalidSignalError, TerminationError
from killtree.logging import get_logger
from killtree.models import KillOutput, MaybeAlreadyTerminated, ProcessId, Terminated

from .base import Killer, PlatformOps

logger = get_logger(__name__)

# PID_MAX_LIMIT on 64-bit Linux
_LINUX_PID_MAX_LIMIT = 0x0040_0000
_PID_MAX_PATH = Path("/proc/sys/kernel/pid_max")

PROTECTED_PROCESS_IDS: dict[ProcessId, str] = {
    0: "Not allowed to kill kernel process",
    1: "Not allowed to kill init process",
}


def resolve_available_max_process_id(platform_name: str = sys.platform) -> int:
    if platform_name.startswith("linux"):
        try:
            return int(_PID_MAX_PATH.read_text().strip()) - 1
        except (OSError, ValueError) as err:
            logger.debug("Failed to read %s: %r", _PID_MAX_PATH, err)
            return _LINUX_PID_MAX_LIMIT - 1
    if platform_name == "darwin":
        return 99999 - 1
    return 99999


def parse_signal(name: str) -> signal.Signals:
    """Resolve "SIGTERM", "sigterm" or "TERM" to a signal."""
    key = name.strip().upper()
    if not key.startswith("SIG"):
        key = f"SIG{key}"
    try:
        return signal.Signals[key]
    except KeyError:
        raise InvalidSignalError(name) from None


class PosixKiller:
    """Sends the configured signal with ``os.kill``."""

    def __init__(self, sig: signal.Signals) -> None:
        self.signal = sig

    def kill(self, process_id: ProcessId) -> KillOutput:
        try:
            os.kill(process_id, self.signal)
        except ProcessLookupError as err:
            # ESRCH: exited between the snapshot and now
            return MaybeAlreadyTerminated(process_id=process_id, source=err)
        except OverflowError as err:
            raise TerminationError(process_id, f"process id does not fit in pid_t: {err}") from err
        except OSError as err:
            raise TerminationError(process_id, err.strerror or str(err)) from err
        return Terminated(process_id=process_id)


class _Posix(PlatformOps):
    name: ClassVar[Literal["posix", "nt"]] = "posix"

    def __init__(self) -> None:
        self.available_max_process_id = resolve_available_max_process_id()
        self.protected_process_ids = PROTECTED_PROCESS_IDS

    def new_killer(self, config: Config) -> Killer:
        return PosixKiller(parse_signal(config.signal))


platform_impl: PlatformOps = _Posix()
