from __future__ import annotations

from typing import ClassVar, Literal

import psutil

from killtree.config import Config
from killtree.errors import TerminationError
from killtree.models import KillOutput, MaybeAlreadyTerminated, ProcessId, Terminated

from .base import Killer, PlatformOps

AVAILABLE_MAX_PROCESS_ID = 0xFFFF_FFFF

PROTECTED_PROCESS_IDS: dict[ProcessId, str] = {
    0: "Not allowed to kill System Idle Process",
    4: "Not allowed to kill System",
}


class WindowsKiller:
    """Force-terminates with ``TerminateProcess`` through psutil."""

    def kill(self, process_id: ProcessId) -> KillOutput:
        try:
            psutil.Process(process_id).kill()
        except psutil.NoSuchProcess as err:
            # Invalid parameter from OpenProcess: the process is already gone
            return MaybeAlreadyTerminated(process_id=process_id, source=err)
        except (psutil.Error, OSError, OverflowError) as err:
            raise TerminationError(process_id, str(err) or type(err).__name__) from err
        return Terminated(process_id=process_id)


class _Win(PlatformOps):
    name: ClassVar[Literal["posix", "nt"]] = "nt"

    def __init__(self) -> None:
        self.available_max_process_id = AVAILABLE_MAX_PROCESS_ID
        self.protected_process_ids = PROTECTED_PROCESS_IDS

    def new_killer(self, config: Config) -> Killer:
        # Signals do not exist on Windows; config.signal is ignored
        return WindowsKiller()


platform_impl: PlatformOps = _Win()
