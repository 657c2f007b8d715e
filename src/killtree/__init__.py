"""Kill a process and all of its descendant processes."""

from killtree.config import Config
from killtree.core import kill_tree, kill_tree_async
from killtree.errors import (
    EnumerationError,
    InvalidProcessIdError,
    InvalidSignalError,
    KillTreeError,
    ProcessIdTooLargeError,
    TerminationError,
)
from killtree.models import (
    Killed,
    KillOutput,
    MaybeAlreadyTerminated,
    Output,
    Outputs,
    ProcessId,
    ProcessInfo,
    ProcessInfos,
    Terminated,
)

__all__ = [
    "Config",
    "EnumerationError",
    "InvalidProcessIdError",
    "InvalidSignalError",
    "KillOutput",
    "KillTreeError",
    "Killed",
    "MaybeAlreadyTerminated",
    "Output",
    "Outputs",
    "ProcessId",
    "ProcessIdTooLargeError",
    "ProcessInfo",
    "ProcessInfos",
    "TerminationError",
    "Terminated",
    "kill_tree",
    "kill_tree_async",
]
