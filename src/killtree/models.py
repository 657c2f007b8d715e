"""Data models for killtree."""

from dataclasses import dataclass
from typing import TypeAlias

ProcessId: TypeAlias = int


@dataclass(slots=True, frozen=True)
class ProcessInfo:
    """Immutable snapshot of one process's identity at enumeration time."""

    process_id: ProcessId
    parent_process_id: ProcessId
    name: str


@dataclass(slots=True, frozen=True)
class Terminated:
    """The termination primitive succeeded for this process id."""

    process_id: ProcessId


@dataclass(slots=True, frozen=True)
class MaybeAlreadyTerminated:
    """
    The termination primitive failed in a way consistent with the process
    having already exited. Reported as an outcome, never as an error.
    """

    process_id: ProcessId
    source: BaseException


@dataclass(slots=True, frozen=True)
class Killed:
    """A killed process, enriched with what the snapshot knew about it."""

    process_id: ProcessId
    parent_process_id: ProcessId
    name: str


KillOutput: TypeAlias = Terminated | MaybeAlreadyTerminated
Output: TypeAlias = Killed | MaybeAlreadyTerminated

ProcessIds: TypeAlias = list[ProcessId]
ProcessInfos: TypeAlias = list[ProcessInfo]
ProcessInfoMap: TypeAlias = dict[ProcessId, ProcessInfo]
ChildProcessIdMap: TypeAlias = dict[ProcessId, list[ProcessId]]
Outputs: TypeAlias = list[Output]
