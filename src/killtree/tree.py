"""Process tree model and the breadth-first walk that orders a tree kill."""

from collections import deque
from collections.abc import Callable, Iterable

from killtree.config import Config
from killtree.logging import get_logger
from killtree.models import (
    ChildProcessIdMap,
    Killed,
    KillOutput,
    MaybeAlreadyTerminated,
    Output,
    ProcessId,
    ProcessIds,
    ProcessInfo,
    ProcessInfoMap,
    Terminated,
)

logger = get_logger(__name__)

ChildProcessIdMapFilter = Callable[[ProcessInfo], bool]


def get_child_process_id_map(
    process_infos: Iterable[ProcessInfo],
    exclude: ChildProcessIdMapFilter,
) -> ChildProcessIdMap:
    """
    Group process ids by parent id.

    Entries for which ``exclude`` returns True are left out of the index, which
    is how self-parented pseudo processes are kept from looping on themselves.
    Every children list is sorted ascending.
    """
    child_process_id_map: ChildProcessIdMap = {}
    for process_info in process_infos:
        if exclude(process_info):
            continue
        child_process_id_map.setdefault(process_info.parent_process_id, []).append(
            process_info.process_id
        )
    for children in child_process_id_map.values():
        children.sort()
    return child_process_id_map


def get_process_info_map(process_infos: Iterable[ProcessInfo]) -> ProcessInfoMap:
    """Map process id to its ProcessInfo over the whole, unfiltered snapshot."""
    return {process_info.process_id: process_info for process_info in process_infos}


def get_process_ids_to_kill(
    target_process_id: ProcessId,
    child_process_id_map: ChildProcessIdMap,
    config: Config,
) -> ProcessIds:
    """
    Walk the tree under ``target_process_id`` breadth first.

    Returns the ids in discovery order: the target first (only when
    ``config.include_target``), then every descendant level by level, each
    level ordered by the sorted children lists. Killing must consume the list
    in reverse so children go before their parents.
    """
    process_ids_to_kill: ProcessIds = []
    discovered = {target_process_id}
    queue: deque[ProcessId] = deque([target_process_id])
    while queue:
        process_id = queue.popleft()
        if process_id == target_process_id:
            if config.include_target:
                process_ids_to_kill.append(process_id)
            else:
                logger.debug("Skipping target process id %d (include_target=False)", process_id)
        else:
            process_ids_to_kill.append(process_id)
        for child in child_process_id_map.get(process_id, ()):
            # A reused pid can make a snapshot cyclic
            if child in discovered:
                continue
            discovered.add(child)
            queue.append(child)
    return process_ids_to_kill


def parse_kill_output(kill_output: KillOutput, process_info_map: ProcessInfoMap) -> Output | None:
    """
    Turn one termination outcome into a user-facing Output.

    A ``Terminated`` id is popped from ``process_info_map`` so it can never be
    reported twice; ids with no entry are dropped. ``MaybeAlreadyTerminated``
    passes through unchanged.
    """
    if isinstance(kill_output, MaybeAlreadyTerminated):
        return kill_output
    if isinstance(kill_output, Terminated):
        process_info = process_info_map.pop(kill_output.process_id, None)
        if process_info is None:
            logger.debug("Process info not found for process id %d", kill_output.process_id)
            return None
        return Killed(
            process_id=process_info.process_id,
            parent_process_id=process_info.parent_process_id,
            name=process_info.name,
        )
    raise TypeError(f"Unexpected kill output: {kill_output!r}")
