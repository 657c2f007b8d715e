"""Kill a process together with all of its descendants."""

import asyncio

from killtree.config import Config
from killtree.logging import get_logger
from killtree.models import (
    Killed,
    MaybeAlreadyTerminated,
    Output,
    Outputs,
    ProcessId,
    ProcessIds,
    ProcessInfoMap,
    ProcessInfos,
)
from killtree.platform import Killer, PlatformOps
from killtree.platform import platform as current_platform
from killtree.tree import (
    get_child_process_id_map,
    get_process_ids_to_kill,
    get_process_info_map,
    parse_kill_output,
)

logger = get_logger(__name__)


def _plan(
    process_id: ProcessId,
    config: Config,
    platform: PlatformOps,
    process_infos: ProcessInfos,
) -> tuple[ProcessIds, ProcessInfoMap]:
    """Build the tree from a snapshot and return the kill order (children first)."""
    child_process_id_map = get_child_process_id_map(
        process_infos, platform.child_process_id_map_filter
    )
    process_ids_to_kill = get_process_ids_to_kill(process_id, child_process_id_map, config)
    process_ids_to_kill.reverse()
    logger.debug("Kill order for process id %d: %s", process_id, process_ids_to_kill)
    return process_ids_to_kill, get_process_info_map(process_infos)


def _record(outputs: Outputs, output: Output | None) -> None:
    if output is None:
        return
    if isinstance(output, Killed):
        logger.info(
            "Killed process %d (%s), parent %d",
            output.process_id,
            output.name,
            output.parent_process_id,
        )
    elif isinstance(output, MaybeAlreadyTerminated):
        logger.info(
            "Process %d maybe already terminated: %r", output.process_id, output.source
        )
    outputs.append(output)


def _prepare(
    process_id: ProcessId, config: Config | None, platform: PlatformOps | None
) -> tuple[Config, PlatformOps, Killer]:
    config = config if config is not None else Config()
    platform = platform if platform is not None else current_platform
    platform.validate_process_id(process_id)
    killer: Killer = platform.new_killer(config)
    return config, platform, killer


def kill_tree(
    process_id: ProcessId,
    config: Config | None = None,
    *,
    platform: PlatformOps | None = None,
) -> Outputs:
    """
    Kill ``process_id`` and all of its descendants, blocking until done.

    Processes are killed one by one, deepest first, the target last.

    Args:
        process_id: Root of the tree.
        config: Options; defaults to ``Config()``.
        platform: Platform adapter; defaults to the one for the running OS.

    Returns:
        One Output per processed id, in the order termination was attempted.

    Raises:
        InvalidProcessIdError: ``process_id`` is protected or out of range.
        InvalidSignalError: ``config.signal`` is unknown.
        EnumerationError: The process list could not be read.
        TerminationError: A process could not be killed. Processes killed
            before the failure stay killed.
    """
    config, platform, killer = _prepare(process_id, config, platform)
    process_infos = platform.get_process_infos()
    process_ids_to_kill, process_info_map = _plan(process_id, config, platform, process_infos)

    outputs: Outputs = []
    for pid in process_ids_to_kill:
        kill_output = killer.kill(pid)
        _record(outputs, parse_kill_output(kill_output, process_info_map))
    return outputs


async def kill_tree_async(
    process_id: ProcessId,
    config: Config | None = None,
    *,
    platform: PlatformOps | None = None,
) -> Outputs:
    """
    Asynchronous variant of :func:`kill_tree`.

    Process metadata is gathered concurrently; kills still run one at a
    time in the same order, each in a worker thread.
    """
    config, platform, killer = _prepare(process_id, config, platform)
    process_infos = await platform.get_process_infos_async()
    process_ids_to_kill, process_info_map = _plan(process_id, config, platform, process_infos)

    outputs: Outputs = []
    for pid in process_ids_to_kill:
        kill_output = await asyncio.to_thread(killer.kill, pid)
        _record(outputs, parse_kill_output(kill_output, process_info_map))
    return outputs
