"""System-wide process enumeration with psutil."""

import asyncio

import psutil

from killtree.errors import EnumerationError
from killtree.logging import get_logger
from killtree.models import ProcessId, ProcessInfo, ProcessInfos

logger = get_logger(__name__)


def list_process_ids() -> list[ProcessId]:
    """
    List the ids of every visible process.

    Raises:
        EnumerationError: The listing itself failed.
    """
    try:
        pids = psutil.pids()
    except (psutil.Error, OSError) as err:
        raise EnumerationError(str(err) or type(err).__name__) from err

    process_ids: list[ProcessId] = []
    for pid in pids:
        if not isinstance(pid, int) or pid < 0:
            logger.debug("Dropping process id %r that is not an unsigned integer", pid)
            continue
        process_ids.append(pid)
    return process_ids


def get_process_info(process_id: ProcessId) -> ProcessInfo | None:
    """
    Read the parent id and name of one process.

    Returns None when the process vanished or its metadata cannot be read.
    """
    try:
        proc = psutil.Process(process_id)
        # Use oneshot() context manager for efficient attribute access
        with proc.oneshot():
            parent_process_id = proc.ppid()
            name = proc.name()
    except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess, OSError) as err:
        logger.debug("Failed to get process info for process id %d: %r", process_id, err)
        return None

    return ProcessInfo(
        process_id=process_id,
        parent_process_id=parent_process_id or 0,
        name=name or "",
    )


def get_process_infos() -> ProcessInfos:
    """Take a snapshot of every process on the calling thread."""
    process_infos: ProcessInfos = []
    for process_id in list_process_ids():
        process_info = get_process_info(process_id)
        if process_info is not None:
            process_infos.append(process_info)
    return process_infos


async def get_process_infos_async() -> ProcessInfos:
    """
    Take a snapshot of every process, looking each one up in a worker thread.

    Lookups run concurrently; each fills its own result slot and the slots
    are merged in listing order once all of them are done.
    """
    process_ids = await asyncio.to_thread(list_process_ids)
    results = await asyncio.gather(
        *(asyncio.to_thread(get_process_info, process_id) for process_id in process_ids),
        return_exceptions=True,
    )

    process_infos: ProcessInfos = []
    for process_id, result in zip(process_ids, results):
        if isinstance(result, BaseException):
            logger.debug("Process info lookup for process id %d failed: %r", process_id, result)
            continue
        if result is not None:
            process_infos.append(result)
    return process_infos
