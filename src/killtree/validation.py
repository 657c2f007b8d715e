"""Process id validation, run before any enumeration or termination."""

from collections.abc import Mapping

from killtree.errors import InvalidProcessIdError, ProcessIdTooLargeError
from killtree.models import ProcessId


def validate_process_id(
    process_id: ProcessId,
    available_max_process_id: int,
    protected_process_ids: Mapping[ProcessId, str],
) -> None:
    """
    Reject ids that cannot be the root of a tree kill on this platform.

    Args:
        process_id: The id to check.
        available_max_process_id: Largest id the platform can hand out.
        protected_process_ids: OS-reserved ids mapped to the reason they are refused.

    Raises:
        InvalidProcessIdError: The id is negative or protected.
        ProcessIdTooLargeError: The id exceeds ``available_max_process_id``.
    """
    if process_id < 0:
        raise InvalidProcessIdError(process_id, "Process id must not be negative")
    reason = protected_process_ids.get(process_id)
    if reason is not None:
        raise InvalidProcessIdError(process_id, reason)
    if process_id > available_max_process_id:
        raise ProcessIdTooLargeError(process_id, available_max_process_id)
