"""killtree exceptions."""

from __future__ import annotations

__all__ = [
    "KillTreeError",
    "InvalidProcessIdError",
    "ProcessIdTooLargeError",
    "InvalidSignalError",
    "EnumerationError",
    "TerminationError",
]


class KillTreeError(Exception):
    """Base class for every error raised by killtree."""


class InvalidProcessIdError(KillTreeError):
    """The process id is protected by the OS or otherwise not killable."""

    def __init__(self, process_id: int, reason: str) -> None:
        self.process_id = process_id
        self.reason = reason
        super().__init__(f"{reason}. process id: {process_id}")


class ProcessIdTooLargeError(InvalidProcessIdError):
    """The process id exceeds the platform's maximum."""

    def __init__(self, process_id: int, available_max_process_id: int) -> None:
        super().__init__(process_id, "Process id is too large")
        self.available_max_process_id = available_max_process_id

    def __str__(self) -> str:
        return (
            f"Process id is too large. process id: {self.process_id}, "
            f"available max process id: {self.available_max_process_id}"
        )


class InvalidSignalError(KillTreeError):
    """The configured signal name is unknown on this platform."""

    def __init__(self, signal: str) -> None:
        self.signal = signal
        super().__init__(f"Invalid signal: {signal}")


class EnumerationError(KillTreeError):
    """Listing the system's processes could not start."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Failed to list processes: {reason}")


class TerminationError(KillTreeError):
    """Termination failed for a reason other than the process being gone."""

    def __init__(self, process_id: int, reason: str) -> None:
        self.process_id = process_id
        self.reason = reason
        super().__init__(f"Failed to kill process. process id: {process_id}, reason: {reason}")
