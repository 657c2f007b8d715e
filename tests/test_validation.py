"""Tests for process id validation."""

import pytest

from killtree.errors import InvalidProcessIdError, ProcessIdTooLargeError
from killtree.platform import posix, windows
from killtree.validation import validate_process_id


class TestValidateProcessId:
    """Tests for validate_process_id."""

    def test_accepts_ordinary_id(self):
        """Test an ordinary id passes."""
        validate_process_id(1234, 99998, posix.PROTECTED_PROCESS_IDS)

    def test_accepts_max(self):
        """Test the maximum itself is accepted."""
        validate_process_id(99998, 99998, posix.PROTECTED_PROCESS_IDS)

    def test_rejects_too_large(self):
        """Test an id above the maximum is rejected with a descriptive message."""
        with pytest.raises(ProcessIdTooLargeError) as exc_info:
            validate_process_id(99999, 99998, posix.PROTECTED_PROCESS_IDS)

        assert str(exc_info.value) == (
            "Process id is too large. process id: 99999, available max process id: 99998"
        )
        assert exc_info.value.process_id == 99999
        assert exc_info.value.available_max_process_id == 99998

    def test_too_large_is_invalid_process_id(self):
        """Test callers can catch every id rejection with one class."""
        with pytest.raises(InvalidProcessIdError):
            validate_process_id(10, 9, {})

    def test_rejects_negative(self):
        """Test negative ids are rejected."""
        with pytest.raises(InvalidProcessIdError):
            validate_process_id(-1, 99998, {})

    @pytest.mark.parametrize("process_id", [0, 1])
    def test_posix_protected(self, process_id):
        """Test the POSIX kernel and init ids are refused."""
        with pytest.raises(InvalidProcessIdError) as exc_info:
            validate_process_id(process_id, 99998, posix.PROTECTED_PROCESS_IDS)
        assert exc_info.value.reason == posix.PROTECTED_PROCESS_IDS[process_id]

    def test_windows_system_idle_process(self):
        """Test the Windows System Idle Process is refused."""
        with pytest.raises(InvalidProcessIdError) as exc_info:
            validate_process_id(0, windows.AVAILABLE_MAX_PROCESS_ID, windows.PROTECTED_PROCESS_IDS)
        assert str(exc_info.value) == "Not allowed to kill System Idle Process. process id: 0"

    def test_windows_system(self):
        """Test the Windows System process is refused."""
        with pytest.raises(InvalidProcessIdError) as exc_info:
            validate_process_id(4, windows.AVAILABLE_MAX_PROCESS_ID, windows.PROTECTED_PROCESS_IDS)
        assert str(exc_info.value) == "Not allowed to kill System. process id: 4"

    @pytest.mark.parametrize(
        "available_max_process_id",
        [
            posix.resolve_available_max_process_id("darwin"),
            posix.resolve_available_max_process_id("freebsd"),
            windows.AVAILABLE_MAX_PROCESS_ID,
        ],
    )
    def test_every_platform_max(self, available_max_process_id):
        """Test one past each platform's maximum is rejected."""
        with pytest.raises(ProcessIdTooLargeError):
            validate_process_id(available_max_process_id + 1, available_max_process_id, {})
