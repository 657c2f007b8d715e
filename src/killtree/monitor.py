"""Background process snapshots for the interactive browser."""

import threading
from queue import Queue

from killtree.errors import EnumerationError
from killtree.logging import get_logger
from killtree.models import ProcessInfos
from killtree.platform import PlatformOps
from killtree.platform import platform as current_platform

logger = get_logger(__name__)


class ProcessMonitor:
    """
    Periodically snapshots the process list.

    Runs in a separate daemon thread and pushes each snapshot to a
    thread-safe Queue. A failed snapshot is logged and the loop keeps going.
    """

    def __init__(
        self,
        update_queue: Queue[ProcessInfos],
        poll_rate: float = 2.0,
        platform: PlatformOps | None = None,
    ) -> None:
        """
        Initialize the ProcessMonitor.

        Args:
            update_queue: Thread-safe queue to push snapshots to.
            poll_rate: How often to poll the system (in seconds). Default 2.0s.
            platform: Platform adapter used to enumerate processes.
        """
        self._queue = update_queue
        self._poll_rate = max(0.1, poll_rate)  # Minimum 0.1 seconds
        self._platform = platform if platform is not None else current_platform
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def poll_rate(self) -> float:
        """Get the current poll rate."""
        return self._poll_rate

    @property
    def is_running(self) -> bool:
        """Check if the monitor thread is running."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the monitoring thread."""
        if self.is_running:
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._poll_loop,
            daemon=True,
            name="ProcessMonitor",
        )
        self._thread.start()

    def stop(self, timeout: float | None = 5.0) -> None:
        """
        Stop the monitoring thread.

        Args:
            timeout: How long to wait for thread to stop (seconds).
        """
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None

    def _poll_loop(self) -> None:
        """Main polling loop running in the background thread."""
        while not self._stop_event.is_set():
            try:
                self._queue.put(self._platform.get_process_infos())
            except EnumerationError as err:
                logger.warning("Process snapshot failed: %s", err)

            # Wait for poll_rate seconds or until stop is requested
            self._stop_event.wait(timeout=self._poll_rate)
