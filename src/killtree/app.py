"""killtree - interactive process tree browser."""

from enum import Enum
from queue import Empty, Queue

from textual.app import App, ComposeResult
from textual.containers import Container
from textual.widgets import DataTable, Footer, Static

from killtree.config import Config
from killtree.core import kill_tree_async
from killtree.errors import KillTreeError
from killtree.logging import get_logger
from killtree.models import (
    ChildProcessIdMap,
    Killed,
    MaybeAlreadyTerminated,
    Outputs,
    ProcessId,
    ProcessInfos,
)
from killtree.monitor import ProcessMonitor
from killtree.platform import PlatformOps
from killtree.platform import platform as current_platform
from killtree.tree import get_child_process_id_map, get_process_ids_to_kill

logger = get_logger(__name__)

PREVIEW_LIMIT = 12


class SortKey(Enum):
    """Sort keys for the process table."""

    PID = "pid"
    NAME = "name"
    CHILDREN = "children"


def format_outputs(outputs: Outputs) -> str:
    """Summarize the outcome of one tree kill for a notification."""
    killed = sum(1 for output in outputs if isinstance(output, Killed))
    gone = sum(1 for output in outputs if isinstance(output, MaybeAlreadyTerminated))
    summary = f"Killed {killed} process{'es' if killed != 1 else ''}"
    if gone:
        summary += f", {gone} maybe already terminated"
    return summary


def format_preview(process_ids: list[ProcessId], limit: int = PREVIEW_LIMIT) -> str:
    """Render a discovery list, truncated to ``limit`` ids."""
    if not process_ids:
        return "nothing to kill"
    shown = ", ".join(str(pid) for pid in process_ids[:limit])
    if len(process_ids) > limit:
        shown += f", ... (+{len(process_ids) - limit})"
    return f"{len(process_ids)} to kill: {shown}"


class TreePreview(Static):
    """Header widget describing what a kill of the highlighted row would hit."""

    DEFAULT_CSS = """
    TreePreview {
        height: auto;
        min-height: 3;
        padding: 1;
        background: $surface;
    }
    """

    def __init__(self, *args, **kwargs) -> None:
        """Initialize TreePreview."""
        super().__init__(*args, **kwargs)
        self._target: ProcessId | None = None
        self._process_ids: list[ProcessId] = []
        self._include_target = True

    @property
    def process_ids(self) -> list[ProcessId]:
        """Ids of the previewed tree, in discovery order."""
        return list(self._process_ids)

    def show_tree(
        self,
        target: ProcessId | None,
        child_process_id_map: ChildProcessIdMap,
        config: Config,
    ) -> None:
        """Preview the tree rooted at ``target``."""
        self._target = target
        self._include_target = config.include_target
        if target is None:
            self._process_ids = []
        else:
            self._process_ids = get_process_ids_to_kill(target, child_process_id_map, config)
        self.update(self._describe())

    def _describe(self) -> str:
        if self._target is None:
            return "No process selected"
        target_note = "" if self._include_target else " (target excluded)"
        return f"PID {self._target}{target_note}: {format_preview(self._process_ids)}"


class ProcessTable(Container):
    """Container for the process data table."""

    DEFAULT_CSS = """
    ProcessTable {
        height: 1fr;
        border: solid $primary;
    }
    """

    def __init__(self, *args, **kwargs) -> None:
        """Initialize ProcessTable."""
        super().__init__(*args, **kwargs)
        self._current_pids: set[ProcessId] = set()
        self._sort_key: SortKey = SortKey.PID
        self._child_process_id_map: ChildProcessIdMap = {}

    @property
    def sort_key(self) -> SortKey:
        """Get current sort key."""
        return self._sort_key

    @property
    def child_process_id_map(self) -> ChildProcessIdMap:
        """Parent to children index of the last snapshot shown."""
        return self._child_process_id_map

    def cycle_sort(self) -> SortKey:
        """Cycle to the next sort key and return it."""
        keys = list(SortKey)
        current_index = keys.index(self._sort_key)
        self._sort_key = keys[(current_index + 1) % len(keys)]
        return self._sort_key

    def compose(self) -> ComposeResult:
        """Compose the process table."""
        yield DataTable(id="process-table")

    def on_mount(self) -> None:
        """Initialize the data table when mounted."""
        table = self.query_one("#process-table", DataTable)
        table.cursor_type = "row"

        table.add_column("PID", key="pid", width=8)
        table.add_column("PPID", key="ppid", width=8)
        table.add_column("CHILDREN", key="children", width=9)
        table.add_column("NAME", key="name")

    def selected_process_id(self) -> ProcessId | None:
        """Id of the highlighted row, if any."""
        table = self.query_one("#process-table", DataTable)
        if table.row_count == 0:
            return None
        try:
            row_key, _ = table.coordinate_to_cell_key(table.cursor_coordinate)
        except Exception:
            return None  # Cursor outside the table
        return int(row_key.value) if row_key.value is not None else None

    def update_processes(self, process_infos: ProcessInfos, platform: PlatformOps) -> None:
        """
        Replace the table contents with a new snapshot.

        Rows are rebuilt in sort order; the cursor stays on the same process
        when it is still alive.
        """
        table = self.query_one("#process-table", DataTable)
        selected = self.selected_process_id()

        self._child_process_id_map = get_child_process_id_map(
            process_infos, platform.child_process_id_map_filter
        )
        sorted_infos = sorted(process_infos, key=self._sort_func())

        table.clear()
        for info in sorted_infos:
            table.add_row(
                str(info.process_id),
                str(info.parent_process_id),
                str(len(self._child_process_id_map.get(info.process_id, ()))),
                info.name[:50],
                key=str(info.process_id),
            )
        self._current_pids = {info.process_id for info in sorted_infos}

        if selected is not None and selected in self._current_pids:
            table.move_cursor(row=table.get_row_index(str(selected)))

    def _sort_func(self):
        children = self._child_process_id_map
        key_func = {
            SortKey.PID: lambda p: p.process_id,
            SortKey.NAME: lambda p: (p.name.lower(), p.process_id),
            SortKey.CHILDREN: lambda p: (-len(children.get(p.process_id, ())), p.process_id),
        }
        return key_func[self._sort_key]


class KillTreeApp(App):
    """Browse processes and kill whole trees."""

    TITLE = "killtree"
    SUB_TITLE = "Process Tree Killer"

    CSS = """
    Screen {
        layout: vertical;
    }

    #tree-preview {
        dock: top;
        height: auto;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("k", "kill", "Kill tree"),
        ("t", "toggle_target", "Include target"),
        ("f6", "sort", "Sort"),
    ]

    def __init__(
        self,
        config: Config | None = None,
        platform: PlatformOps | None = None,
        poll_rate: float = 2.0,
    ) -> None:
        """Initialize the KillTreeApp."""
        super().__init__()
        self._config = config if config is not None else Config()
        self._platform = platform if platform is not None else current_platform
        self._update_queue: Queue[ProcessInfos] = Queue()
        self._monitor = ProcessMonitor(
            self._update_queue, poll_rate=poll_rate, platform=self._platform
        )

    @property
    def config(self) -> Config:
        """Options used for the next kill."""
        return self._config

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield TreePreview(id="tree-preview")
        yield ProcessTable()
        yield Footer()

    def on_mount(self) -> None:
        """Start the process monitor when the app is mounted."""
        self._monitor.start()
        self.set_interval(0.5, self._check_for_updates)

    def _check_for_updates(self) -> None:
        """Drain the queue and show the most recent snapshot."""
        process_infos = None
        while True:
            try:
                process_infos = self._update_queue.get_nowait()
            except Empty:
                break

        if process_infos is not None:
            self.show_processes(process_infos)

    def show_processes(self, process_infos: ProcessInfos) -> None:
        """Show a snapshot and refresh the preview."""
        self.query_one(ProcessTable).update_processes(process_infos, self._platform)
        self._refresh_preview()

    def _refresh_preview(self) -> None:
        process_table = self.query_one(ProcessTable)
        self.query_one("#tree-preview", TreePreview).show_tree(
            process_table.selected_process_id(),
            process_table.child_process_id_map,
            self._config,
        )

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        """Follow the cursor with the preview."""
        self._refresh_preview()

    async def action_kill(self) -> None:
        """Kill the tree of the highlighted process."""
        process_id = self.query_one(ProcessTable).selected_process_id()
        if process_id is None:
            self.notify("No process selected", severity="warning")
            return

        try:
            outputs = await kill_tree_async(process_id, self._config, platform=self._platform)
        except KillTreeError as err:
            logger.warning("Kill of tree %d failed: %s", process_id, err)
            self.notify(str(err), severity="error")
            return
        self.notify(format_outputs(outputs))

    def action_toggle_target(self) -> None:
        """Toggle whether the highlighted process itself is killed."""
        self._config = Config(
            signal=self._config.signal,
            include_target=not self._config.include_target,
        )
        self._refresh_preview()
        self.notify(f"Include target: {'on' if self._config.include_target else 'off'}")

    def action_sort(self) -> None:
        """Handle sort action - cycle through sort keys."""
        new_sort_key = self.query_one(ProcessTable).cycle_sort()
        self.notify(f"Sort: {new_sort_key.value.upper()}")

    def action_quit(self) -> None:
        """Handle quit action with graceful cleanup."""
        self._monitor.stop()
        self.exit()


def main() -> None:
    """Entry point for the interactive browser."""
    app = KillTreeApp()
    app.run()


if __name__ == "__main__":
    main()
