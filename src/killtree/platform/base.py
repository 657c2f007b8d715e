from __future__ import annotations

from collections.abc import Mapping
from typing import ClassVar, Literal, Protocol

from killtree import snapshot
from killtree.config import Config
from killtree.models import KillOutput, ProcessId, ProcessInfo, ProcessInfos
from killtree.validation import validate_process_id


class Killer(Protocol):
    """Terminates single processes and classifies the outcome."""

    def kill(self, process_id: ProcessId) -> KillOutput: ...


class PlatformOps(Protocol):
    name: ClassVar[Literal["posix", "nt"]]
    available_max_process_id: int
    protected_process_ids: Mapping[ProcessId, str]

    def new_killer(self, config: Config) -> Killer: ...

    def child_process_id_map_filter(self, process_info: ProcessInfo) -> bool:
        """
        Exclude entries that claim themselves as parent, such as an idle or
        kernel pseudo process sitting at the root of the tree.
        """
        return process_info.parent_process_id == process_info.process_id

    def validate_process_id(self, process_id: ProcessId) -> None:
        validate_process_id(process_id, self.available_max_process_id, self.protected_process_ids)

    def get_process_infos(self) -> ProcessInfos:
        return snapshot.get_process_infos()

    async def get_process_infos_async(self) -> ProcessInfos:
        return await snapshot.get_process_infos_async()
