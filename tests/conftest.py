"""Shared fixtures: an in-memory platform with a scripted terminator."""

from __future__ import annotations

from typing import ClassVar, Literal

import pytest

from killtree.config import Config
from killtree.errors import TerminationError
from killtree.models import KillOutput, MaybeAlreadyTerminated, ProcessId, ProcessInfo, Terminated
from killtree.platform.base import PlatformOps

SAMPLE_PROCESS_INFOS = [
    ProcessInfo(process_id=1, parent_process_id=0, name="init"),
    ProcessInfo(process_id=2, parent_process_id=1, name="a"),
    ProcessInfo(process_id=3, parent_process_id=2, name="b"),
    ProcessInfo(process_id=4, parent_process_id=1, name="c"),
]


class FakeKiller:
    """Records every kill and answers from a script."""

    def __init__(
        self,
        maybe_gone: set[ProcessId] | None = None,
        failing: set[ProcessId] | None = None,
    ) -> None:
        self.maybe_gone = maybe_gone or set()
        self.failing = failing or set()
        self.killed: list[ProcessId] = []

    def kill(self, process_id: ProcessId) -> KillOutput:
        self.killed.append(process_id)
        if process_id in self.failing:
            raise TerminationError(process_id, "Operation not permitted")
        if process_id in self.maybe_gone:
            source = ProcessLookupError(3, "No such process")
            return MaybeAlreadyTerminated(process_id=process_id, source=source)
        return Terminated(process_id=process_id)


class FakePlatform(PlatformOps):
    name: ClassVar[Literal["posix", "nt"]] = "posix"

    def __init__(
        self,
        process_infos: list[ProcessInfo],
        killer: FakeKiller | None = None,
        available_max_process_id: int = 99999,
        protected_process_ids: dict[ProcessId, str] | None = None,
    ) -> None:
        self.process_infos = process_infos
        self.killer = killer or FakeKiller()
        self.available_max_process_id = available_max_process_id
        if protected_process_ids is None:
            protected_process_ids = {0: "Not allowed to kill kernel process"}
        self.protected_process_ids = protected_process_ids
        self.configs: list[Config] = []
        self.snapshots_taken = 0

    def new_killer(self, config: Config) -> FakeKiller:
        self.configs.append(config)
        return self.killer

    def get_process_infos(self) -> list[ProcessInfo]:
        self.snapshots_taken += 1
        return list(self.process_infos)

    async def get_process_infos_async(self) -> list[ProcessInfo]:
        return self.get_process_infos()


@pytest.fixture
def sample_process_infos() -> list[ProcessInfo]:
    return list(SAMPLE_PROCESS_INFOS)


@pytest.fixture
def fake_platform() -> FakePlatform:
    return FakePlatform(list(SAMPLE_PROCESS_INFOS))
