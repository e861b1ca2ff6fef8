from contextlib import asynccontextmanager
from dataclasses import replace
from pathlib import Path

import pytest

from core.dispatcher import ToolDispatcher
from core.errors import SyncError
from core.models import MirrorState


class FakeMirror:
    """Mirror stand-in backed by a plain directory; counts sync calls."""

    def __init__(self, root: Path, *, fail_sync: bool = False) -> None:
        self._state = MirrorState(
            remote_url="https://example.com/rootz.git",
            branch="main",
            local_root=root,
        )
        self.fail_sync = fail_sync
        self.sync_calls = 0
        self.guard_entries = 0

    @property
    def root(self) -> Path:
        return self._state.local_root

    @property
    def state(self) -> MirrorState:
        return self._state

    async def ensure_synced(self) -> None:
        self.sync_calls += 1
        if self.fail_sync:
            raise SyncError("remote unreachable")
        self._state = replace(self._state, synced=True)

    @asynccontextmanager
    async def guard(self):
        self.guard_entries += 1
        yield


@pytest.fixture
def fake_mirror(tmp_path):
    return FakeMirror(tmp_path)


@pytest.fixture
def dispatcher():
    return ToolDispatcher()


@pytest.fixture
def failing_mirror(tmp_path):
    return FakeMirror(tmp_path, fail_sync=True)


@pytest.fixture
def make_mirror():
    return FakeMirror
