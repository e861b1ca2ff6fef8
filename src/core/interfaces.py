"""Core protocol and interface definitions.

Defines the contracts the file reader and the analyzer depend on, so
tools and tests can swap in any mirror or reader implementation.
"""

from __future__ import annotations

from pathlib import Path
from typing import AsyncContextManager, Protocol

from core.models import FileReadResult, MirrorState


class Mirror(Protocol):
    """Contract for the single local copy of the remote repository."""

    @property
    def root(self) -> Path:
        ...

    @property
    def state(self) -> MirrorState:
        ...

    async def ensure_synced(self) -> None:
        ...

    def guard(self) -> AsyncContextManager[None]:
        ...


class FileReader(Protocol):
    """Contract for bounded reads under the mirror root."""

    async def read_file(self, relative_path: str) -> FileReadResult:
        ...
