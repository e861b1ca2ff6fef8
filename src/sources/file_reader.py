"""Bounded reads of files inside the repository mirror.

Paths are sandboxed to the mirror root and content is cut to a fixed
character budget instead of being rejected.
"""

from __future__ import annotations

import asyncio

from loguru import logger

from core.errors import InvalidPathError, NotFoundError, ReadError
from core.interfaces import Mirror
from core.models import FileReadResult
from core.paths import normalize_posix_relpath, resolve_under_root


class BoundedFileReader:
    """Reads text files under the mirror root with a size cap."""

    def __init__(self, *, mirror: Mirror, max_chars: int = 45_000, sync_before_read: bool = True) -> None:
        self._mirror = mirror
        self._max_chars = max(1, int(max_chars))
        self._sync_before_read = bool(sync_before_read)

    @property
    def max_chars(self) -> int:
        return self._max_chars

    async def read_file(self, relative_path: str) -> FileReadResult:
        # Validate before any sync so a bad path never costs a network round trip
        resolve_under_root(self._mirror.root, relative_path)
        requested = normalize_posix_relpath(relative_path)

        if self._sync_before_read:
            await self._mirror.ensure_synced()

        def _do() -> str:
            # The sync may have replaced the file, so containment is checked again on the current tree
            p = resolve_under_root(self._mirror.root, relative_path)
            try:
                if not p.exists():
                    raise NotFoundError(f"File not found: {requested}")
                if not p.is_file():
                    raise ReadError(f"Not a file: {requested}")
                # Replacement keeps odd bytes from turning into a hard failure
                return p.read_text(encoding="utf-8", errors="replace")
            except ValueError as e:
                raise InvalidPathError(f"Invalid file path: {requested!r}") from e
            except OSError as e:
                raise ReadError(f"Cannot read {requested}: {e.strerror or e}") from e

        async with self._mirror.guard():
            data = await asyncio.to_thread(_do)

        original_length = len(data)
        if original_length > self._max_chars:
            logger.debug("Truncating {} from {} to {} chars", requested, original_length, self._max_chars)
            return FileReadResult(
                requested_path=requested,
                content=data[: self._max_chars],
                truncated=True,
                original_length=original_length,
            )

        return FileReadResult(
            requested_path=requested,
            content=data,
            truncated=False,
            original_length=original_length,
        )
