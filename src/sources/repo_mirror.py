"""Local mirror of the single remote repository.

Keeps one working copy on disk in step with the remote branch: clone when
the directory holds no repository yet, pull otherwise. The directory is
reused across restarts.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from dataclasses import replace
from pathlib import Path
from typing import AsyncIterator, Optional

from loguru import logger

from clients.git_client import GitClient, GitCommandError
from core.errors import SyncError
from core.models import MirrorState

_ALREADY_EXISTS_MARKER = "already exists"


class RepositoryMirror:
    def __init__(
        self,
        *,
        remote_url: str,
        local_root: Path,
        branch: str = "main",
        git: Optional[GitClient] = None,
    ) -> None:
        url = (remote_url or "").strip()
        if not url:
            raise SyncError("Missing remote repository URL")

        self._git = git or GitClient()
        self._state = MirrorState(
            remote_url=url,
            branch=(branch or "main").strip() or "main",
            local_root=Path(local_root).resolve(),
        )

        # One lock for clone/pull and for readers: a reader never sees a half-pulled tree.
        self._lock = asyncio.Lock()

    @property
    def root(self) -> Path:
        return self._state.local_root

    @property
    def state(self) -> MirrorState:
        return self._state

    @asynccontextmanager
    async def guard(self) -> AsyncIterator[None]:
        async with self._lock:
            yield

    async def ensure_synced(self) -> None:
        """Clone the remote if no working copy exists, otherwise pull the branch.

        Raises SyncError when neither succeeds.
        """
        async with self._lock:
            try:
                if self._has_repository():
                    await self._pull()
                else:
                    await self._clone_or_pull()
            except SyncError:
                self._state = replace(self._state, synced=False)
                raise

            self._state = replace(self._state, synced=True)

    def _has_repository(self) -> bool:
        return (self.root / ".git").exists()

    async def _clone_or_pull(self) -> None:
        s = self._state
        try:
            self.root.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise SyncError(f"Cannot create mirror directory {self.root.parent}: {e}") from e

        logger.info("Cloning {} ({}) into {}", s.remote_url, s.branch, self.root)
        try:
            await self._git.clone(remote_url=s.remote_url, dest=self.root, branch=s.branch)
        except GitCommandError as e:
            # git refuses to clone into a non-empty directory; that one case falls through to pull.
            if _ALREADY_EXISTS_MARKER not in e.stderr:
                logger.error("Clone failed: {}", e)
                raise
            if not self._has_repository():
                raise SyncError(f"Mirror directory {self.root} exists but is not a git working copy") from e
            logger.info("Mirror directory already present, pulling instead")
            await self._pull()
            return

        logger.info("Repository cloned into {}", self.root)

    async def _pull(self) -> None:
        s = self._state
        logger.info("Pulling {} from origin into {}", s.branch, self.root)
        try:
            await self._git.pull(repo_dir=self.root, branch=s.branch)
        except SyncError as e:
            logger.error("Pull failed: {}", e)
            raise
        logger.info("Latest changes pulled")
