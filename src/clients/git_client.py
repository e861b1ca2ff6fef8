"""Async git client used by the repository mirror.

Runs the `git` executable as a subprocess (argument vector, no shell) for
the two operations the mirror needs: a single-branch clone into an absent
directory and a fast-forward pull into an existing working copy.
"""

from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import Optional, Sequence

from loguru import logger

from core.errors import SyncError


class GitCommandError(SyncError):
    """A git invocation exited with a non-zero status."""

    def __init__(self, argv: Sequence[str], returncode: int, stderr: str) -> None:
        self.argv = tuple(argv)
        self.returncode = returncode
        self.stderr = (stderr or "").strip()
        detail = self.stderr or "no output"
        super().__init__(f"git {self.argv[1]} failed (exit {returncode}): {detail}")


class GitClient:
    def __init__(self, *, binary: str = "git") -> None:
        self._binary = (binary or "git").strip()

    async def clone(self, *, remote_url: str, dest: Path, branch: str) -> None:
        await self._run(
            ["clone", "--branch", branch, "--single-branch", remote_url, str(dest)],
        )

    async def pull(self, *, repo_dir: Path, branch: str, remote: str = "origin") -> None:
        await self._run(
            ["pull", "--ff-only", remote, branch],
            cwd=repo_dir,
        )

    async def _run(self, args: Sequence[str], *, cwd: Optional[Path] = None) -> str:
        argv = [self._binary, *args]
        logger.debug("Running {}", " ".join(argv))

        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                cwd=str(cwd) if cwd is not None else None,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                # Never block on a credential prompt; no auth is modeled.
                env=_non_interactive_env(cwd),
            )
        except FileNotFoundError as e:
            raise SyncError(f"git executable not found: {self._binary}") from e
        except OSError as e:
            raise SyncError(f"Failed to start git: {e}") from e

        out, err = await proc.communicate()
        stdout = out.decode("utf-8", errors="replace")
        stderr = err.decode("utf-8", errors="replace")

        if proc.returncode != 0:
            raise GitCommandError(argv, proc.returncode, stderr)
        return stdout


def _non_interactive_env(cwd: Optional[Path] = None) -> dict:
    env = dict(os.environ)
    env["GIT_TERMINAL_PROMPT"] = "0"
    # Stable English messages; the mirror matches on clone's stderr
    env["LC_ALL"] = "C"
    if cwd is not None:
        # Never fall back to a repository enclosing the working directory
        env["GIT_CEILING_DIRECTORIES"] = str(Path(cwd).resolve().parent)
    return env
