"""Configuration and environment helpers for the project.

Provides small helpers to read typed environment variables and exposes
project-level configuration constants used across the codebase (the
mirrored repository, its local directory, read limits and server options).
"""

from __future__ import annotations

import os
from pathlib import Path


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_str(name: str, default: str) -> str:
    raw = (os.environ.get(name) or "").strip()
    return raw or default


# Mirrored repository
REPO_URL = _env_str("ROOTZ_REPO_URL", "https://github.com/kenjirou-ozi/rootz-project.git")
REPO_BRANCH = _env_str("ROOTZ_BRANCH", "main")
MIRROR_DIR = Path(_env_str("ROOTZ_MIRROR_DIR", "./rootz-sync")).resolve()
GIT_BINARY = _env_str("GIT_BINARY", "git")

# Sync policy
SYNC_ON_READ = _env_bool("SYNC_ON_READ", True)
SYNC_ON_STARTUP = _env_bool("SYNC_ON_STARTUP", True)

# Limits / output
MAX_FILE_CHARS = _env_int("MAX_FILE_CHARS", 45_000)

# Health endpoint (0 disables it)
HEALTH_HOST = _env_str("HEALTH_HOST", "127.0.0.1")
HEALTH_PORT = _env_int("HEALTH_PORT", 0)

LOG_LEVEL = _env_str("LOG_LEVEL", "INFO").upper()
