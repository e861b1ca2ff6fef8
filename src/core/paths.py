from __future__ import annotations

from pathlib import Path

from core.errors import AccessDeniedError, InvalidPathError

"""
Path utilities used across the project.

Provides consistent POSIX-style normalization and the containment check
that keeps every read inside the mirror root.
"""


def normalize_posix_relpath(p: str) -> str:
    """Normalize a user path to a clean POSIX relative path.

    Converts backslashes to '/', trims whitespace, removes leading '/'
    and repeated './' markers.
    """
    s = (p or "").strip()
    s = s.replace("\\", "/")        # Unify path separators across OSes.
    s = s.lstrip("/")               # Prevent accidental absolute paths.
    while s.startswith("./"):       # Drop repeated "./" prefixes.
        s = s[2:]
    return s


def resolve_under_root(root: Path, rel_path: str) -> Path:
    """Resolve `rel_path` against `root` and refuse anything outside it.

    Symlinks and '..' segments are canonicalized before the check.
    """
    clean = normalize_posix_relpath(rel_path)
    if not clean:
        raise InvalidPathError("File path is empty")

    try:
        base = root.resolve()
        p = (base / clean).resolve()
    except ValueError as e:
        # e.g. an embedded NUL byte
        raise InvalidPathError(f"Invalid file path: {rel_path!r}") from e
    except (OSError, RuntimeError) as e:
        raise InvalidPathError(f"Cannot resolve file path {rel_path!r}: {e}") from e

    try:
        p.relative_to(base)
    except ValueError as e:
        raise AccessDeniedError(f"Access outside repository root is not allowed: {rel_path}") from e

    return p
