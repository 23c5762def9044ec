from __future__ import annotations

import os
from pathlib import Path

from .common import relpath_posix
from .errors import DirectoryAccessError


def _raise_access_error(err: OSError) -> None:
    path = Path(err.filename) if err.filename else Path(".")
    raise DirectoryAccessError(f"Cannot list directory {path}: {err}", path) from err


def find_html_files(root: Path) -> list[Path]:
    """Return every ``*.html`` file below ``root`` as an absolute path.

    Sorted by the POSIX path relative to ``root`` so the order is stable
    across platforms; report ordering depends on it.
    """

    root = root.resolve()
    if not root.exists():
        raise DirectoryAccessError(f"Site root does not exist: {root}", root)
    if not root.is_dir():
        raise DirectoryAccessError(f"Site root is not a directory: {root}", root)

    found: list[Path] = []
    for dirpath, _dirnames, filenames in os.walk(root, onerror=_raise_access_error):
        for name in filenames:
            if name.endswith(".html"):
                found.append(Path(dirpath) / name)

    return sorted(found, key=lambda p: relpath_posix(p, root))
