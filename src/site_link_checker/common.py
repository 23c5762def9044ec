from __future__ import annotations

import time
from pathlib import Path


def utc_iso() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())


def relpath_posix(path: Path, base_dir: Path) -> str:
    """``path`` relative to ``base_dir`` with forward slashes on every platform."""
    return path.relative_to(base_dir).as_posix()
