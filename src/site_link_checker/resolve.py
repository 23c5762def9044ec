from __future__ import annotations

from pathlib import Path
from urllib.parse import unquote

from .models import LinkStatus, ValidationOutcome
from .urls import strip_query_and_fragment

FILE_NOT_FOUND = "File not found"


def local_target_path(
    raw: str,
    *,
    source_file: Path,
    site_root: Path,
    absolute: bool,
) -> Path:
    """Map a local reference to a filesystem path (not checked for existence).

    Query strings and fragments are dropped and the path is percent-decoded.
    Absolute references hang off ``site_root``; relative ones off the
    directory of ``source_file``.
    """

    path_text = unquote(strip_query_and_fragment(raw.strip()))
    if absolute:
        return site_root / path_text.lstrip("/")
    return source_file.parent / path_text


def resolve_local(
    raw: str,
    *,
    source_file: Path,
    site_root: Path,
    absolute: bool,
) -> ValidationOutcome:
    try:
        target = local_target_path(
            raw,
            source_file=source_file,
            site_root=site_root,
            absolute=absolute,
        )
        target.stat()
    except (FileNotFoundError, NotADirectoryError):
        return ValidationOutcome(LinkStatus.BROKEN, 404, FILE_NOT_FOUND)
    except (OSError, ValueError) as e:
        return ValidationOutcome(LinkStatus.BROKEN, None, str(e))

    return ValidationOutcome(LinkStatus.VALID, 200, None)
