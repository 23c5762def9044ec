from __future__ import annotations

from enum import Enum
from urllib.parse import urlparse

_SKIP_PREFIXES = ("#", "javascript:", "mailto:", "tel:")


class Disposition(str, Enum):
    SKIP = "skip"
    LOCAL_RELATIVE = "local_relative"
    LOCAL_ABSOLUTE = "local_absolute"
    EXTERNAL = "external"


def classify_reference(raw: str) -> Disposition:
    """Decide how a raw reference string is checked.

    - Empty, in-page (``#...``) and ``javascript:``/``mailto:``/``tel:``
      references are skipped.
    - Anything starting with ``http`` goes to the network; malformed
      spellings surface there as transport errors.
    - Protocol-relative ``//host/path`` is external too.
    - A single leading ``/`` is relative to the site root; everything else is
      relative to the referencing file.
    """

    text = (raw or "").strip()
    lowered = text.lower()
    if not text or lowered.startswith(_SKIP_PREFIXES):
        return Disposition.SKIP
    if lowered.startswith("http"):
        return Disposition.EXTERNAL
    if text.startswith("//"):
        return Disposition.EXTERNAL
    if text.startswith("/"):
        return Disposition.LOCAL_ABSOLUTE
    return Disposition.LOCAL_RELATIVE


def external_target(raw: str, *, base_url: str | None = None) -> str:
    """Return the URL to probe for an external reference."""

    text = raw.strip()
    if not text.startswith("//"):
        return text
    scheme = (urlparse(base_url or "").scheme or "https").lower()
    if scheme not in {"http", "https"}:
        scheme = "https"
    return f"{scheme}:{text}"


def strip_query_and_fragment(raw: str) -> str:
    return raw.split("?", 1)[0].split("#", 1)[0]
