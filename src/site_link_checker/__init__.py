"""site-link-checker core library.

Walks the HTML output of a static site build, extracts every outbound
reference (anchors, images, stylesheets, scripts), checks that local targets
exist on disk and that remote targets answer a HEAD probe, and writes a
JSON + HTML report per run.

Typical use:

    from site_link_checker import CheckConfig, check_site

    result = check_site(CheckConfig(site_root=Path("public")))
    print(result.broken)
"""

from __future__ import annotations

__version__ = "0.1.0"

from .checker import CheckConfig, LinkChecker, check_site
from .errors import DirectoryAccessError, DocumentParseError, LinkCheckError
from .models import LinkKind, LinkRecord, LinkStatus, RunResult, ValidationOutcome

__all__ = [
    "__version__",
    "CheckConfig",
    "LinkChecker",
    "check_site",
    "LinkCheckError",
    "DirectoryAccessError",
    "DocumentParseError",
    "LinkKind",
    "LinkRecord",
    "LinkStatus",
    "RunResult",
    "ValidationOutcome",
]
