from __future__ import annotations

from dataclasses import dataclass

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from .errors import DocumentParseError
from .models import LinkKind


@dataclass(frozen=True)
class Reference:
    url: str
    kind: LinkKind


def _attr_text(val: object) -> str:
    if isinstance(val, list):
        if not val:
            return ""
        return str(val[0])
    return str(val or "")


def _is_stylesheet(tag) -> bool:
    rel = tag.get("rel")
    if isinstance(rel, str):
        rel = rel.split()
    return any(str(r).lower() == "stylesheet" for r in rel or [])


def extract_references(html: str | bytes) -> list[Reference]:
    """Return the outbound references of one HTML document.

    Grouped by kind (anchors, images, stylesheets, scripts) and in document
    order within each kind. Values are raw attribute text, only stripped.
    """

    try:
        soup = BeautifulSoup(html, "html.parser")
    except (ParserRejectedMarkup, ValueError) as e:
        raise DocumentParseError(f"Failed to parse HTML: {e}") from e

    out: list[Reference] = []
    for a in soup.find_all("a", href=True):
        out.append(Reference(_attr_text(a.get("href")).strip(), LinkKind.ANCHOR))
    for img in soup.find_all("img", src=True):
        out.append(Reference(_attr_text(img.get("src")).strip(), LinkKind.IMAGE))
    for link in soup.find_all("link", href=True):
        if not _is_stylesheet(link):
            continue
        out.append(
            Reference(_attr_text(link.get("href")).strip(), LinkKind.STYLESHEET)
        )
    for script in soup.find_all("script", src=True):
        out.append(Reference(_attr_text(script.get("src")).strip(), LinkKind.SCRIPT))
    return out
