from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class LinkKind(str, Enum):
    ANCHOR = "anchor"
    IMAGE = "image"
    STYLESHEET = "stylesheet"
    SCRIPT = "script"


class LinkStatus(str, Enum):
    VALID = "valid"
    BROKEN = "broken"
    WARNING = "warning"
    # Reserved for exceptions that escape the normal validation path.
    ERROR = "error"


@dataclass(frozen=True)
class ValidationOutcome:
    status: LinkStatus
    status_code: int | None = None
    error: str | None = None


@dataclass(frozen=True)
class LinkRecord:
    url: str
    source_file: str
    kind: LinkKind
    status: LinkStatus
    status_code: int | None
    error: str | None
    timestamp: str

    @classmethod
    def from_outcome(
        cls,
        *,
        url: str,
        source_file: str,
        kind: LinkKind,
        outcome: ValidationOutcome,
        timestamp: str,
    ) -> LinkRecord:
        return cls(
            url=url,
            source_file=source_file,
            kind=kind,
            status=outcome.status,
            status_code=outcome.status_code,
            error=outcome.error,
            timestamp=timestamp,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "source_file": self.source_file,
            "kind": self.kind.value,
            "status": self.status.value,
            "status_code": self.status_code,
            "error": self.error,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class FileError:
    source_file: str
    error: str

    def to_dict(self) -> dict[str, Any]:
        return {"source_file": self.source_file, "error": self.error}


@dataclass
class RunResult:
    """Counters plus every link record of one run, in encounter order.

    ``add`` is the only mutator, so ``total == valid + broken + warnings ==
    len(links)`` holds at every point.
    """

    total: int = 0
    valid: int = 0
    broken: int = 0
    warnings: int = 0
    links: list[LinkRecord] = field(default_factory=list)
    file_errors: list[FileError] = field(default_factory=list)
    files_checked: int = 0

    def add(self, record: LinkRecord) -> None:
        self.total += 1
        if record.status == LinkStatus.VALID:
            self.valid += 1
        elif record.status in {LinkStatus.BROKEN, LinkStatus.ERROR}:
            self.broken += 1
        else:
            self.warnings += 1
        self.links.append(record)

    def broken_links(self) -> list[LinkRecord]:
        return [
            link
            for link in self.links
            if link.status in {LinkStatus.BROKEN, LinkStatus.ERROR}
        ]

    def warning_links(self) -> list[LinkRecord]:
        return [link for link in self.links if link.status == LinkStatus.WARNING]
