from __future__ import annotations

import logging
import sys
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

import requests
from tqdm import tqdm

from .cache import ResultCache
from .common import relpath_posix, utc_iso
from .discovery import find_html_files
from .errors import DocumentParseError
from .extract import extract_references
from .http_client import DEFAULT_USER_AGENT, HttpClient, validate_external
from .models import (
    FileError,
    LinkKind,
    LinkRecord,
    LinkStatus,
    RunResult,
    ValidationOutcome,
)
from .resolve import resolve_local
from .urls import Disposition, classify_reference, external_target

LOGGER = logging.getLogger(__name__)


@dataclass
class CheckConfig:
    site_root: Path
    base_url: str | None = None
    timeout_ms: int = 10_000
    max_retries: int = 2
    max_workers: int = 8
    retry_backoff_s: float = 0.5
    user_agent: str = DEFAULT_USER_AGENT
    show_progress: bool = True

    @property
    def timeout_s(self) -> float:
        return self.timeout_ms / 1000.0


@dataclass
class RunContext:
    """State owned by a single run; nothing here outlives ``LinkChecker.run``."""

    site_root: Path
    cache: ResultCache = field(default_factory=ResultCache)
    result: RunResult = field(default_factory=RunResult)


@dataclass(frozen=True)
class _PendingLink:
    url: str
    source_file: str
    kind: LinkKind
    timestamp: str
    future: Future[ValidationOutcome]


class LinkChecker:
    def __init__(
        self,
        *,
        http: HttpClient,
        config: CheckConfig,
    ) -> None:
        self.http = http
        self.cfg = config

    def run(self) -> RunResult:
        ctx = RunContext(site_root=self.cfg.site_root.resolve())
        files = find_html_files(ctx.site_root)
        LOGGER.info("Found %d HTML files under %s", len(files), ctx.site_root)

        pool = ThreadPoolExecutor(
            max_workers=max(1, int(self.cfg.max_workers)),
            thread_name_prefix="linkcheck",
        )
        try:
            pending: list[_PendingLink] = []
            for path in files:
                pending.extend(self._submit_file(ctx, pool, path))

            # Join in encounter order; completion order does not matter.
            for item in tqdm(
                pending,
                desc="Checking links",
                unit="link",
                file=sys.stdout,
                disable=not self.cfg.show_progress,
            ):
                ctx.result.add(self._collect(item))
        except BaseException:
            # Queued validations are dropped; running probes are not waited on.
            pool.shutdown(wait=False, cancel_futures=True)
            raise
        pool.shutdown(wait=True)

        LOGGER.info(
            "Checked %d links (%d distinct): valid=%d broken=%d warnings=%d",
            ctx.result.total,
            len(ctx.cache),
            ctx.result.valid,
            ctx.result.broken,
            ctx.result.warnings,
        )
        return ctx.result

    def _submit_file(
        self,
        ctx: RunContext,
        pool: ThreadPoolExecutor,
        path: Path,
    ) -> list[_PendingLink]:
        rel = relpath_posix(path, ctx.site_root)
        LOGGER.debug("Checking links in: %s", rel)

        try:
            refs = extract_references(path.read_bytes())
        except (OSError, DocumentParseError) as e:
            LOGGER.warning("Error checking file %s: %s", rel, e)
            ctx.result.file_errors.append(FileError(source_file=rel, error=str(e)))
            return []

        ctx.result.files_checked += 1
        out: list[_PendingLink] = []
        for ref in refs:
            disposition = classify_reference(ref.url)
            if disposition == Disposition.SKIP:
                continue
            fut = pool.submit(self._validate, ctx, ref.url, path, disposition)
            out.append(
                _PendingLink(
                    url=ref.url,
                    source_file=rel,
                    kind=ref.kind,
                    timestamp=utc_iso(),
                    future=fut,
                )
            )
        return out

    def _validate(
        self,
        ctx: RunContext,
        raw: str,
        source_file: Path,
        disposition: Disposition,
    ) -> ValidationOutcome:
        def _fresh() -> ValidationOutcome:
            if disposition == Disposition.EXTERNAL:
                target = external_target(raw, base_url=self.cfg.base_url)
                return validate_external(self.http, target)
            return resolve_local(
                raw,
                source_file=source_file,
                site_root=ctx.site_root,
                absolute=disposition == Disposition.LOCAL_ABSOLUTE,
            )

        return ctx.cache.get_or_validate(raw, _fresh)

    def _collect(self, item: _PendingLink) -> LinkRecord:
        try:
            outcome = item.future.result()
        except Exception as exc:
            LOGGER.error("Unexpected error validating %s: %s", item.url, exc)
            outcome = ValidationOutcome(LinkStatus.ERROR, None, str(exc))
        return LinkRecord.from_outcome(
            url=item.url,
            source_file=item.source_file,
            kind=item.kind,
            outcome=outcome,
            timestamp=item.timestamp,
        )


def check_site(
    config: CheckConfig,
    *,
    session: requests.Session | None = None,
) -> RunResult:
    """Run one link check with a fresh (or the given) ``requests.Session``."""
    owns_session = session is None
    session = session or requests.Session()
    try:
        http = HttpClient(
            session,
            timeout_s=config.timeout_s,
            max_retries=config.max_retries,
            backoff_s=config.retry_backoff_s,
            user_agent=config.user_agent,
        )
        return LinkChecker(http=http, config=config).run()
    finally:
        if owns_session:
            session.close()
