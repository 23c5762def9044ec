from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from .checker import CheckConfig, check_site
from .common import utc_iso
from .errors import DirectoryAccessError
from .http_client import DEFAULT_USER_AGENT
from .report import (
    ReportWriter,
    build_report,
    format_broken_listing,
    format_summary,
    run_id,
)


def _env(name: str, default: str | None) -> str | None:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def _non_negative_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {text!r}")
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return value


def _positive_int(text: str) -> int:
    value = _non_negative_int(text)
    if value == 0:
        raise argparse.ArgumentTypeError("must be > 0")
    return value


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="site-link-checker",
        description=(
            "Check every anchor, image, stylesheet and script reference in a "
            "generated static site and write JSON + HTML reports"
        ),
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=Path(_env("LINKCHECK_ROOT", "public") or "public"),
        help="Site output directory to scan (env LINKCHECK_ROOT, default ./public)",
    )
    parser.add_argument(
        "--base-url",
        default=_env("LINKCHECK_BASE_URL", None),
        help=(
            "Public URL of the site; recorded in reports and used for the "
            "scheme of //host references (env LINKCHECK_BASE_URL)"
        ),
    )
    parser.add_argument(
        "--reports-dir",
        type=Path,
        default=Path(_env("LINKCHECK_REPORTS_DIR", "reports") or "reports"),
        help="Where reports are written (env LINKCHECK_REPORTS_DIR, default ./reports)",
    )
    parser.add_argument(
        "--timeout",
        type=_positive_int,
        default=_env("LINKCHECK_TIMEOUT_MS", "10000"),
        help="HEAD timeout in milliseconds (env LINKCHECK_TIMEOUT_MS, default 10000)",
    )
    parser.add_argument(
        "--max-retries",
        type=_non_negative_int,
        default=_env("LINKCHECK_MAX_RETRIES", "2"),
        help=(
            "Retries for timeouts/transport errors "
            "(env LINKCHECK_MAX_RETRIES, default 2)"
        ),
    )
    parser.add_argument(
        "--workers",
        type=_positive_int,
        default=_env("LINKCHECK_WORKERS", "8"),
        help=(
            "Concurrent validations; 1 checks strictly in order "
            "(env LINKCHECK_WORKERS, default 8)"
        ),
    )
    parser.add_argument("--user-agent", default=DEFAULT_USER_AGENT)
    parser.add_argument("--no-progress", action="store_true")
    parser.add_argument(
        "--fail-on-broken",
        action="store_true",
        help="Exit 1 when any broken link is found",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    _setup_logging(bool(args.verbose))

    cfg = CheckConfig(
        site_root=args.root,
        base_url=args.base_url,
        timeout_ms=int(args.timeout),
        max_retries=int(args.max_retries),
        max_workers=int(args.workers),
        user_agent=str(args.user_agent),
        show_progress=not bool(args.no_progress),
    )

    print(f"Starting link check of {cfg.site_root}")
    try:
        result = check_site(cfg)
    except DirectoryAccessError as e:
        print(f"Link check failed: {e}", file=sys.stderr)
        return 2

    report = build_report(
        result,
        generated_at=utc_iso(),
        base_url=cfg.base_url,
        site_root=cfg.site_root.resolve(),
    )
    try:
        paths = ReportWriter(args.reports_dir).write(report, rid=run_id())
    except OSError as e:
        print(f"Failed to write report: {e}", file=sys.stderr)
        return 2

    print()
    print(format_summary(result))
    print(f"Report saved to: {paths.html_path}")
    listing = format_broken_listing(result)
    if listing:
        print()
        print(listing)

    if bool(args.fail_on_broken) and result.broken:
        return 1
    return 0
