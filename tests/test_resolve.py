"""Tests for site_link_checker.resolve."""

from __future__ import annotations

from pathlib import Path

from site_link_checker.models import LinkStatus, ValidationOutcome
from site_link_checker.resolve import FILE_NOT_FOUND, local_target_path, resolve_local

from .conftest import write_file


def _team(site: Path) -> Path:
    return site / "about" / "team.html"


class TestResolveLocal:
    def test_relative_missing_is_broken_404(self, site: Path):
        outcome = resolve_local(
            "../images/missing.png",
            source_file=_team(site),
            site_root=site,
            absolute=False,
        )
        assert outcome == ValidationOutcome(LinkStatus.BROKEN, 404, FILE_NOT_FOUND)

    def test_relative_existing_is_valid_200(self, site: Path):
        outcome = resolve_local(
            "../images/logo.png", source_file=_team(site), site_root=site, absolute=False
        )
        assert outcome == ValidationOutcome(LinkStatus.VALID, 200, None)

    def test_absolute_resolves_against_site_root(self, site: Path):
        outcome = resolve_local(
            "/index.html", source_file=_team(site), site_root=site, absolute=True
        )
        assert outcome.status == LinkStatus.VALID
        assert outcome.status_code == 200

    def test_query_and_fragment_are_ignored(self, site: Path):
        outcome = resolve_local(
            "../index.html?ref=team#intro",
            source_file=_team(site),
            site_root=site,
            absolute=False,
        )
        assert outcome.status == LinkStatus.VALID

    def test_directory_target_counts_as_existing(self, site: Path):
        outcome = resolve_local(
            "/about/", source_file=site / "index.html", site_root=site, absolute=True
        )
        assert outcome.status == LinkStatus.VALID

    def test_percent_encoded_names(self, site: Path):
        write_file(site / "docs" / "annual report.pdf", "pdf")
        outcome = resolve_local(
            "docs/annual%20report.pdf",
            source_file=site / "index.html",
            site_root=site,
            absolute=False,
        )
        assert outcome.status == LinkStatus.VALID

    def test_filesystem_error_is_broken_without_code(self, site: Path):
        outcome = resolve_local(
            "bad\x00name.html",
            source_file=site / "index.html",
            site_root=site,
            absolute=False,
        )
        assert outcome.status == LinkStatus.BROKEN
        assert outcome.status_code is None
        assert "null byte" in outcome.error

    def test_overlong_name_is_broken_without_code(self, site: Path):
        outcome = resolve_local(
            "x" * 1000 + ".html",
            source_file=site / "index.html",
            site_root=site,
            absolute=False,
        )
        assert outcome.status == LinkStatus.BROKEN
        assert outcome.status_code is None
        assert outcome.error and outcome.error != FILE_NOT_FOUND

    def test_file_used_as_directory_is_missing(self, site: Path):
        outcome = resolve_local(
            "/index.html/extra.png",
            source_file=site / "index.html",
            site_root=site,
            absolute=True,
        )
        assert outcome == ValidationOutcome(LinkStatus.BROKEN, 404, FILE_NOT_FOUND)


def test_local_target_path(site: Path):
    source = site / "about" / "team.html"
    assert local_target_path(
        "/css/site.css?v=2", source_file=source, site_root=site, absolute=True
    ) == site / "css" / "site.css"
    assert local_target_path(
        "../css/site.css#x", source_file=source, site_root=site, absolute=False
    ) == site / "about" / ".." / "css" / "site.css"
