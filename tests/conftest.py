"""Shared fixtures: a small generated site on disk."""

from __future__ import annotations

from pathlib import Path

import pytest

INDEX_HTML = """<!doctype html>
<html>
<head>
  <link rel="stylesheet" href="/css/site.css">
  <link rel="icon" href="/favicon.ico">
  <script src="js/app.js"></script>
</head>
<body>
  <a href="#top">Top</a>
  <a href="about/team.html">Team</a>
  <a href="/index.html">Home</a>
  <a href="mailto:info@example.com">Mail</a>
  <img src="images/logo.png" alt="logo">
</body>
</html>
"""

TEAM_HTML = """<!doctype html>
<html>
<body>
  <a href="../index.html?ref=team#intro">Home</a>
  <a href="tel:+911234567890">Call</a>
  <a href="javascript:void(0)">Noop</a>
  <img src="../images/missing.png">
  <img src="../images/logo.png">
</body>
</html>
"""


def write_file(path: Path, text: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def site(tmp_path: Path) -> Path:
    root = tmp_path / "public"
    write_file(root / "index.html", INDEX_HTML)
    write_file(root / "about" / "team.html", TEAM_HTML)
    write_file(root / "css" / "site.css", "body {}")
    write_file(root / "js" / "app.js", "")
    write_file(root / "images" / "logo.png", "png")
    return root
