"""Shared pytest fixtures."""

from __future__ import annotations

import json
import shutil
from pathlib import Path

import pytest

from utils import BuildPaths

REPO_ROOT = Path(__file__).resolve().parents[1]

AIRPLANE = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<svg xmlns="http://www.w3.org/2000/svg" width="512" height="512" viewBox="0 0 512 512">\n'
    "  <title>Airplane</title>\n"
    '  <path d="M407.72 224c-3.4 0-14.79.1-18 .3l-64.9 1.7" fill="none" stroke="#000" '
    'stroke-linecap="round" stroke-width="32"/>\n'
    "</svg>\n"
)

ALARM = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 512 512">'
    "<style>.a{fill:red}</style>"
    '<path d="M256 80a176 176 0 1 0 176 176" fill="#111"/>'
    '<circle cx="256" cy="256" r="16" stroke="red" stroke-width="16"/>'
    "</svg>"
)

LOGO = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 512 512">'
    '<path d="M0 0h512v512H0z"/>'
    "</svg>"
)


def write_icon(root: Path, file_name: str, content: str = LOGO) -> Path:
    path = root / "src" / "svg" / file_name
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def icon_root(tmp_path: Path) -> Path:
    """A miniature icon repository with three icons and the shipped template."""
    (tmp_path / "src" / "svg").mkdir(parents=True)
    (tmp_path / "scripts").mkdir()
    shutil.copyfile(
        REPO_ROOT / "cheatsheet-template.html",
        tmp_path / "scripts" / "cheatsheet-template.html",
    )
    (tmp_path / "package.json").write_text(
        json.dumps({"name": "ionicons", "version": "7.1.0"}), encoding="utf-8"
    )
    write_icon(tmp_path, "airplane-outline.svg", AIRPLANE)
    write_icon(tmp_path, "alarm.svg", ALARM)
    write_icon(tmp_path, "logo-no-smoking.svg", LOGO)
    return tmp_path


@pytest.fixture
def paths(icon_root: Path) -> BuildPaths:
    return BuildPaths.from_root(icon_root)
