"""Tests for svg optimization and the symbol sprite."""

from __future__ import annotations

from pathlib import Path

import pytest
from lxml import etree

from svg import create_svg_symbols, optimize_svg
from utils import Icon, SvgOptimizeError

from .conftest import AIRPLANE, ALARM

SVG = "{http://www.w3.org/2000/svg}"


def _parse(markup: str):
    return etree.fromstring(markup.encode("utf-8"))


def test_fill_none_becomes_class() -> None:
    root = _parse(optimize_svg(AIRPLANE))
    path = root.find(f"{SVG}path")
    assert path.get("fill") is None
    assert "ionicon-fill-none" in path.get("class").split()


def test_stroke_width_32_becomes_class() -> None:
    root = _parse(optimize_svg(AIRPLANE))
    path = root.find(f"{SVG}path")
    assert path.get("stroke-width") is None
    assert path.get("stroke") is None
    assert "ionicon-stroke-width" in path.get("class").split()
    assert path.get("stroke-linecap") == "round"


def test_stroke_width_16_is_left_alone() -> None:
    root = _parse(optimize_svg(ALARM))
    circle = root.find(f"{SVG}circle")
    assert circle.get("stroke-width") == "16"
    assert circle.get("stroke") is None
    assert circle.get("class") is None


def test_other_fill_is_removed_without_class() -> None:
    root = _parse(optimize_svg(ALARM))
    path = root.find(f"{SVG}path")
    assert path.get("fill") is None
    assert path.get("class") is None


def test_root_is_normalized() -> None:
    markup = optimize_svg(AIRPLANE)
    assert markup.startswith('<svg xmlns="http://www.w3.org/2000/svg"')
    assert "<?xml" not in markup
    root = _parse(markup)
    assert root.get("class") == "ionicon"
    assert root.get("width") is None
    assert root.get("height") is None
    assert root.get("viewBox") == "0 0 512 512"


def test_style_and_script_are_removed() -> None:
    markup = optimize_svg(
        '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24">'
        "<style>path{fill:red}</style><script>alert(1)</script>"
        '<!-- drawn by hand --><path d="M0 0h24"/></svg>'
    )
    assert "style" not in markup
    assert "script" not in markup
    assert "drawn by hand" not in markup
    assert "<path" in markup


def test_dimensions_become_viewbox() -> None:
    root = _parse(optimize_svg('<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24"/>'))
    assert root.get("viewBox") == "0 0 24 24"
    assert root.get("width") is None


def test_derived_viewbox_keeps_exact_dimensions() -> None:
    root = _parse(
        optimize_svg('<svg xmlns="http://www.w3.org/2000/svg" width="1234.5678" height="24"/>')
    )
    assert root.get("viewBox") == "0 0 1234.5678 24"
    assert root.get("width") is None
    assert root.get("height") is None


def test_malformed_svg_raises() -> None:
    with pytest.raises(SvgOptimizeError, match="broken.svg"):
        optimize_svg('<svg xmlns="http://www.w3.org/2000/svg"><path></svg>', Path("broken.svg"))


def test_non_svg_root_raises() -> None:
    with pytest.raises(SvgOptimizeError, match="expected <svg>"):
        optimize_svg("<html/>")


def _icon(file_name: str, markup: str) -> Icon:
    return Icon(
        file_name=file_name,
        src_path=Path(file_name),
        optimized_path=Path(file_name),
        src_svg=markup,
        optimized_svg=optimize_svg(markup),
    )


def test_symbols_sorted_by_icon_name(tmp_path: Path) -> None:
    icons = [_icon("logo-no-smoking.svg", ALARM), _icon("airplane-outline.svg", AIRPLANE)]
    out = tmp_path / "ionicons.symbols.svg"

    content = create_svg_symbols("7.1.0", out, icons)

    assert out.read_text(encoding="utf-8") == content
    lines = content.split("\n")
    assert lines[0] == '<svg data-ionicons="7.1.0" style="display:none">'
    assert ".ionicon-fill-none {" in lines
    assert ".ionicon-stroke-width {" in lines
    symbols = [line for line in lines if line.startswith("<symbol")]
    assert symbols[0].startswith('<symbol id="airplane-outline" viewBox=')
    assert symbols[1].startswith('<symbol id="logo-no-smoking" viewBox=')
    assert all(s.endswith("</symbol>") for s in symbols)
    assert content.endswith("</svg>\n")

    # The sprite parses as a single document
    sprite = _parse(content)
    assert [s.get("id") for s in sprite.findall("symbol")] == ["airplane-outline", "logo-no-smoking"]
