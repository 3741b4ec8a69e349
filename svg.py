import logging
import re
from pathlib import Path
from typing import Iterable, Optional

from lxml import etree

from utils import Icon, SvgOptimizeError, write_text

SVG_NS = "http://www.w3.org/2000/svg"

FILL_NONE_CLASS = "ionicon-fill-none"
STROKE_WIDTH_CLASS = "ionicon-stroke-width"
ICON_CLASS = "ionicon"

SYMBOL_OPEN_RE = re.compile(r'^<svg(\s+xmlns="http://www\.w3\.org/2000/svg")?')
SYMBOL_CLOSE_RE = re.compile(r"</svg>\s*$")


def add_class(elem, class_name: str):
    classes = elem.get("class", "").split()
    if class_name not in classes:
        classes.append(class_name)
    elem.set("class", " ".join(classes))


def _strip_attrs(elem):
    fill = elem.get("fill")
    if fill is not None:
        # Any other fill falls back to currentColor from the ionicon class
        if fill == "none":
            add_class(elem, FILL_NONE_CLASS)
        del elem.attrib["fill"]

    if "stroke" in elem.attrib:
        del elem.attrib["stroke"]

    if elem.get("stroke-width") == "32":
        del elem.attrib["stroke-width"]
        add_class(elem, STROKE_WIDTH_CLASS)


def _remove_dimensions(root, path: Optional[Path]):
    width = root.get("width")
    height = root.get("height")
    if width is None and height is None:
        return

    if root.get("viewBox") is None:
        try:
            float(width), float(height)
        except (TypeError, ValueError):
            logging.warning(
                f"{path}: Could not derive viewBox from size ({width}, {height}), keeping it"
            )
            return
        root.set("viewBox", f"0 0 {width.strip()} {height.strip()}")

    for attr in ("width", "height"):
        if attr in root.attrib:
            del root.attrib[attr]


def optimize_svg(content: str, path: Optional[Path] = None) -> str:
    """Return the normalized markup of one icon.

    Colors are moved out of the markup and into the shared ionicon classes, so
    the icon follows currentColor wherever it is placed.
    """
    parser = etree.XMLParser(remove_blank_text=True, resolve_entities=False)
    try:
        root = etree.fromstring(content.encode("utf-8"), parser)
    except etree.XMLSyntaxError as e:
        raise SvgOptimizeError(f"{path}: malformed svg: {e}") from e

    if etree.QName(root).localname != "svg":
        raise SvgOptimizeError(
            f"{path}: root element is <{etree.QName(root).localname}>, expected <svg>"
        )

    etree.strip_elements(root, etree.Comment, with_tail=False)

    for elem in root.xpath(".//*[local-name()='style' or local-name()='script']"):  # type: ignore
        elem.getparent().remove(elem)

    for elem in root.iter(etree.Element):
        _strip_attrs(elem)

    add_class(root, ICON_CLASS)
    _remove_dimensions(root, path)

    etree.cleanup_namespaces(root)

    return etree.tostring(root, encoding="unicode")


def to_symbol(icon: Icon) -> str:
    svg = SYMBOL_OPEN_RE.sub(lambda m: f'<symbol id="{icon.name}"', icon.optimized_svg, count=1)
    return SYMBOL_CLOSE_RE.sub("</symbol>", svg, count=1)


def create_svg_symbols(version: str, symbols_path: Path, icons: Iterable[Icon]) -> str:
    """Write every icon into one hidden sprite of <symbol> elements and return it."""
    icons = sorted(icons, key=lambda i: i.name)

    lines = [
        f'<svg data-ionicons="{version}" style="display:none">',
        "<style>",
        f".{ICON_CLASS} {{",
        "  fill: currentColor;",
        "  stroke: currentColor;",
        "}",
        f".{FILL_NONE_CLASS} {{",
        "  fill: none;",
        "}",
        f".{STROKE_WIDTH_CLASS} {{",
        "  stroke-width: 32px;",
        "}",
        "</style>",
    ]
    lines.extend(to_symbol(icon) for icon in icons)
    lines.extend(["</svg>", ""])

    content = "\n".join(lines)
    write_text(symbols_path, content)
    logging.debug(f"Wrote {len(icons)} symbols to {symbols_path}")

    return content
