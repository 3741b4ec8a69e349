#!python3
"""Pack optimized SVGs into the icons/ package (ES modules, CommonJS and types)."""

import json
import logging
import os
from pathlib import Path
from typing import List

from utils import PACKAGE_NAME, Icon, empty_dir, fan_out, write_text


def svg_import_dir(imports_dir: Path, optimized_svg_dir: Path) -> str:
    """The optimized svg directory as seen from the per-icon imports."""
    return Path(os.path.relpath(optimized_svg_dir, imports_dir)).as_posix()


def esm_import(icon: Icon, svg_dir: str) -> str:
    var_name = f"{icon.export_name}Svg"
    return "\n".join(
        [
            f"import {var_name} from '{svg_dir}/{icon.file_name}';",
            f"export default /*#__PURE__*/ {var_name};",
            "",
        ]
    )


def cjs_import(icon: Icon, svg_dir: str) -> str:
    return "\n".join(
        [
            f"module.exports = /*#__PURE__*/ require('{svg_dir}/{icon.file_name}');",
            "",
        ]
    )


def esm_index(version: str, icons: List[Icon]) -> str:
    lines = [f"/* Ionicons v{version}, ES Modules */", ""]
    lines.extend(f"import {i.export_name} from './imports/{i.file_name_mjs}';" for i in icons)
    lines.extend(f"export {{ {i.export_name} }}" for i in icons)
    return "\n".join(lines) + "\n"


def cjs_index(version: str, icons: List[Icon]) -> str:
    lines = [f"/* Ionicons v{version}, CommonJS */", ""]
    lines.extend(
        f"exports.{i.export_name} = /*#__PURE__*/ require('./imports/{i.file_name_cjs}');"
        for i in icons
    )
    return "\n".join(lines) + "\n"


def dts_index(version: str, icons: List[Icon]) -> str:
    lines = [f"/* Ionicons v{version}, Types */", ""]
    lines.extend(f"export declare var {i.export_name}: string;" for i in icons)
    return "\n".join(lines) + "\n"


def package_json(version: str) -> str:
    data = {
        "name": f"{PACKAGE_NAME}/icons",
        "version": version,
        "module": "index.mjs",
        "main": "index.js",
        "typings": "index.d.ts",
        "sideEffects": ["imports/"],
        "private": True,
    }
    return json.dumps(data, indent=2) + "\n"


def create_icon_package(
    version: str, icon_dir: Path, optimized_svg_dir: Path, icons: List[Icon], jobs: int = 4
):
    """Write icons/imports/* for every icon, then the three indices and package.json.

    Indices keep the order of icons, which the loader sorts by export name.
    """
    imports_dir = icon_dir / "imports"
    empty_dir(imports_dir)
    svg_dir = svg_import_dir(imports_dir, optimized_svg_dir)

    def write_imports(icon: Icon):
        write_text(imports_dir / icon.file_name_mjs, esm_import(icon, svg_dir))
        write_text(imports_dir / icon.file_name_cjs, cjs_import(icon, svg_dir))

    fan_out(write_imports, icons, jobs)

    write_text(icon_dir / "index.mjs", esm_index(version, icons))
    write_text(icon_dir / "index.js", cjs_index(version, icons))
    write_text(icon_dir / "index.d.ts", dts_index(version, icons))
    write_text(icon_dir / "package.json", package_json(version))

    logging.info(f"Packed {len(icons)} icons into {icon_dir}")
