#!python3
import argparse
import json
import logging
import os
import shutil
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, List

from catalog import create_data_json
from pack import create_icon_package
from svg import create_svg_symbols, optimize_svg
from utils import (
    BuildError,
    BuildPaths,
    Icon,
    IconNameError,
    IconSource,
    empty_dir,
    fan_out,
    setup_logging,
    write_text,
)


def get_version(pkg_json: Path) -> str:
    try:
        version = json.loads(pkg_json.read_text(encoding="utf-8"))["version"]
    except FileNotFoundError as e:
        raise BuildError(f"{pkg_json} not found") from e
    except (KeyError, TypeError, ValueError) as e:
        raise BuildError(f"{pkg_json} has no version") from e
    return str(version)


def get_svgs(src_svg_dir: Path, optimized_svg_dir: Path) -> List[IconSource]:
    """Load every svg in src_svg_dir, sorted by export name.

    Hidden files and files without the .svg extension are skipped. Badly named
    files raise IconNameError.
    """
    file_names = sorted(
        p.name
        for p in src_svg_dir.iterdir()
        if not p.name.startswith(".") and p.name.endswith(".svg")
    )

    sources = [
        IconSource(
            file_name=file_name,
            src_path=src_svg_dir / file_name,
            optimized_path=optimized_svg_dir / file_name,
            src_svg=(src_svg_dir / file_name).read_text(encoding="utf-8"),
        )
        for file_name in file_names
    ]

    seen = {}
    for source in sources:
        other = seen.setdefault(source.export_name, source)
        if other is not source:
            raise IconNameError(
                f'svg filenames "{other.file_name}" and "{source.file_name}" '
                f'both export as "{source.export_name}"'
            )

    logging.info(f"Found {len(sources)} svgs in {src_svg_dir}")
    return sorted(sources, key=lambda s: s.export_name)


def optimize_one(source: IconSource) -> Icon:
    optimized = optimize_svg(source.src_svg, source.src_path)
    write_text(source.optimized_path, optimized)
    return Icon(
        file_name=source.file_name,
        src_path=source.src_path,
        optimized_path=source.optimized_path,
        src_svg=source.src_svg,
        optimized_svg=optimized,
    )


def optimize_svgs(sources: List[IconSource], jobs: int = 4) -> List[Icon]:
    return fan_out(optimize_one, sources, jobs, desc="Optimizing SVGs")


def create_cheatsheet(
    version: str, template_path: Path, cheatsheet_path: Path, symbols_content: str, icons: Iterable[Icon]
):
    icons = sorted(icons, key=lambda i: i.name)

    content = [f'<svg><use href="#{i.name}" xlink:href="#{i.name}"/></svg>' for i in icons]
    content.append(symbols_content)

    html = (
        template_path.read_text(encoding="utf-8")
        .replace("{{version}}", version)
        .replace("{{count}}", str(len(icons)))
        .replace("{{content}}", "\n".join(content))
    )
    write_text(cheatsheet_path, html)


def copy_to_testing(paths: BuildPaths, icons: List[Icon], jobs: int = 4):
    empty_dir(paths.test_svg_dir)

    def copy_one(icon: Icon):
        write_text(paths.test_svg_dir / icon.file_name, icon.optimized_svg)

    fan_out(copy_one, icons, jobs)
    shutil.copyfile(paths.cheatsheet, paths.test_cheatsheet)


def build(paths: BuildPaths, jobs: int = 4):
    version = get_version(paths.pkg_json)

    # Validate every source before touching any output
    sources = get_svgs(paths.src_svg_dir, paths.optimized_svg_dir)

    empty_dir(paths.icon_dir)
    empty_dir(paths.dist_dir)
    empty_dir(paths.optimized_svg_dir)

    icons = optimize_svgs(sources, jobs)

    with ThreadPoolExecutor(max_workers=2) as pool:
        catalog = pool.submit(
            create_data_json, version, paths.src_data_json, paths.dist_data_json, icons
        )
        package = pool.submit(
            create_icon_package, version, paths.icon_dir, paths.optimized_svg_dir, icons, jobs
        )
        catalog.result()
        package.result()

    symbols_content = create_svg_symbols(version, paths.symbols_svg, icons)
    create_cheatsheet(version, paths.cheatsheet_template, paths.cheatsheet, symbols_content, icons)
    copy_to_testing(paths, icons, jobs)

    logging.info(f"Ionicons v{version}: built {len(icons)} icons into {paths.dist_dir}")
    return icons


def main(args) -> int:
    paths = BuildPaths.from_root(args.root, args.template)
    try:
        build(paths, args.jobs)
    except BuildError as e:
        logging.error(str(e))
        return 1
    return 0


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Optimize source SVG icons and build the distributable icon package."
    )
    parser.add_argument(
        "root",
        nargs="?",
        type=Path,
        default=Path("."),
        help="Repository root holding package.json and src/svg",
    )
    parser.add_argument(
        "--template",
        type=Path,
        default=None,
        help="Cheatsheet template (default: <root>/scripts/cheatsheet-template.html)",
    )
    parser.add_argument(
        "--jobs",
        type=int,
        default=os.cpu_count() or 4,
        help="Number of files processed in parallel",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def cli():
    args = parse_args()

    setup_logging()
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    sys.exit(main(args))


if __name__ == "__main__":
    cli()
