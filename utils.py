from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
import logging
from pathlib import Path
import re
import shutil
from typing import Callable, Iterable, List, Optional, TypeVar

from tqdm import tqdm

COLORS = {
    "DEBUG": "\033[36m",  # cyan
    "INFO": "\033[32m",  # green
    "WARNING": "\033[33m",  # yellow
    "ERROR": "\033[31m",  # red
    "CRITICAL": "\033[1;31m",  # bold red
}
COLOR_RESET = "\033[0m"

PACKAGE_NAME = "ionicons"

T = TypeVar("T")
R = TypeVar("R")


class ColorFormatter(logging.Formatter):
    def format(self, record):
        color = COLORS.get(record.levelname, "")
        record.levelname = f"{color}{record.levelname}{COLOR_RESET}"
        return super().format(record)


def setup_logging():
    handler = logging.StreamHandler()
    handler.setFormatter(ColorFormatter("%(levelname)s %(message)s"))
    logging.root.addHandler(handler)
    logging.root.setLevel(logging.INFO)


class BuildError(Exception):
    """A fatal build error. Fix the input and rerun the whole build."""


class IconNameError(BuildError, ValueError):
    pass


class SvgOptimizeError(BuildError):
    pass


def camelize(text: str) -> str:
    """airplane-outline -> airplaneOutline"""
    words = re.split(r"[-_]", text)
    return words[0].lower() + "".join(up_first(w) for w in words[1:])


def up_first(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


@dataclass(frozen=True)
class IconSource:
    # airplane-outline.svg
    file_name: str
    # src/svg/airplane-outline.svg
    src_path: Path
    # dist/ionicons/svg/airplane-outline.svg
    optimized_path: Path
    src_svg: str

    def __post_init__(self):
        if self.file_name.lower() != self.file_name:
            raise IconNameError(f'svg filename "{self.file_name}" must be all lowercase')
        if self.file_name.count(".") > 1:
            raise IconNameError(
                f'svg filename "{self.file_name}" cannot contain more than one period'
            )

    @property
    def name(self) -> str:
        """airplane-outline"""
        return self.file_name.split(".")[0]

    @property
    def export_name(self) -> str:
        """airplaneOutline"""
        return camelize(self.name)

    @property
    def file_name_mjs(self) -> str:
        return self.name + ".mjs"

    @property
    def file_name_cjs(self) -> str:
        return self.name + ".js"


@dataclass(frozen=True)
class Icon(IconSource):
    optimized_svg: str


@dataclass(frozen=True)
class BuildPaths:
    root: Path
    cheatsheet_template: Path

    @classmethod
    def from_root(cls, root: Path, template: Optional[Path] = None) -> "BuildPaths":
        root = Path(root).resolve()
        if template is None:
            template = root / "scripts" / "cheatsheet-template.html"
        return cls(root=root, cheatsheet_template=Path(template))

    @property
    def pkg_json(self) -> Path:
        return self.root / "package.json"

    @property
    def src_dir(self) -> Path:
        return self.root / "src"

    @property
    def src_svg_dir(self) -> Path:
        return self.src_dir / "svg"

    @property
    def src_data_json(self) -> Path:
        return self.src_dir / "data.json"

    @property
    def icon_dir(self) -> Path:
        return self.root / "icons"

    @property
    def dist_dir(self) -> Path:
        return self.root / "dist"

    @property
    def dist_ionicons_dir(self) -> Path:
        return self.dist_dir / PACKAGE_NAME

    @property
    def optimized_svg_dir(self) -> Path:
        return self.dist_ionicons_dir / "svg"

    @property
    def dist_data_json(self) -> Path:
        return self.dist_dir / f"{PACKAGE_NAME}.json"

    @property
    def symbols_svg(self) -> Path:
        return self.dist_dir / f"{PACKAGE_NAME}.symbols.svg"

    @property
    def cheatsheet(self) -> Path:
        return self.dist_dir / "cheatsheet.html"

    @property
    def test_dir(self) -> Path:
        return self.root / "www"

    @property
    def test_svg_dir(self) -> Path:
        return self.test_dir / "build" / "svg"

    @property
    def test_cheatsheet(self) -> Path:
        return self.test_dir / "cheatsheet.html"


def empty_dir(path: Path):
    if path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True, exist_ok=True)


def write_text(path: Path, content: str):
    path.write_text(content, encoding="utf-8")


def fan_out(
    fn: Callable[[T], R], items: Iterable[T], jobs: int = 4, desc: Optional[str] = None
) -> List[R]:
    """Run fn over items in a thread pool and wait for all of them.

    Results keep the order of items. The first exception raised by any task is
    re-raised here, which aborts the build.
    """
    items = list(items)
    with ThreadPoolExecutor(max_workers=max(jobs, 1)) as pool:
        return list(
            tqdm(
                pool.map(fn, items),
                total=len(items),
                desc=desc,
                unit=" files",
                disable=True if desc is None else None,
            )
        )
