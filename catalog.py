"""Keep the icon catalog (src/data.json) in sync with the svg sources."""

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List

from utils import PACKAGE_NAME, Icon, write_text


def load_catalog(path: Path) -> Dict:
    """Read the persisted catalog. Any failure yields an empty catalog."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        logging.debug(f"{path} does not exist, starting with an empty catalog")
        return {"icons": []}
    except (OSError, ValueError) as e:
        logging.warning(f"{path} could not be read ({e}), starting with an empty catalog")
        return {"icons": []}

    if not isinstance(data, dict):
        logging.warning(f"{path} is not a JSON object, starting with an empty catalog")
        return {"icons": []}

    icons = data.get("icons")
    if not isinstance(icons, list):
        icons = []
    data["icons"] = [i for i in icons if isinstance(i, dict) and isinstance(i.get("name"), str)]

    for entry in data["icons"]:
        tags = entry.get("tags")
        if tags is None or (isinstance(tags, list) and all(isinstance(t, str) for t in tags)):
            continue
        # Rebuilt from the name by apply_tags
        logging.warning(f"{path}: tags of {entry['name']!r} are not a list of strings ({tags!r})")
        del entry["tags"]
    return data


def reconcile_icons(entries: List[Dict], names: Iterable[str]) -> List[Dict]:
    """Add entries for new names, drop entries for missing names and sort by name.

    Existing entries are kept as they are, so hand-edited tags survive.
    """
    names = set(names)
    by_name: Dict[str, Dict] = {}
    for entry in entries:
        by_name.setdefault(entry["name"], entry)

    for name in names.difference(by_name):
        by_name[name] = {"name": name}

    return [by_name[name] for name in sorted(names)]


def apply_tags(entries: List[Dict]) -> List[Dict]:
    for entry in entries:
        tags = entry.get("tags")
        if tags is None:
            tags = entry["name"].split("-")
        entry["tags"] = sorted(tags)
    return entries


def dump_json(data) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def create_data_json(version: str, src_data_json: Path, dist_data_json: Path, icons: Iterable[Icon]):
    data = load_catalog(src_data_json)
    data["icons"] = apply_tags(reconcile_icons(data["icons"], (i.name for i in icons)))

    write_text(src_data_json, dump_json(data))

    dist_data = {
        "name": PACKAGE_NAME,
        "version": version,
        "icons": data["icons"],
    }
    write_text(dist_data_json, dump_json(dist_data))

    logging.info(f"Catalog holds {len(data['icons'])} icons")
