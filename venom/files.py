"""Discovery of YAML test suite files."""

from __future__ import annotations

import glob
import os
from collections.abc import Iterable

_YAML_EXTENSIONS = (".yml", ".yaml")


def _extension(path: str) -> str:
    name = os.path.basename(path)
    dot = name.rfind(".")
    return name[dot:] if dot >= 0 else ""


def uniq(items: Iterable[str]) -> list[str]:
    """Return the items without duplicates, keeping first occurrences in order."""
    return list(dict.fromkeys(items))


def get_files_path(paths: Iterable[str]) -> list[str]:
    """Expand directories and glob patterns (``**`` included) to YAML file paths."""
    found: list[str] = []
    for raw in paths:
        pattern = raw.strip()
        if os.path.isdir(pattern):
            pattern = pattern + os.sep + "*.y*ml"
        for path in sorted(glob.glob(pattern, recursive=True)):
            if _extension(path) in _YAML_EXTENSIONS:
                found.append(path)
    if not found:
        raise FileNotFoundError("no YAML (*.yml or *.yaml) file found or defined")
    return uniq(found)