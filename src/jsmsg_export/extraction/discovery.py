"""
Resolution of source file patterns into a concrete, ordered file list.

Patterns are applied in order. A plain pattern adds the files it matches;
a pattern prefixed with ``!`` removes every already-selected file it
matches. ``**`` matches any number of directories, and a component such as
``**.js`` is shorthand for ``**/*.js``.
"""

from __future__ import annotations

import glob
import logging
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

EXCLUDE_PREFIX = "!"


def normalize_pattern(pattern: str) -> str:
    """Expand ``**`` embedded in a path component into ``**/<component>``."""
    components: list[str] = []
    for component in pattern.replace("\\", "/").split("/"):
        if component != "**" and "**" in component:
            components.extend(["**", component.replace("**", "*")])
        else:
            components.append(component)
    return "/".join(components)


def expand_pattern(pattern: str, base_dir: Path) -> list[Path]:
    """
    Return the files matching a single pattern, sorted.

    Relative patterns are resolved against ``base_dir``.
    """
    normalized = normalize_pattern(pattern)
    matches = glob.glob(normalized, root_dir=base_dir, recursive=True)

    files: list[Path] = []
    for match in sorted(matches):
        path = (base_dir / match).resolve()
        if path.is_file():
            files.append(path)
    return files


def find_js_files(patterns: Iterable[str], base_dir: Path | None = None) -> list[Path]:
    """
    Resolve inclusion and ``!``-exclusion patterns into source files.

    Args:
        patterns: Patterns in the order they were given
        base_dir: Directory relative patterns are resolved against
            (defaults to the current working directory)

    Returns:
        Matching files, without duplicates, in first-discovery order
    """
    root = (base_dir or Path.cwd()).resolve()
    selected: dict[Path, None] = {}

    for pattern in patterns:
        if pattern.startswith(EXCLUDE_PREFIX):
            excluded = expand_pattern(pattern[len(EXCLUDE_PREFIX) :], root)
            removed = 0
            for path in excluded:
                if path in selected:
                    del selected[path]
                    removed += 1
            logger.debug(f"Pattern {pattern!r} excluded {removed} file(s)")
            continue

        matched = expand_pattern(pattern, root)
        if not matched:
            logger.warning(f"Pattern matched no files: {pattern}")
        for path in matched:
            selected.setdefault(path, None)
        logger.debug(f"Pattern {pattern!r} matched {len(matched)} file(s)")

    files = list(selected)
    logger.info(f"Found {len(files)} source file(s) to scan")
    return files
