"""Pipeline descriptor discovery."""

from __future__ import annotations

import logging
from pathlib import Path
from collections.abc import Iterable

from .settings import DEFAULT_EXCLUDES, DEFAULT_PIPELINE_FILENAME

logger = logging.getLogger(__name__)


def discover_pipelines(
    root: Path,
    filename: str = DEFAULT_PIPELINE_FILENAME,
    excludes: Iterable[str] = DEFAULT_EXCLUDES,
) -> list[Path]:
    """Find pipeline descriptors named ``filename`` recursively under root.

    Files inside an excluded directory are skipped. Unreadable directories are
    skipped too; the result is sorted.
    """
    root = root.resolve()
    excluded = set(excludes)
    found: list[Path] = []

    def should_skip(p: Path) -> bool:
        return any(part in excluded for part in p.parts[:-1])

    for path in root.rglob(filename):
        if not path.is_file():
            continue
        if should_skip(path.relative_to(root)):
            continue
        found.append(path)

    logger.debug("Found %d pipeline file(s) named %s under %s", len(found), filename, root)
    return sorted(found)
