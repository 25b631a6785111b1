"""Reduce projects to Azure DevOps path filter globs."""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING
from collections.abc import Iterable

from .paths import repository_relative

if TYPE_CHECKING:
    from .models.project import Project

logger = logging.getLogger(__name__)

WILDCARD = "*"
TERMINATOR = ";"
SEPARATOR = " "


def azure_path_filter(
    project: Project,
    root_marker: str | None = None,
    root: Path | None = None,
) -> str:
    """Return the directory glob for ``project``, e.g. ``Module/Api/*;``.

    The glob is relative to ``root`` when given, else to the ``root_marker``
    ancestor. A project outside the repository gets its absolute directory,
    which Azure DevOps will never match.
    """
    directory = project.directory
    relative = repository_relative(directory, root_marker, root)
    if relative is None:
        logger.warning(
            "%s is outside the repository root; using absolute path filter", project.path
        )
        relative = PurePosixPath(directory.as_posix())

    return f"{(relative / WILDCARD).as_posix()}{TERMINATOR}"


def reduce_path_filters(
    projects: Iterable[Project],
    root_marker: str | None = None,
    root: Path | None = None,
) -> str:
    """Return the deduplicated, sorted globs for ``projects`` joined by spaces."""
    filters = {azure_path_filter(project, root_marker, root) for project in projects}
    return SEPARATOR.join(sorted(filters))
