"""Core generation entrypoints.

This module MUST NOT print or exit: it raises ``DescriptorReadError`` and
leaves it to the caller whether one bad descriptor aborts the whole run.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .discovery import discover_pipelines
from .models.pipeline import Pipeline, ProjectLoader, parse_pipeline
from .models.project import Project, parse_project
from .report import aggregate
from .settings import Settings

logger = logging.getLogger(__name__)


class ProjectCache:
    """Path-keyed memo of parsed projects, owned by a single generation run."""

    def __init__(self, extension: str) -> None:
        self._extension = extension
        self._projects: dict[Path, Project] = {}

    def __call__(self, path: Path) -> Project:
        project = self._projects.get(path)
        if project is None:
            project = parse_project(path, self._extension)
            self._projects[path] = project
        else:
            logger.debug("Reusing parsed project %s", path)
        return project

    def __len__(self) -> int:
        return len(self._projects)


def make_loader(settings: Settings) -> ProjectLoader:
    """Return the project loader for a run: memoized when ``cache_projects`` is set."""
    if settings.cache_projects:
        return ProjectCache(settings.project_extension)
    extension = settings.project_extension
    return lambda path: parse_project(path, extension)


def write_path_filter(pipeline: Pipeline, path_filter: str, output_filename: str) -> Path:
    """Write ``path_filter`` verbatim next to the pipeline descriptor."""
    output = pipeline.path.parent / output_filename
    output.write_text(path_filter, encoding="utf-8")
    logger.info("Wrote %s", output)
    return output


def generate_path_filters(
    root: Path,
    settings: Settings | None = None,
    write: bool = True,
) -> dict[str, Any]:
    """Compute the path filter of every pipeline under ``root``.

    Every pipeline is parsed and every filter computed before any side-car
    file is written, so a descriptor that cannot be read leaves no output.

    Params:
        root: repository root to scan; globs are relative to it unless
            ``settings.root_marker`` names a different root directory
        settings: generation settings, defaults when None
        write: if True, write each filter to a side-car file beside its pipeline

    Returns: report dict with one entry per pipeline (see ``report.aggregate``)

    Raises:
        DescriptorReadError: If any pipeline or project descriptor cannot be read.
    """
    root = root.resolve()
    settings = settings or Settings()
    loader = make_loader(settings)
    # Without an explicit marker the scanned root is the repository root
    fixed_root = None if settings.root_marker else root

    resolved: list[tuple[Pipeline, str]] = []
    for pipeline_path in discover_pipelines(root, settings.pipeline_filename, settings.excludes):
        pipeline = parse_pipeline(
            pipeline_path,
            root_marker=settings.root_marker,
            anchor=root,
            project_extension=settings.project_extension,
            loader=loader,
            root=fixed_root,
        )
        path_filter = pipeline.complete_path_filter(settings.closure_depth, loader)
        logger.info(
            "Pipeline %s includes %d project(s)", pipeline.name, len(pipeline.projects)
        )
        resolved.append((pipeline, path_filter))

    entries: list[dict[str, Any]] = []
    for pipeline, path_filter in resolved:
        entry = pipeline.to_dict()
        entry["path"] = pipeline.path.relative_to(root).as_posix()
        entry["pathFilter"] = path_filter
        entry["outputFile"] = None
        if write:
            output = write_path_filter(pipeline, path_filter, settings.output_filename)
            entry["outputFile"] = output.relative_to(root).as_posix()
        entries.append(entry)

    return aggregate(entries)
