"""Pipeline model built from an azure-pipelines.yml descriptor."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from collections.abc import Callable, Iterable

from ..descriptors import DEFAULT_PROJECT_EXTENSION, read_descriptor
from ..parsers.pipeline_file import parse_text
from ..pathfilter import reduce_path_filters
from ..paths import normalize, repository_anchor, resolve_relative
from .project import Project, parse_project

logger = logging.getLogger(__name__)

ProjectLoader = Callable[[Path], Project]

DEFAULT_CLOSURE_DEPTH = 1


def expand_closure(
    projects: Iterable[Project],
    load: ProjectLoader,
    depth: int = DEFAULT_CLOSURE_DEPTH,
) -> list[Project]:
    """Return ``projects`` plus everything reachable within ``depth`` reference hops.

    Breadth-first, one level per hop. Projects met again are loaded again
    unless ``load`` memoizes; duplicates collapse later in the filter set.
    """
    if depth < 0:
        raise ValueError("depth must be non-negative")

    frontier = list(projects)
    closure = list(frontier)
    for _ in range(depth):
        frontier = [
            load(reference.include_path)
            for project in frontier
            for reference in project.references
        ]
        if not frontier:
            break
        closure.extend(frontier)

    return closure


@dataclass(frozen=True)
class Pipeline:
    """A pipeline descriptor and the projects it builds directly."""

    path: Path
    name: str
    projects: tuple[Project, ...]
    root_marker: str | None = None
    project_extension: str = DEFAULT_PROJECT_EXTENSION
    root: Path | None = None

    def _default_loader(self) -> ProjectLoader:
        extension = self.project_extension
        return lambda path: parse_project(path, extension)

    def closure(
        self,
        depth: int = DEFAULT_CLOSURE_DEPTH,
        loader: ProjectLoader | None = None,
    ) -> list[Project]:
        """Direct projects plus those reachable within ``depth`` hops."""
        return expand_closure(self.projects, loader or self._default_loader(), depth)

    def complete_path_filter(
        self,
        depth: int = DEFAULT_CLOSURE_DEPTH,
        loader: ProjectLoader | None = None,
    ) -> str:
        """Return the sorted, space-joined path filter for this pipeline.

        Recomputed from disk on every call unless ``loader`` caches.

        Raises:
            DescriptorReadError: If a referenced project cannot be read.
        """
        return reduce_path_filters(self.closure(depth, loader), self.root_marker, self.root)

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "path": str(self.path),
            "projects": [project.to_dict() for project in self.projects],
        }

    @classmethod
    def from_text(
        cls,
        path: Path,
        text: str,
        root_marker: str | None = None,
        anchor: Path | None = None,
        project_extension: str = DEFAULT_PROJECT_EXTENSION,
        loader: ProjectLoader | None = None,
        root: Path | None = None,
    ) -> Pipeline:
        """Build a Pipeline from already-read descriptor text.

        Project paths are joined onto the fixed repository ``root`` when given.
        Otherwise they go onto the ``root_marker`` ancestor of ``path``; without
        one, onto ``anchor``, or the pipeline's own directory.
        """
        base = root or repository_anchor(path, root_marker) or anchor or path.parent
        load = loader or (lambda project_path: parse_project(project_path, project_extension))

        projects: list[Project] = []
        for raw in parse_text(text, project_extension):
            project_path = resolve_relative(base, raw)
            logger.debug("Pipeline %s builds %s", path, project_path)
            projects.append(load(project_path))

        return cls(
            path=path,
            name=path.parent.name,
            projects=tuple(projects),
            root_marker=root_marker,
            project_extension=project_extension,
            root=root,
        )

    @classmethod
    def from_path(
        cls,
        path: Path,
        root_marker: str | None = None,
        anchor: Path | None = None,
        project_extension: str = DEFAULT_PROJECT_EXTENSION,
        loader: ProjectLoader | None = None,
        root: Path | None = None,
    ) -> Pipeline:
        """Read and parse the pipeline descriptor at ``path``.

        Raises:
            DescriptorReadError: If the pipeline or one of its projects cannot be read.
        """
        path = normalize(path)
        return cls.from_text(
            path,
            read_descriptor(path),
            root_marker=root_marker,
            anchor=anchor,
            project_extension=project_extension,
            loader=loader,
            root=root,
        )


def parse_pipeline(
    path: Path,
    root_marker: str | None = None,
    anchor: Path | None = None,
    project_extension: str = DEFAULT_PROJECT_EXTENSION,
    loader: ProjectLoader | None = None,
    root: Path | None = None,
) -> Pipeline:
    """Build a Pipeline, and a Project per direct build target, from ``path``."""
    return Pipeline.from_path(
        path,
        root_marker=root_marker,
        anchor=anchor,
        project_extension=project_extension,
        loader=loader,
        root=root,
    )
