"""Project model built from a .csproj descriptor."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ..descriptors import DEFAULT_PROJECT_EXTENSION, read_descriptor
from ..parsers.project_file import parse_text
from ..paths import PARENT_SEGMENT, normalize, resolve_relative

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProjectReference:
    """A resolved reference from one project to another project descriptor."""

    include_path: Path

    def __post_init__(self) -> None:
        if not self.include_path.is_absolute():
            raise ValueError(f"include_path must be absolute: {self.include_path}")
        if PARENT_SEGMENT in self.include_path.parts:
            raise ValueError(f"include_path must be resolved: {self.include_path}")

    @classmethod
    def resolve(cls, project_dir: Path, include: str) -> ProjectReference:
        return cls(include_path=resolve_relative(project_dir, include))


@dataclass(frozen=True)
class Project:
    """A project descriptor and the projects it references, in source order.

    Referenced projects are not parsed; callers that need them load each
    ``include_path`` themselves.
    """

    path: Path
    references: tuple[ProjectReference, ...] = ()

    @property
    def directory(self) -> Path:
        return self.path.parent

    @property
    def name(self) -> str:
        return self.path.stem

    def to_dict(self) -> dict[str, object]:
        return {
            "path": str(self.path),
            "references": [str(reference.include_path) for reference in self.references],
        }

    @classmethod
    def from_text(
        cls,
        path: Path,
        text: str,
        extension: str = DEFAULT_PROJECT_EXTENSION,
    ) -> Project:
        directory = path.parent
        references = tuple(
            ProjectReference.resolve(directory, include) for include in parse_text(text, extension)
        )
        for reference in references:
            logger.debug("%s references %s", path.name, reference.include_path)
        return cls(path=path, references=references)

    @classmethod
    def from_path(cls, path: Path, extension: str = DEFAULT_PROJECT_EXTENSION) -> Project:
        """Read and parse ``path``.

        Raises:
            DescriptorReadError: If the descriptor cannot be read.
        """
        path = normalize(path)
        return cls.from_text(path, read_descriptor(path), extension)


def parse_project(path: Path, extension: str = DEFAULT_PROJECT_EXTENSION) -> Project:
    """Build a Project from the descriptor at ``path``."""
    return Project.from_path(path, extension)
