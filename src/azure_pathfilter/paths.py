"""Lexical path helpers shared by the project and pipeline resolvers.

Nothing here touches the filesystem: paths are built segment by segment so a
reference to a file that does not exist still resolves.
"""

from __future__ import annotations

import os
import re
from pathlib import Path, PurePosixPath

PARENT_SEGMENT = ".."

# .csproj files use backslashes, pipeline YAML uses forward slashes.
_SEPARATORS = re.compile(r"[\\/]")


def normalize(path: Path | str) -> Path:
    """Return ``path`` made absolute with ``.`` and ``..`` folded away."""
    return Path(os.path.normpath(Path(path).absolute()))


def split_segments(raw: str) -> list[str]:
    """Split a raw reference on either separator, dropping empty and ``.`` segments."""
    return [segment for segment in _SEPARATORS.split(raw) if segment not in ("", ".")]


def resolve_relative(base: Path, raw: str) -> Path:
    """Resolve ``raw`` against the directory ``base``.

    ``..`` pops one level, anything else is pushed. Popping past the root
    leaves the root; the result is shorter than intended but never raises.
    """
    resolved = base
    for segment in split_segments(raw):
        if segment == PARENT_SEGMENT:
            resolved = resolved.parent
        else:
            resolved = resolved / segment
    return resolved


def repository_anchor(path: Path, marker: str | None) -> Path | None:
    """Return the first ancestor of ``path`` (or ``path`` itself) named ``marker``.

    Ancestors are searched from the filesystem root down, so the outermost
    match wins. Returns None when ``marker`` is empty or absent.
    """
    if not marker:
        return None
    for ancestor in (*reversed(path.parents), path):
        if ancestor.name == marker:
            return ancestor
    return None


def relative_to_marker(path: Path, marker: str | None) -> PurePosixPath | None:
    """Return ``path`` relative to its ``marker`` ancestor in forward-slash form."""
    anchor = repository_anchor(path, marker)
    if anchor is None:
        return None
    return PurePosixPath(*path.relative_to(anchor).parts)


def repository_relative(
    path: Path,
    root_marker: str | None = None,
    root: Path | None = None,
) -> PurePosixPath | None:
    """Return ``path`` relative to the repository root in forward-slash form.

    A fixed ``root`` is used as-is; otherwise the ``root_marker`` ancestor is
    searched for. Returns None when ``path`` lies outside the repository.
    """
    if root is None:
        return relative_to_marker(path, root_marker)
    try:
        return PurePosixPath(*path.relative_to(root).parts)
    except ValueError:
        return None
