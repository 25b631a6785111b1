"""Extract project paths from an azure-pipelines.yml file, line by line.

The YAML is never loaded: any quoted value ending in the project extension is
taken as a build target, whatever key it sits under.
"""

from __future__ import annotations

from pathlib import PurePath

from ..descriptors import DEFAULT_PROJECT_EXTENSION, is_test_reference
from ..fenced import extract_fenced

FENCES = ('"', "'")


def extract_project_path(
    line: str,
    extension: str = DEFAULT_PROJECT_EXTENSION,
    fence: str = '"',
) -> str | None:
    """Return the first ``fence``-quoted value on ``line`` if it is a project path."""
    value = extract_fenced(line, fence, fence)
    if value is None:
        return None
    # Guard against some other quoted string on the same line
    if PurePath(value.replace("\\", "/")).suffix != extension:
        return None
    return value


def parse_text(text: str, extension: str = DEFAULT_PROJECT_EXTENSION) -> list[str]:
    """Return raw project paths in source order, test projects excluded.

    Double quotes are tried before single quotes on each line.
    """
    paths: list[str] = []
    for line in text.splitlines():
        if is_test_reference(line, extension):
            continue
        for fence in FENCES:
            value = extract_project_path(line, extension, fence)
            if value is not None:
                paths.append(value)
                break

    return paths
