"""Extract ProjectReference includes from a .csproj file, line by line.

Only lines shaped like ``<ProjectReference Include="..\\Other\\Other.csproj" />``
are recognised. The file is not parsed as XML: a reference split over several
lines, or written with single quotes, is not picked up.
"""

from __future__ import annotations

from ..descriptors import DEFAULT_PROJECT_EXTENSION, is_test_reference
from ..fenced import extract_fenced

REFERENCE_TAG = "<ProjectReference"
INCLUDE_ATTRIBUTE = "Include="
QUOTE = '"'


def extract_include(line: str) -> str | None:
    """Return the raw Include value of a ProjectReference line, or None."""
    rest = line.lstrip()
    if not rest.startswith(REFERENCE_TAG):
        return None

    rest = rest[len(REFERENCE_TAG):].lstrip()
    if not rest.startswith(INCLUDE_ATTRIBUTE):
        return None

    rest = rest[len(INCLUDE_ATTRIBUTE):]
    if not rest.startswith(QUOTE):
        return None

    return extract_fenced(rest, QUOTE, QUOTE)


def parse_text(text: str, extension: str = DEFAULT_PROJECT_EXTENSION) -> list[str]:
    """Return raw include paths in source order, test projects excluded."""
    includes: list[str] = []
    for line in text.splitlines():
        if is_test_reference(line, extension):
            continue
        include = extract_include(line)
        if include is not None:
            includes.append(include)

    return includes
