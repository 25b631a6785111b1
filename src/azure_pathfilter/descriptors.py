"""Reading descriptor files and the shared test-reference filter."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_PROJECT_EXTENSION = ".csproj"


class DescriptorReadError(RuntimeError):
    """Raised when a project or pipeline descriptor cannot be read."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to read descriptor at {path}: {reason}")
        self.path = path


def read_descriptor(path: Path) -> str:
    """Return the full UTF-8 text of ``path``.

    Raises:
        DescriptorReadError: If the file is missing, unreadable or not UTF-8.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DescriptorReadError(path, exc.strerror or str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise DescriptorReadError(path, f"invalid UTF-8 ({exc.reason})") from exc

    logger.debug("Read descriptor %s (%d bytes)", path, len(text))
    return text


def is_test_reference(line: str, extension: str = DEFAULT_PROJECT_EXTENSION) -> bool:
    """Return True when ``line`` mentions a test project and must be skipped."""
    return f"Tests{extension}" in line or f"Test{extension}" in line or ".Test" in line
