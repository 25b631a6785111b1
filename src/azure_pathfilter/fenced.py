"""Fenced substring extraction."""

from __future__ import annotations


def extract_fenced(line: str, open_marker: str, close_marker: str) -> str | None:
    """Return the text strictly between the first ``open_marker`` and the next
    ``close_marker``, or None when either marker is missing.

    There is no escaping: a marker inside the payload ends the match early.
    """
    start = line.find(open_marker)
    if start == -1:
        return None
    start += len(open_marker)

    end = line.find(close_marker, start)
    if end == -1:
        return None

    return line[start:end]
