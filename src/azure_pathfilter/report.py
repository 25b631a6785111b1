"""Report aggregation and JSON-friendly output."""

from __future__ import annotations

from typing import Any


def aggregate(pipelines: list[dict[str, Any]]) -> dict[str, Any]:
    """Aggregate per-pipeline results into a single report.

    The input ``pipelines`` is expected to be a list of dicts with at least
    ``name``, ``path``, ``projects`` and ``pathFilter`` keys. ``projects`` is a
    list of objects containing ``path`` and ``references``.
    """

    total_pipelines = len(pipelines)
    total_projects = sum(len(p.get("projects", [])) for p in pipelines)
    total_filters = sum(len(p["pathFilter"].split()) for p in pipelines if p.get("pathFilter"))

    report: dict[str, Any] = {
        "version": "1",
        "pipelines": pipelines,
        "totals": {
            "pipelines": total_pipelines,
            "projects": total_projects,
            "filters": total_filters,
        },
    }

    return report
