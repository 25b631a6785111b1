"""Human-readable summary rendering for console output."""

from __future__ import annotations

from typing import Any


def render_summary(report: dict[str, Any]) -> str:
    """Return a plain-text listing of every pipeline, its projects and filter."""
    totals = report.get("totals", {})
    pipelines = report.get("pipelines", [])

    lines = []
    for pipeline in pipelines:
        name = pipeline.get("name") or "(unnamed pipeline)"
        projects = pipeline.get("projects") or []
        lines.append(f"Pipeline {name}, includes {len(projects)} projects.")

        for project in projects:
            references = project.get("references") or []
            lines.append(f"    Project {project.get('path', '')}, {len(references)} deps:")
            for i, reference in enumerate(references, start=1):
                lines.append(f"        {i}: {reference}")

        lines.append(f"Path filter: {pipeline.get('pathFilter', '')}")
        if pipeline.get("outputFile"):
            lines.append(f"Written to: {pipeline['outputFile']}")
        lines.append("")

    if not pipelines:
        lines.append("No pipelines found.")
        lines.append("")

    lines.append(
        f"Total pipelines: {totals.get('pipelines', 0)} | "
        f"Projects: {totals.get('projects', 0)} | Filters: {totals.get('filters', 0)}"
    )

    return "\n".join(lines) + "\n"
