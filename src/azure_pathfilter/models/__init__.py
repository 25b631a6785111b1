"""Data models for project and pipeline descriptors."""

from __future__ import annotations

from .pipeline import Pipeline, expand_closure, parse_pipeline
from .project import Project, ProjectReference, parse_project

__all__ = [
    "Pipeline",
    "Project",
    "ProjectReference",
    "expand_closure",
    "parse_pipeline",
    "parse_project",
]
