"""Configuration loader for path filter generation.

Reads an optional YAML (or JSON) settings file and validates it against
``SETTINGS_SCHEMA``. Every key is optional; anything left out keeps the
built-in default, so running without a settings file is the normal case.

Example ``.azure-pathfilter.yml``::

    rootMarker: SE-CustomerPortal
    projectExtension: .csproj
    excludes: [.git, node_modules, bin, obj]
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator

from .descriptors import DEFAULT_PROJECT_EXTENSION

DEFAULT_CONFIG_FILENAME = ".azure-pathfilter.yml"
CONFIG_PATH_ENV_VAR = "AZURE_PATHFILTER_CONFIG"

DEFAULT_PIPELINE_FILENAME = "azure-pipelines.yml"
DEFAULT_OUTPUT_FILENAME = ".azure-pathfilter"
DEFAULT_EXCLUDES = (".git", "node_modules", "bin", "obj")

SETTINGS_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "rootMarker": {"type": "string", "minLength": 1},
        "pipelineFileName": {"type": "string", "minLength": 1},
        "projectExtension": {"type": "string", "pattern": r"^\.[^.\\/]+$"},
        "outputFileName": {"type": "string", "minLength": 1},
        "excludes": {"type": "array", "items": {"type": "string", "minLength": 1}},
        "closureDepth": {"type": "integer", "minimum": 0},
        "cacheProjects": {"type": "boolean"},
    },
}

# settings file key -> Settings field
_FIELDS = {
    "rootMarker": "root_marker",
    "pipelineFileName": "pipeline_filename",
    "projectExtension": "project_extension",
    "outputFileName": "output_filename",
    "excludes": "excludes",
    "closureDepth": "closure_depth",
    "cacheProjects": "cache_projects",
}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be loaded or is invalid."""


@dataclass(slots=True, frozen=True)
class Settings:
    """Resolved settings for one generation run."""

    root_marker: str | None = None
    pipeline_filename: str = DEFAULT_PIPELINE_FILENAME
    project_extension: str = DEFAULT_PROJECT_EXTENSION
    output_filename: str = DEFAULT_OUTPUT_FILENAME
    excludes: tuple[str, ...] = field(default=DEFAULT_EXCLUDES)
    closure_depth: int = 1
    cache_projects: bool = True

    def with_overrides(self, **overrides: Any) -> Settings:
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        if "closure_depth" in changes and changes["closure_depth"] < 0:
            raise ConfigError("closure depth must be non-negative")
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Create Settings from a settings-file mapping, validating it first."""
        validator = Draft202012Validator(SETTINGS_SCHEMA)
        errors = sorted(validator.iter_errors(data), key=lambda e: "/".join(str(p) for p in e.path))
        if errors:
            messages = []
            for error in errors:
                pointer = "/".join(str(p) for p in error.path)
                messages.append(f"{pointer or '<root>'}: {error.message}")
            raise ConfigError("Invalid configuration: " + "; ".join(messages))

        kwargs = {_FIELDS[key]: value for key, value in data.items()}
        if "excludes" in kwargs:
            kwargs["excludes"] = tuple(kwargs["excludes"])
        return cls(**kwargs)


def _resolve_config_path(path: Path | str | None, root: Path | None) -> tuple[Path | None, bool]:
    """Resolve the configuration file path and whether it must exist.

    Priority:
    1. Explicit path argument
    2. AZURE_PATHFILTER_CONFIG environment variable
    3. .azure-pathfilter.yml in the scanned root, when present
    """
    if path is not None:
        return Path(path), True

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path), True

    if root is not None:
        return root / DEFAULT_CONFIG_FILENAME, False

    return None, False


def load_settings(path: Path | str | None = None, root: Path | None = None) -> Settings:
    """Load and validate settings.

    Args:
        path: Optional path to the config file. If not provided, uses the
            AZURE_PATHFILTER_CONFIG env var or ``<root>/.azure-pathfilter.yml``.
        root: Repository root being scanned.

    Returns:
        Settings with defaults for every key the file leaves out.

    Raises:
        ConfigError: If an explicit file is missing, unreadable or invalid.
    """
    config_path, required = _resolve_config_path(path, root)

    if config_path is None or not config_path.exists():
        if required:
            raise ConfigError(f"Configuration file not found: {config_path}")
        return Settings()

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in configuration file: {exc}") from exc

    if data is None:
        return Settings()

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    return Settings.from_dict(data)
