"""azure-pathfilter core package.

Resolves .csproj project references for every Azure pipeline in a repository
and reduces them to the path filter string Azure DevOps expects. The core is
importable on its own; the CLI in ``azure_pathfilter.cli`` is a thin wrapper.
"""

__all__ = [
    "core",
]
