"""Shared fixtures: a small fake repository with projects and a pipeline."""

from __future__ import annotations

from pathlib import Path

import pytest

ROOT_MARKER = "SE-CustomerPortal"

API_CSPROJ = """\
<Project Sdk="Microsoft.NET.Sdk">
  <ItemGroup>
    <PackageReference Include="Azure.Storage.Blobs" Version="12.17.0" />
  </ItemGroup>
  <ItemGroup>
    <ProjectReference Include="..\\..\\Shared\\Shared.csproj" />
    <ProjectReference Include="..\\..\\Module.Tests\\Module.Tests.csproj" />
  </ItemGroup>
</Project>
"""

SHARED_CSPROJ = """\
<Project Sdk="Microsoft.NET.Sdk">
  <ItemGroup>
    <ProjectReference Include="..\\Deep\\Deep.csproj" />
  </ItemGroup>
</Project>
"""

LEAF_CSPROJ = """\
<Project Sdk="Microsoft.NET.Sdk">
  <PropertyGroup>
    <TargetFramework>net7.0</TargetFramework>
  </PropertyGroup>
</Project>
"""

PIPELINE_YML = """\
trigger:
  branches:
    include:
      - main

variables:
  buildConfiguration: "Release"
  projectPath: "Module/Api/Api.csproj"
  eventSubscriberPath: 'Module/Subscriber/Subscriber.csproj'
  testPath: "Module.Tests/Module.Tests.csproj"

stages:
  - stage: Build
    jobs:
      - job: Api
        steps:
          - task: DotNetCoreCLI@2
            inputs:
              command: build
              projects: "$(projectPath)"
"""


def write_file(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def repo_root(tmp_path: Path) -> Path:
    """Lay out SE-CustomerPortal with Api -> Shared -> Deep and one pipeline."""
    root = tmp_path / ROOT_MARKER
    write_file(root / "Module" / "Api" / "Api.csproj", API_CSPROJ)
    write_file(root / "Module" / "Subscriber" / "Subscriber.csproj", LEAF_CSPROJ)
    write_file(root / "Module.Tests" / "Module.Tests.csproj", LEAF_CSPROJ)
    write_file(root / "Shared" / "Shared.csproj", SHARED_CSPROJ)
    write_file(root / "Deep" / "Deep.csproj", LEAF_CSPROJ)
    write_file(root / "pipelines" / "module" / "azure-pipelines.yml", PIPELINE_YML)
    return root


@pytest.fixture
def pipeline_path(repo_root: Path) -> Path:
    return repo_root / "pipelines" / "module" / "azure-pipelines.yml"
