"""Tests for Project and Pipeline construction and the reference closure."""

from __future__ import annotations

from pathlib import Path

import pytest

from azure_pathfilter.descriptors import DescriptorReadError, is_test_reference
from azure_pathfilter.models import (
    Pipeline,
    Project,
    ProjectReference,
    expand_closure,
    parse_pipeline,
    parse_project,
)

from conftest import ROOT_MARKER, write_file


class TestProject:
    def test_references_are_resolved_and_test_projects_skipped(self, repo_root: Path):
        project = parse_project(repo_root / "Module" / "Api" / "Api.csproj")

        assert project.path == repo_root / "Module" / "Api" / "Api.csproj"
        assert [r.include_path for r in project.references] == [
            repo_root / "Shared" / "Shared.csproj"
        ]

    def test_three_references_one_test_keeps_two_in_order(self, tmp_path: Path):
        path = write_file(
            tmp_path / "App" / "App.csproj",
            "\n".join(
                [
                    '<ProjectReference Include="..\\B\\B.csproj" />',
                    '<ProjectReference Include="..\\App.Tests\\App.Tests.csproj" />',
                    '<ProjectReference Include="..\\A\\A.csproj" />',
                ]
            ),
        )

        project = parse_project(path)

        assert [r.include_path for r in project.references] == [
            tmp_path / "B" / "B.csproj",
            tmp_path / "A" / "A.csproj",
        ]

    def test_referenced_projects_are_not_parsed(self, tmp_path: Path):
        path = write_file(
            tmp_path / "App" / "App.csproj",
            '<ProjectReference Include="..\\Missing\\Missing.csproj" />',
        )

        project = parse_project(path)

        assert project.references[0].include_path == tmp_path / "Missing" / "Missing.csproj"

    def test_missing_descriptor_raises(self, tmp_path: Path):
        missing = tmp_path / "Nope" / "Nope.csproj"
        with pytest.raises(DescriptorReadError) as excinfo:
            parse_project(missing)
        assert excinfo.value.path == missing
        assert isinstance(excinfo.value.__cause__, OSError)

    def test_non_utf8_descriptor_raises(self, tmp_path: Path):
        path = tmp_path / "Bad.csproj"
        path.write_bytes(b"\xff\xfe\x00<Project>")
        with pytest.raises(DescriptorReadError):
            parse_project(path)

    def test_to_dict(self, repo_root: Path):
        project = parse_project(repo_root / "Shared" / "Shared.csproj")
        assert project.to_dict() == {
            "path": str(repo_root / "Shared" / "Shared.csproj"),
            "references": [str(repo_root / "Deep" / "Deep.csproj")],
        }


class TestProjectReference:
    def test_rejects_unresolved_paths(self):
        with pytest.raises(ValueError):
            ProjectReference(include_path=Path("relative/Lib.csproj"))
        with pytest.raises(ValueError):
            ProjectReference(include_path=Path("/repo/../Lib.csproj"))

    def test_resolve(self):
        reference = ProjectReference.resolve(Path("/repo/App"), "..\\Lib\\Lib.csproj")
        assert reference.include_path == Path("/repo/Lib/Lib.csproj")


class TestPipeline:
    def test_direct_projects_only(self, repo_root: Path, pipeline_path: Path):
        pipeline = parse_pipeline(pipeline_path, root_marker=ROOT_MARKER)

        assert pipeline.name == "module"
        assert pipeline.path == pipeline_path
        assert [p.path for p in pipeline.projects] == [
            repo_root / "Module" / "Api" / "Api.csproj",
            repo_root / "Module" / "Subscriber" / "Subscriber.csproj",
        ]

    def test_complete_path_filter_follows_one_hop(self, pipeline_path: Path):
        pipeline = parse_pipeline(pipeline_path, root_marker=ROOT_MARKER)

        assert pipeline.complete_path_filter() == (
            "Module/Api/*; Module/Subscriber/*; Shared/*;"
        )

    def test_complete_path_filter_is_repeatable(self, pipeline_path: Path):
        pipeline = parse_pipeline(pipeline_path, root_marker=ROOT_MARKER)
        assert pipeline.complete_path_filter() == pipeline.complete_path_filter()

    def test_deeper_closure(self, pipeline_path: Path):
        pipeline = parse_pipeline(pipeline_path, root_marker=ROOT_MARKER)

        assert pipeline.complete_path_filter(depth=2) == (
            "Deep/*; Module/Api/*; Module/Subscriber/*; Shared/*;"
        )
        assert pipeline.complete_path_filter(depth=0) == "Module/Api/*; Module/Subscriber/*;"

    def test_falls_back_to_anchor_without_marker(self, repo_root: Path, pipeline_path: Path):
        pipeline = parse_pipeline(pipeline_path, root_marker="NotThere", anchor=repo_root)
        assert pipeline.projects[0].path == repo_root / "Module" / "Api" / "Api.csproj"

    def test_fixed_root_skips_marker_search(self, tmp_path: Path):
        root = tmp_path / "repo" / "repo"
        write_file(root / "Lib" / "Lib.csproj", "<Project />")
        path = write_file(root / "ci" / "azure-pipelines.yml", "p: 'Lib/Lib.csproj'\n")

        pipeline = parse_pipeline(path, root_marker="repo", root=root)

        assert pipeline.projects[0].path == root / "Lib" / "Lib.csproj"
        assert pipeline.complete_path_filter() == "Lib/*;"

    def test_missing_project_raises(self, repo_root: Path):
        path = write_file(
            repo_root / "pipelines" / "broken" / "azure-pipelines.yml",
            'projectPath: "Module/Gone/Gone.csproj"\n',
        )
        with pytest.raises(DescriptorReadError) as excinfo:
            parse_pipeline(path, root_marker=ROOT_MARKER)
        assert excinfo.value.path == repo_root / "Module" / "Gone" / "Gone.csproj"

    def test_loader_is_used_for_every_project(self, repo_root: Path, pipeline_path: Path):
        loaded: list[Path] = []

        def loader(path: Path) -> Project:
            loaded.append(path)
            return parse_project(path)

        pipeline = parse_pipeline(pipeline_path, root_marker=ROOT_MARKER, loader=loader)
        pipeline.complete_path_filter(loader=loader)

        assert loaded == [
            repo_root / "Module" / "Api" / "Api.csproj",
            repo_root / "Module" / "Subscriber" / "Subscriber.csproj",
            repo_root / "Shared" / "Shared.csproj",
        ]

    def test_to_dict(self, pipeline_path: Path):
        data = parse_pipeline(pipeline_path, root_marker=ROOT_MARKER).to_dict()
        assert data["name"] == "module"
        assert len(data["projects"]) == 2


def test_expand_closure_rejects_negative_depth():
    with pytest.raises(ValueError):
        expand_closure([], parse_project, depth=-1)


def test_expand_closure_stops_when_nothing_left():
    project = Project(path=Path("/repo/App/App.csproj"))
    assert expand_closure([project], parse_project, depth=5) == [project]


def test_pipeline_can_be_built_from_text(repo_root: Path):
    path = repo_root / "pipelines" / "inline" / "azure-pipelines.yml"
    pipeline = Pipeline.from_text(path, "p: 'Shared/Shared.csproj'", root_marker=ROOT_MARKER)
    assert [p.name for p in pipeline.projects] == ["Shared"]


@pytest.mark.parametrize(
    "line",
    [
        '"Module/Module.Tests.csproj"',
        '"Module/Module.Test.csproj"',
        '"Module.Testing/Module.Testing.csproj"',
    ],
)
def test_is_test_reference(line: str):
    assert is_test_reference(line)


def test_is_not_test_reference():
    assert not is_test_reference('"Module/Api/Api.csproj"')
