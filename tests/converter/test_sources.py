"""Tests for xcconvert.converter.sources."""

from __future__ import annotations

from dataclasses import replace

import pytest

from xcconvert.converter.sources import enumerate_sources
from xcconvert.errors import FailedToEnumerateSources, InvalidBuildFile, UnsupportedPathKind
from xcconvert.models import BuildFile, BuildPhase, PathKind, PhaseKind, Target
from tests._fixtures.project_builder import ProjectBuilder


def test_enumerate_sources_keeps_phase_and_declaration_order(project_builder: ProjectBuilder) -> None:
    project_builder.group("G", "App")
    project_builder.file("F1", "main.swift", group="G")
    project_builder.file("F2", "View.swift", group="G")
    project_builder.file("F3", "Assets.json", group="G")
    target = project_builder.target("App", ["F2", "F1"], resources=["F3"])
    project = project_builder.build()

    entries = enumerate_sources(project, target)

    assert [entry.file.id for entry in entries] == ["F2", "F1", "F3"]
    assert [entry.phase for entry in entries] == [PhaseKind.SOURCES, PhaseKind.SOURCES, PhaseKind.RESOURCES]
    assert all(entry.kind is PathKind.GROUP for entry in entries)


def test_enumerate_sources_filters_phases(project_builder: ProjectBuilder) -> None:
    project_builder.file("F1", "main.swift")
    project_builder.file("F2", "data.json")
    target = project_builder.target("App", ["F1"], resources=["F2"])
    project = project_builder.build()

    entries = enumerate_sources(project, target, phases=[PhaseKind.SOURCES])

    assert [entry.file.id for entry in entries] == ["F1"]


def test_frameworks_phase_is_skipped_by_default(project_builder: ProjectBuilder) -> None:
    project_builder.file("F1", "main.swift")
    project = project_builder.build()
    target = Target(
        name="App",
        build_phases=(
            BuildPhase(PhaseKind.SOURCES, (BuildFile("BF1", "F1"),)),
            BuildPhase(PhaseKind.FRAMEWORKS, (BuildFile("BF2", "libCore.a"),)),
        ),
    )

    assert [entry.file.id for entry in enumerate_sources(project, target)] == ["F1"]


def test_missing_file_reference_is_invalid_build_file(project_builder: ProjectBuilder) -> None:
    project_builder.file("F1", "main.swift")
    target = project_builder.target("App", ["F1", "GHOST"])
    project = project_builder.build()

    with pytest.raises(InvalidBuildFile) as excinfo:
        enumerate_sources(project, target)

    assert excinfo.value.target == "App"
    assert excinfo.value.build_file == "BF2"
    assert "GHOST" in str(excinfo.value)


def test_build_file_without_reference_is_invalid(project_builder: ProjectBuilder) -> None:
    project = project_builder.build()
    target = Target(name="App", build_phases=(BuildPhase(PhaseKind.SOURCES, (BuildFile("BF9", None),)),))

    with pytest.raises(InvalidBuildFile) as excinfo:
        enumerate_sources(project, target)
    assert excinfo.value.build_file == "BF9"


def test_file_outside_any_group_is_invalid(project_builder: ProjectBuilder) -> None:
    project_builder.file("ORPHAN", "Stray.swift", group=None, write=False)
    target = project_builder.target("App", ["ORPHAN"])
    project = project_builder.build()

    with pytest.raises(InvalidBuildFile, match="not in any group"):
        enumerate_sources(project, target)


def test_group_reference_is_invalid(project_builder: ProjectBuilder) -> None:
    project_builder.group("G", "App")
    target = project_builder.target("App", ["G"])
    project = project_builder.build()

    with pytest.raises(InvalidBuildFile, match="is a group"):
        enumerate_sources(project, target)


def test_unknown_source_tree_fails_fast(project_builder: ProjectBuilder) -> None:
    project_builder.file("F1", "Thing.swift", source_tree="CUSTOM_ROOT", write=False)
    target = project_builder.target("App", ["F1"])
    project = project_builder.build()

    with pytest.raises(UnsupportedPathKind):
        enumerate_sources(project, target)


def test_unexpected_errors_are_wrapped(project_builder: ProjectBuilder) -> None:
    project_builder.file("F1", "main.swift")
    project = project_builder.build()
    broken = replace(project, nodes=None)
    target = Target(name="App", build_phases=(BuildPhase(PhaseKind.SOURCES, (BuildFile("BF1", "F1"),)),))

    with pytest.raises(FailedToEnumerateSources) as excinfo:
        enumerate_sources(broken, target)

    assert excinfo.value.target == "App"
    assert isinstance(excinfo.value.cause, AttributeError)
