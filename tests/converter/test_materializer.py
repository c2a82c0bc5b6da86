"""Tests for xcconvert.converter.materializer."""

from __future__ import annotations

from pathlib import Path, PurePosixPath

import pytest

from xcconvert.converter.materializer import FileMaterializer, PlannedFile
from xcconvert.errors import FileCopyFailed, TargetDirectoryCreationFailed


def _source(root: Path, relative: str, contents: str) -> PlannedFile:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(contents, encoding="utf-8")
    return PlannedFile(source=path, relative=PurePosixPath(relative))


def test_materialize_copies_files_preserving_structure(tmp_path: Path) -> None:
    sources = tmp_path / "src"
    files = [
        _source(sources, "Core/Model/User.swift", "struct User {}\n"),
        _source(sources, "Core/Store.swift", "final class Store {}\n"),
    ]

    output = FileMaterializer().materialize("Core", files, tmp_path / "pkg")

    assert output.directory == tmp_path / "pkg" / "Core"
    assert output.files == [
        tmp_path / "pkg" / "Core" / "Core" / "Model" / "User.swift",
        tmp_path / "pkg" / "Core" / "Core" / "Store.swift",
    ]
    assert output.files[0].read_text(encoding="utf-8") == "struct User {}\n"


def test_materialize_copies_directory_references(tmp_path: Path) -> None:
    catalog = tmp_path / "src" / "Assets.xcassets"
    (catalog / "AppIcon.appiconset").mkdir(parents=True)
    (catalog / "Contents.json").write_text("{}", encoding="utf-8")

    output = FileMaterializer().materialize(
        "App", [PlannedFile(catalog, PurePosixPath("Assets.xcassets"))], tmp_path / "pkg"
    )

    copied = output.directory / "Assets.xcassets"
    assert (copied / "Contents.json").read_text(encoding="utf-8") == "{}"
    assert (copied / "AppIcon.appiconset").is_dir()


def test_duplicate_destinations_fail_before_any_copy(tmp_path: Path) -> None:
    first = _source(tmp_path / "a", "Util.swift", "// a\n")
    second = _source(tmp_path / "b", "Util.swift", "// b\n")
    package_root = tmp_path / "pkg"

    with pytest.raises(FileCopyFailed) as excinfo:
        FileMaterializer().materialize("Core", [first, second], package_root)

    assert excinfo.value.source == second.source
    assert excinfo.value.destination == package_root / "Core" / "Util.swift"
    assert isinstance(excinfo.value.cause, FileExistsError)
    assert not package_root.exists()


def test_existing_destination_is_never_overwritten(tmp_path: Path) -> None:
    planned = _source(tmp_path / "src", "main.swift", "new\n")
    existing = tmp_path / "pkg" / "App" / "main.swift"
    existing.parent.mkdir(parents=True)
    existing.write_text("old\n", encoding="utf-8")

    with pytest.raises(FileCopyFailed):
        FileMaterializer().materialize("App", [planned], tmp_path / "pkg")

    assert existing.read_text(encoding="utf-8") == "old\n"


def test_missing_source_reports_copy_failure(tmp_path: Path) -> None:
    planned = PlannedFile(tmp_path / "nowhere.swift", PurePosixPath("nowhere.swift"))

    with pytest.raises(FileCopyFailed) as excinfo:
        FileMaterializer().materialize("App", [planned], tmp_path / "pkg")

    assert excinfo.value.source == tmp_path / "nowhere.swift"
    assert excinfo.value.destination == tmp_path / "pkg" / "App" / "nowhere.swift"
    assert isinstance(excinfo.value.cause, OSError)


def test_target_directory_creation_failure(tmp_path: Path) -> None:
    blocker = tmp_path / "pkg"
    blocker.write_text("not a directory", encoding="utf-8")

    with pytest.raises(TargetDirectoryCreationFailed) as excinfo:
        FileMaterializer().materialize("App", [], blocker)

    assert excinfo.value.target == "App"
    assert excinfo.value.directory == blocker / "App"


def _catalog(root: Path) -> PlannedFile:
    catalog = root / "Assets"
    catalog.mkdir(parents=True)
    (catalog / "x.png").write_text("from-dir", encoding="utf-8")
    return PlannedFile(catalog, PurePosixPath("Assets"))


@pytest.mark.parametrize("directory_first", [True, False])
def test_nested_destinations_fail_before_any_copy(tmp_path: Path, directory_first: bool) -> None:
    catalog = _catalog(tmp_path / "a")
    image = _source(tmp_path / "b", "Assets/x.png", "from-file")
    files = [catalog, image] if directory_first else [image, catalog]
    package_root = tmp_path / "pkg"

    with pytest.raises(FileCopyFailed) as excinfo:
        FileMaterializer().materialize("App", files, package_root)

    assert isinstance(excinfo.value.cause, FileExistsError)
    assert not package_root.exists()


@pytest.mark.parametrize("relative", ["../outside.swift", "Sources/../../outside.swift", "/etc/outside.swift"])
def test_relative_paths_must_stay_inside_target(tmp_path: Path, relative: str) -> None:
    source = _source(tmp_path / "src", "outside.swift", "// x\n").source
    package_root = tmp_path / "pkg"

    with pytest.raises(FileCopyFailed) as excinfo:
        FileMaterializer().materialize("App", [PlannedFile(source, PurePosixPath(relative))], package_root)

    assert isinstance(excinfo.value.cause, ValueError)
    assert not package_root.exists()
    assert not (tmp_path / "outside.swift").exists()


@pytest.mark.parametrize("name", ["", ".", "..", "../X", "A/B", "A\\B"])
def test_target_name_must_be_a_single_component(tmp_path: Path, name: str) -> None:
    with pytest.raises(TargetDirectoryCreationFailed) as excinfo:
        FileMaterializer().materialize(name, [], tmp_path / "pkg")

    assert excinfo.value.target == name
    assert not (tmp_path / "pkg").exists()
