"""Copies resolved target files into the package layout."""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Dict, List, Sequence

from ..errors import FileCopyFailed, TargetDirectoryCreationFailed
from ..logging import get_logger


@dataclass(frozen=True)
class PlannedFile:
    """A source location and the relative path it takes in the target directory."""

    source: Path
    relative: PurePosixPath


@dataclass
class TargetOutput:
    """Files written for a single target."""

    name: str
    directory: Path
    files: List[Path] = field(default_factory=list)


class FileMaterializer:
    """Writes a target's files under ``<package_root>/<target>/``.

    Conflicts are detected before the first copy: planned paths that coincide
    or nest inside one another, paths escaping the target directory, or a
    destination that already exists fail the target without writing anything
    into it.
    """

    def __init__(self) -> None:
        self.logger = get_logger("materializer")

    def materialize(self, target_name: str, files: Sequence[PlannedFile], package_root: Path) -> TargetOutput:
        directory = target_directory(target_name, package_root)
        plan = self._plan(directory, files)

        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise TargetDirectoryCreationFailed(target_name, directory, exc) from exc

        output = TargetOutput(name=target_name, directory=directory)
        for source, destination in plan:
            self._copy(source, destination)
            output.files.append(destination)
        self.logger.debug("Copied %d files into %s", len(output.files), directory)
        return output

    @staticmethod
    def _plan(directory: Path, files: Sequence[PlannedFile]) -> List[tuple[Path, Path]]:
        claimed: Dict[PurePosixPath, PlannedFile] = {}
        plan: List[tuple[Path, Path]] = []
        for planned in files:
            relative = planned.relative
            destination = directory.joinpath(*relative.parts)
            if relative.is_absolute() or not relative.parts or ".." in relative.parts:
                raise FileCopyFailed(
                    planned.source,
                    destination,
                    ValueError(f"'{relative}' does not stay inside the target directory"),
                )
            for other, previous in claimed.items():
                if other == relative or other in relative.parents or relative in other.parents:
                    raise FileCopyFailed(
                        planned.source,
                        destination,
                        FileExistsError(f"'{previous.source}' is already copied to '{other}'"),
                    )
            if destination.exists():
                raise FileCopyFailed(planned.source, destination, FileExistsError("destination already exists"))
            claimed[relative] = planned
            plan.append((planned.source, destination))
        return plan

    @staticmethod
    def _copy(source: Path, destination: Path) -> None:
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            if source.is_dir():
                shutil.copytree(source, destination)
            else:
                shutil.copy2(source, destination)
        except OSError as exc:
            raise FileCopyFailed(source, destination, exc) from exc


def target_directory(target_name: str, package_root: Path) -> Path:
    """Return ``package_root/<target_name>``, rejecting names that are not a single path component."""
    directory = package_root / target_name
    if (
        not target_name
        or target_name in (".", "..")
        or "/" in target_name
        or "\\" in target_name
    ):
        raise TargetDirectoryCreationFailed(
            target_name,
            directory,
            ValueError(f"Target name '{target_name}' cannot be used as a directory name"),
        )
    return directory


__all__ = ["FileMaterializer", "PlannedFile", "TargetOutput", "target_directory"]
