"""Enumeration of the files a target builds from."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from ..errors import ConversionError, FailedToEnumerateSources, InvalidBuildFile
from ..models import FileReference, PathKind, PhaseKind, Project, Target

DEFAULT_PHASES = (PhaseKind.SOURCES, PhaseKind.RESOURCES, PhaseKind.HEADERS)


@dataclass(frozen=True)
class SourceEntry:
    """A target file paired with the kind that governs its path."""

    file: FileReference
    kind: PathKind
    phase: PhaseKind


def enumerate_sources(
    project: Project,
    target: Target,
    phases: Iterable[PhaseKind] = DEFAULT_PHASES,
) -> List[SourceEntry]:
    """Return the target's build files in phase order.

    Every build file must point at a file reference that belongs to a group.
    A dangling or orphaned reference raises :class:`InvalidBuildFile` and stops
    enumeration for the target.
    """
    selected = set(phases)
    try:
        entries: List[SourceEntry] = []
        for phase in target.build_phases:
            if phase.kind not in selected:
                continue
            for build_file in phase.files:
                file_ref = _lookup(project, target, build_file.id, build_file.file_ref)
                entries.append(SourceEntry(file_ref, PathKind.parse(file_ref.source_tree), phase.kind))
        return entries
    except ConversionError:
        raise
    except Exception as exc:
        raise FailedToEnumerateSources(target.name, exc) from exc


def _lookup(project: Project, target: Target, build_file_id: str, identity: str | None) -> FileReference:
    if identity is None:
        raise InvalidBuildFile(target.name, build_file_id, "no file reference")
    node = project.node(identity)
    if node is None:
        raise InvalidBuildFile(target.name, build_file_id, f"unknown file reference '{identity}'")
    if not isinstance(node, FileReference):
        raise InvalidBuildFile(target.name, build_file_id, f"'{identity}' is a group")
    if node.parent is None:
        raise InvalidBuildFile(target.name, build_file_id, f"'{identity}' is not in any group")
    return node


__all__ = ["DEFAULT_PHASES", "SourceEntry", "enumerate_sources"]
