"""Resolution of file-tree nodes to filesystem locations."""

from __future__ import annotations

import os
from pathlib import Path, PurePosixPath
from typing import Set

from ..errors import UnsupportedPathKind
from ..models import Node, PathKind, Project


class PathResolver:
    """Maps ``(PathKind, path)`` pairs onto absolute locations.

    Group-relative paths resolve against the accumulated location of the
    containing group, project-relative paths against the project root, and
    build-product paths against ``build_root``. Absolute paths are only
    normalised. Any other known kind is unsupported.
    """

    def __init__(self, project_root: Path, build_root: Path | None = None) -> None:
        self.project_root = Path(project_root)
        self.build_root = Path(build_root) if build_root is not None else self.project_root / "build"

    def resolve(self, kind: PathKind, path: str | None, *, group_location: Path | None = None) -> Path:
        relative = path or ""
        if kind is PathKind.GROUP:
            base = group_location if group_location is not None else self.project_root
            return _normalise(base / relative)
        if kind is PathKind.SOURCE_ROOT:
            return _normalise(self.project_root / relative)
        if kind is PathKind.BUILT_PRODUCTS_DIR:
            return _normalise(self.build_root / relative)
        if kind is PathKind.ABSOLUTE:
            return _normalise(Path(relative))
        raise UnsupportedPathKind(kind)

    def locate(self, project: Project, node: Node) -> Path:
        """Return the location of ``node``, walking parent groups as needed."""
        return self._locate(project, node, set())

    def _locate(self, project: Project, node: Node, visiting: Set[str]) -> Path:
        if node.id in visiting:
            raise ValueError(f"Group hierarchy contains a cycle at '{node.id}'")
        visiting.add(node.id)

        kind = PathKind.parse(node.source_tree)
        group_location = None
        if kind is PathKind.GROUP and node.parent is not None:
            parent = project.node(node.parent)
            if parent is None:
                raise LookupError(f"Parent group '{node.parent}' of '{node.id}' is not in the project")
            group_location = self._locate(project, parent, visiting)
        return self.resolve(kind, node.path, group_location=group_location)

    def relative_destination(self, location: Path) -> PurePosixPath:
        """Return the path a file keeps inside its target directory."""
        for base in (self.project_root, self.build_root):
            try:
                relative = location.relative_to(_normalise(base))
            except ValueError:
                continue
            if relative.parts:
                return PurePosixPath(*relative.parts)
        return PurePosixPath(location.name)


def _normalise(path: Path) -> Path:
    return Path(os.path.normpath(path))


__all__ = ["PathResolver"]
