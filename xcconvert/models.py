"""In-memory project graph consumed by the converter."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional, Tuple, Union

from .errors import UnsupportedPathKind


class PathKind(Enum):
    """Known source trees for interpreting a node's path string."""

    GROUP = "<group>"
    SOURCE_ROOT = "SOURCE_ROOT"
    BUILT_PRODUCTS_DIR = "BUILT_PRODUCTS_DIR"
    ABSOLUTE = "<absolute>"
    SDKROOT = "SDKROOT"
    DEVELOPER_DIR = "DEVELOPER_DIR"

    @classmethod
    def parse(cls, raw: str) -> "PathKind":
        try:
            return cls(raw)
        except ValueError:
            raise UnsupportedPathKind(raw) from None


class PhaseKind(Enum):
    SOURCES = "sources"
    RESOURCES = "resources"
    HEADERS = "headers"
    FRAMEWORKS = "frameworks"
    COPY_FILES = "copy_files"
    SHELL_SCRIPT = "shell_script"


@dataclass(frozen=True)
class FileReference:
    """Leaf node of the file tree."""

    id: str
    path: Optional[str]
    source_tree: str = PathKind.GROUP.value
    parent: Optional[str] = None
    name: Optional[str] = None


@dataclass(frozen=True)
class Group:
    """Container node of the file tree; children are node identities."""

    id: str
    path: Optional[str] = None
    source_tree: str = PathKind.GROUP.value
    parent: Optional[str] = None
    name: Optional[str] = None
    children: Tuple[str, ...] = ()


Node = Union[FileReference, Group]


@dataclass(frozen=True)
class BuildFile:
    id: str
    file_ref: Optional[str]


@dataclass(frozen=True)
class BuildPhase:
    kind: PhaseKind
    files: Tuple[BuildFile, ...] = ()


@dataclass(frozen=True)
class BuildConfiguration:
    """Named set of build settings in declaration order."""

    name: str
    settings: Mapping[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class Target:
    name: str
    product_type: Optional[str] = None
    build_phases: Tuple[BuildPhase, ...] = ()
    dependencies: Tuple[str, ...] = ()
    configurations: Tuple[BuildConfiguration, ...] = ()

    def setting(self, key: str) -> Optional[object]:
        """Return the first configuration value for ``key`` if any declares it."""
        for configuration in self.configurations:
            if key in configuration.settings:
                return configuration.settings[key]
        return None


@dataclass(frozen=True)
class Project:
    """Root of a loaded project: targets plus an arena of file-tree nodes."""

    name: str
    root: Path
    targets: Tuple[Target, ...]
    nodes: Mapping[str, Node]
    main_group: Optional[str] = None
    configurations: Tuple[BuildConfiguration, ...] = ()

    def node(self, identity: str) -> Optional[Node]:
        return self.nodes.get(identity)


__all__ = [
    "BuildConfiguration",
    "BuildFile",
    "BuildPhase",
    "FileReference",
    "Group",
    "Node",
    "PathKind",
    "PhaseKind",
    "Project",
    "Target",
]
