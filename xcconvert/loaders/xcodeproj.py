"""Adapter from ``pbxproj.XcodeProject`` objects to the converter's project graph."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pbxproj import XcodeProject

from ..errors import FailedToLoadProject
from ..logging import get_logger
from ..models import (
    BuildConfiguration,
    BuildFile,
    BuildPhase,
    FileReference,
    Group,
    Node,
    PathKind,
    PhaseKind,
    Project,
    Target,
)

logger = get_logger("loaders.xcodeproj")

_PHASE_KINDS: Dict[str, PhaseKind] = {
    "PBXSourcesBuildPhase": PhaseKind.SOURCES,
    "PBXResourcesBuildPhase": PhaseKind.RESOURCES,
    "PBXHeadersBuildPhase": PhaseKind.HEADERS,
    "PBXFrameworksBuildPhase": PhaseKind.FRAMEWORKS,
    "PBXCopyFilesBuildPhase": PhaseKind.COPY_FILES,
    "PBXShellScriptBuildPhase": PhaseKind.SHELL_SCRIPT,
}
_GROUP_ISAS = frozenset({"PBXGroup", "PBXVariantGroup", "XCVersionGroup"})
_TARGET_ISAS = frozenset({"PBXNativeTarget", "PBXAggregateTarget", "PBXLegacyTarget"})


def load_project(path: Path) -> Project:
    """Load ``path`` (an ``.xcodeproj`` bundle or its ``project.pbxproj``)."""
    path = Path(path).expanduser()
    pbxproj_file = path / "project.pbxproj" if path.suffix == ".xcodeproj" else path
    bundle = pbxproj_file.parent
    if not pbxproj_file.is_file():
        raise FailedToLoadProject(path, FileNotFoundError(f"No project.pbxproj under '{bundle}'"))
    try:
        xcodeproj = XcodeProject.load(str(pbxproj_file))
    except Exception as exc:
        raise FailedToLoadProject(path, exc) from exc
    logger.debug("Loaded %s", pbxproj_file)
    return project_from_xcodeproj(xcodeproj, bundle)


def project_from_xcodeproj(xcodeproj: Any, bundle: Path) -> Project:
    """Build a :class:`Project` from a parsed project and its ``.xcodeproj`` path."""
    objects = xcodeproj.objects
    root_object = _get(objects, xcodeproj.rootObject)
    if root_object is None:
        raise FailedToLoadProject(bundle, LookupError("Project has no root object"))

    project_dir = _str(getattr(root_object, "projectDirPath", None)) or ""
    root = (bundle.parent / project_dir).resolve()

    main_group = _str(getattr(root_object, "mainGroup", None))
    nodes = _collect_nodes(objects, main_group)

    targets = tuple(
        _target(objects, target_object)
        for target_object in (_get(objects, key) for key in _ids(getattr(root_object, "targets", None)))
        if target_object is not None and _isa(target_object) in _TARGET_ISAS
    )
    return Project(
        name=bundle.stem,
        root=root,
        targets=targets,
        nodes=nodes,
        main_group=main_group,
        configurations=_configurations(objects, getattr(root_object, "buildConfigurationList", None)),
    )


def _collect_nodes(objects: Any, main_group: Optional[str]) -> Dict[str, Node]:
    parents: Dict[str, Optional[str]] = {}
    order: List[str] = []
    pending: List[Tuple[str, Optional[str]]] = [(main_group, None)] if main_group else []
    while pending:
        identity, parent = pending.pop(0)
        if identity in parents:
            continue
        parents[identity] = parent
        order.append(identity)
        obj = _get(objects, identity)
        if obj is not None and _isa(obj) in _GROUP_ISAS:
            pending.extend((child, identity) for child in _ids(getattr(obj, "children", None)))

    nodes: Dict[str, Node] = {}
    for identity in order:
        obj = _get(objects, identity)
        if obj is not None:
            nodes[identity] = _node(identity, obj, parents[identity])

    # File references that no group reaches stay in the arena without a parent.
    for obj in _section(objects, "PBXFileReference"):
        identity = _object_id(obj)
        if identity and identity not in nodes:
            nodes[identity] = _node(identity, obj, None)
    return nodes


def _node(identity: str, obj: Any, parent: Optional[str]) -> Node:
    path = _str(getattr(obj, "path", None))
    name = _str(getattr(obj, "name", None))
    source_tree = _str(getattr(obj, "sourceTree", None)) or PathKind.GROUP.value
    if _isa(obj) in _GROUP_ISAS:
        children = tuple(_ids(getattr(obj, "children", None)))
        return Group(id=identity, path=path, source_tree=source_tree, parent=parent, name=name, children=children)
    return FileReference(id=identity, path=path, source_tree=source_tree, parent=parent, name=name)


def _target(objects: Any, obj: Any) -> Target:
    phases: List[BuildPhase] = []
    for phase_object in (_get(objects, key) for key in _ids(getattr(obj, "buildPhases", None))):
        if phase_object is None:
            continue
        kind = _PHASE_KINDS.get(_isa(phase_object))
        if kind is None:
            logger.debug("Skipping build phase of type %s", _isa(phase_object))
            continue
        files = tuple(
            BuildFile(id=key, file_ref=_build_file_ref(objects, key))
            for key in _ids(getattr(phase_object, "files", None))
        )
        phases.append(BuildPhase(kind=kind, files=files))

    dependencies: List[str] = []
    for dependency in (_get(objects, key) for key in _ids(getattr(obj, "dependencies", None))):
        name = _dependency_name(objects, dependency)
        if name:
            dependencies.append(name)

    return Target(
        name=_str(getattr(obj, "name", None)) or _object_id(obj) or "",
        product_type=_str(getattr(obj, "productType", None)),
        build_phases=tuple(phases),
        dependencies=tuple(dependencies),
        configurations=_configurations(objects, getattr(obj, "buildConfigurationList", None)),
    )


def _build_file_ref(objects: Any, key: str) -> Optional[str]:
    build_file = _get(objects, key)
    if build_file is None:
        return None
    return _str(getattr(build_file, "fileRef", None))


def _dependency_name(objects: Any, dependency: Any) -> Optional[str]:
    if dependency is None:
        return None
    target = _get(objects, _str(getattr(dependency, "target", None)))
    if target is not None:
        return _str(getattr(target, "name", None))
    return _str(getattr(dependency, "name", None))


def _configurations(objects: Any, list_id: Any) -> Tuple[BuildConfiguration, ...]:
    configuration_list = _get(objects, _str(list_id))
    if configuration_list is None:
        return ()
    configurations: List[BuildConfiguration] = []
    for obj in (_get(objects, key) for key in _ids(getattr(configuration_list, "buildConfigurations", None))):
        if obj is None:
            continue
        configurations.append(
            BuildConfiguration(
                name=_str(getattr(obj, "name", None)) or "",
                settings=_settings(getattr(obj, "buildSettings", None)),
            )
        )
    return tuple(configurations)


def _settings(obj: Any) -> Dict[str, object]:
    if obj is None:
        return {}
    settings: Dict[str, object] = {}
    for key, value in vars(obj).items():
        if key.startswith("_") or key == "isa":
            continue
        if isinstance(value, (list, tuple)):
            settings[key] = [str(item) for item in value]
        else:
            settings[key] = str(value)
    return settings


def _get(objects: Any, key: Optional[str]) -> Any:
    if not key:
        return None
    try:
        return objects[key]
    except KeyError:
        return None


def _section(objects: Any, name: str) -> List[Any]:
    getter = getattr(objects, "get_objects_in_section", None)
    if getter is not None:
        return list(getter(name))
    return [obj for obj in objects.values() if _isa(obj) == name]


def _object_id(obj: Any) -> Optional[str]:
    get_id = getattr(obj, "get_id", None)
    if callable(get_id):
        return _str(get_id())
    return _str(getattr(obj, "id", None))


def _ids(value: Any) -> List[str]:
    if not value:
        return []
    return [str(item) for item in value]


def _isa(obj: Any) -> str:
    return _str(getattr(obj, "isa", None)) or ""


def _str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value)
    return text or None


__all__ = ["load_project", "project_from_xcodeproj"]
