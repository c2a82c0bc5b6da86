"""Error taxonomy for project conversion."""

from __future__ import annotations

from pathlib import Path


class ConversionError(RuntimeError):
    """Base class for failures surfaced by the converter."""


class FailedToLoadProject(ConversionError):
    """Raised when the Xcode project cannot be loaded from disk."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        super().__init__(f"Failed to load xcodeproj from '{path}': {cause}")
        self.path = path
        self.cause = cause


class DirectoryAlreadyExists(ConversionError):
    """Raised when the package root already exists before conversion."""

    def __init__(self, directory: Path) -> None:
        super().__init__(f"Directory already exists at '{directory}'")
        self.directory = directory


class UnsupportedPathKind(ConversionError):
    """Raised for file references whose source tree cannot be resolved."""

    def __init__(self, kind: object) -> None:
        label = getattr(kind, "value", kind)
        super().__init__(f"Unsupported file path type '{label}'")
        self.kind = kind


class InvalidBuildFile(ConversionError):
    """Raised when a build phase entry does not point at a grouped file."""

    def __init__(self, target: str, build_file: str, reason: str = "missing file reference") -> None:
        super().__init__(
            f"Encountered invalid build file with uuid '{build_file}' in target '{target}' ({reason})"
        )
        self.target = target
        self.build_file = build_file
        self.reason = reason


class FailedToEnumerateSources(ConversionError):
    def __init__(self, target: str, cause: BaseException) -> None:
        super().__init__(f"Failed to enumerate sources for target '{target}': {cause}")
        self.target = target
        self.cause = cause


class TargetDirectoryCreationFailed(ConversionError):
    def __init__(self, target: str, directory: Path, cause: BaseException) -> None:
        super().__init__(f"Failed to create directory for target '{target}' at '{directory}': {cause}")
        self.target = target
        self.directory = directory
        self.cause = cause


class FileCopyFailed(ConversionError):
    def __init__(self, source: Path, destination: Path, cause: BaseException) -> None:
        super().__init__(f"Failed to copy file '{source}' to '{destination}': {cause}")
        self.source = source
        self.destination = destination
        self.cause = cause


class UnresolvedDependency(ConversionError):
    """Raised when a target depends on a name that is not a converted target."""

    def __init__(self, target: str, dependency: str) -> None:
        super().__init__(f"Target '{target}' depends on unknown target '{dependency}'")
        self.target = target
        self.dependency = dependency


class FailedToCreatePackageManifest(ConversionError):
    def __init__(self, path: Path, cause: BaseException) -> None:
        super().__init__(f"Failed to create package manifest at '{path}': {cause}")
        self.path = path
        self.cause = cause


class FailedToCreateConfigurationFile(ConversionError):
    def __init__(self, path: Path, cause: BaseException) -> None:
        super().__init__(f"Failed to create configuration file at '{path}': {cause}")
        self.path = path
        self.cause = cause


__all__ = [
    "ConversionError",
    "DirectoryAlreadyExists",
    "FailedToCreateConfigurationFile",
    "FailedToCreatePackageManifest",
    "FailedToEnumerateSources",
    "FailedToLoadProject",
    "FileCopyFailed",
    "InvalidBuildFile",
    "TargetDirectoryCreationFailed",
    "UnresolvedDependency",
    "UnsupportedPathKind",
]
