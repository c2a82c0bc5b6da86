"""Sequencing of a full project conversion."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence

from ..config import ConvertConfig
from ..errors import (
    ConversionError,
    DirectoryAlreadyExists,
    FailedToCreatePackageManifest,
    FailedToEnumerateSources,
)
from ..logging import get_logger
from ..models import Project, Target
from .configuration import ConfigurationEmitter, app_entries
from .manifest import ManifestGenerator, ManifestTarget
from .materializer import FileMaterializer, PlannedFile, TargetOutput, target_directory
from .paths import PathResolver
from .sources import enumerate_sources
from .templating import create_environment


class ConversionState(Enum):
    NOT_STARTED = "not_started"
    LOADING_PROJECT = "loading_project"
    CONVERTING_TARGETS = "converting_targets"
    GENERATING_ARTIFACTS = "generating_artifacts"
    DONE = "done"
    FAILED = "failed"


@dataclass
class ConversionReport:
    """Outcome of a conversion run, returned for both success and failure."""

    package_root: Path
    state: ConversionState = ConversionState.NOT_STARTED
    targets: List[TargetOutput] = field(default_factory=list)
    manifest_path: Optional[Path] = None
    configuration_path: Optional[Path] = None
    error: Optional[ConversionError] = None
    failed_target: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.state is ConversionState.DONE

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error


@dataclass(frozen=True)
class _TargetPlan:
    target: Target
    files: List[PlannedFile]


class Converter:
    """Converts a loaded project into a package directory, all or nothing.

    Every target is enumerated and resolved before the first write, so data
    errors in any target leave the filesystem untouched. Targets are then
    materialized in declaration order; the first failure ends the run.
    """

    def __init__(
        self,
        config: ConvertConfig | None = None,
        *,
        materializer: FileMaterializer | None = None,
        manifest_generator: ManifestGenerator | None = None,
        configuration_emitter: ConfigurationEmitter | None = None,
    ) -> None:
        self.config = config or ConvertConfig()
        env = create_environment(self.config.templates_dir)
        self.materializer = materializer or FileMaterializer()
        self.manifest_generator = manifest_generator or ManifestGenerator(
            tools_version=self.config.tools_version,
            file_name=self.config.manifest_file,
            env=env,
        )
        self.configuration_emitter = configuration_emitter or ConfigurationEmitter(
            file_name=self.config.configuration_file,
            env=env,
        )
        self.logger = get_logger("converter")

    def convert(self, project: Project, package_root: Path | str) -> ConversionReport:
        root = Path(package_root).expanduser()
        report = ConversionReport(package_root=root)

        report.state = ConversionState.LOADING_PROJECT
        self.logger.info("Converting %s into %s", project.name, root)
        if root.exists():
            return self._fail(report, DirectoryAlreadyExists(root))

        resolver = PathResolver(project.root, self.config.build_root)
        report.state = ConversionState.CONVERTING_TARGETS
        plans: List[_TargetPlan] = []
        for target in project.targets:
            try:
                plans.append(self._plan_target(project, target, resolver, root))
            except ConversionError as exc:
                return self._fail(report, exc, target=target.name)

        for plan in plans:
            self.logger.debug("Materializing %d files for target %s", len(plan.files), plan.target.name)
            try:
                output = self.materializer.materialize(plan.target.name, plan.files, root)
            except ConversionError as exc:
                return self._fail(report, exc, target=plan.target.name)
            report.targets.append(output)

        report.state = ConversionState.GENERATING_ARTIFACTS
        try:
            self._generate_artifacts(project, root, report)
        except ConversionError as exc:
            return self._fail(report, exc)

        report.state = ConversionState.DONE
        self.logger.info("Converted %d targets into %s", len(report.targets), root)
        return report

    def _plan_target(self, project: Project, target: Target, resolver: PathResolver, root: Path) -> _TargetPlan:
        target_directory(target.name, root)
        files: List[PlannedFile] = []
        for entry in enumerate_sources(project, target, self.config.phases):
            try:
                location = resolver.locate(project, entry.file)
            except ConversionError:
                raise
            except (LookupError, ValueError) as exc:
                raise FailedToEnumerateSources(target.name, exc) from exc
            files.append(PlannedFile(source=location, relative=resolver.relative_destination(location)))
        return _TargetPlan(target=target, files=files)

    def _generate_artifacts(self, project: Project, root: Path, report: ConversionReport) -> None:
        manifest_targets = _manifest_targets(project.targets, root, report.targets)
        package_name = self.config.package_name or project.name
        # The manifest is validated before anything touches the package root.
        self.manifest_generator.check_dependencies(manifest_targets)
        try:
            root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FailedToCreatePackageManifest(root / self.manifest_generator.file_name, exc) from exc
        report.manifest_path = self.manifest_generator.write(root, package_name, manifest_targets)
        report.configuration_path = self.configuration_emitter.write(
            root,
            project.configurations,
            app_entries(project.targets),
        )

    def _fail(
        self,
        report: ConversionReport,
        error: ConversionError,
        *,
        target: str | None = None,
    ) -> ConversionReport:
        report.state = ConversionState.FAILED
        report.error = error
        report.failed_target = target
        self.logger.debug("Conversion failed%s: %s", f" in target {target}" if target else "", error)
        return report


def _manifest_targets(
    targets: Sequence[Target], root: Path, outputs: Sequence[TargetOutput]
) -> List[ManifestTarget]:
    directories = {output.name: output.directory for output in outputs}
    entries: List[ManifestTarget] = []
    for target in targets:
        directory = directories.get(target.name, root / target.name)
        entries.append(
            ManifestTarget(
                name=target.name,
                dependencies=tuple(target.dependencies),
                path=directory.relative_to(root).as_posix(),
                product_type=target.product_type,
            )
        )
    return entries


__all__ = ["ConversionReport", "ConversionState", "Converter"]
