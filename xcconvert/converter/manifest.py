"""Package manifest generation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence, Tuple

from jinja2 import Environment

from ..errors import FailedToCreatePackageManifest, UnresolvedDependency
from .templating import create_environment

EXECUTABLE_PRODUCT_TYPES = frozenset(
    {
        "com.apple.product-type.application",
        "com.apple.product-type.tool",
    }
)


@dataclass(frozen=True)
class ManifestTarget:
    """What the manifest needs to know about one converted target."""

    name: str
    dependencies: Tuple[str, ...]
    path: str
    product_type: str | None = None

    @property
    def declaration(self) -> str:
        if self.product_type in EXECUTABLE_PRODUCT_TYPES:
            return "executableTarget"
        return "target"


class ManifestGenerator:
    """Renders ``Package.swift`` for the converted targets."""

    TEMPLATE = "Package.swift.j2"

    def __init__(
        self,
        *,
        tools_version: str = "5.5",
        file_name: str = "Package.swift",
        env: Environment | None = None,
    ) -> None:
        self.tools_version = tools_version
        self.file_name = file_name
        self._env = env or create_environment()

    def render(self, package_name: str, targets: Sequence[ManifestTarget]) -> str:
        self.check_dependencies(targets)
        template = self._env.get_template(self.TEMPLATE)
        return template.render(
            tools_version=self.tools_version,
            package_name=package_name,
            targets=list(targets),
        )

    def write(self, package_root: Path, package_name: str, targets: Sequence[ManifestTarget]) -> Path:
        """Render and write the manifest; nothing is written if rendering fails."""
        text = self.render(package_name, targets)
        path = package_root / self.file_name
        try:
            path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise FailedToCreatePackageManifest(path, exc) from exc
        return path

    @staticmethod
    def check_dependencies(targets: Sequence[ManifestTarget]) -> None:
        known = {target.name for target in targets}
        for target in targets:
            for dependency in target.dependencies:
                if dependency not in known:
                    raise UnresolvedDependency(target.name, dependency)


__all__ = ["EXECUTABLE_PRODUCT_TYPES", "ManifestGenerator", "ManifestTarget"]
