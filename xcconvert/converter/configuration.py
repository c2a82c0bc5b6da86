"""Configuration file emission (``Bundler.toml``)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Sequence

from jinja2 import Environment

from ..errors import FailedToCreateConfigurationFile
from ..models import BuildConfiguration, Target
from .templating import create_environment

APPLICATION_PRODUCT_TYPE = "com.apple.product-type.application"
FORMAT_VERSION = 2


@dataclass(frozen=True)
class AppEntry:
    name: str
    product: str
    version: str
    identifier: str | None = None


def app_entries(targets: Iterable[Target]) -> List[AppEntry]:
    """Describe each application target with its version and bundle identifier."""
    entries: List[AppEntry] = []
    for target in targets:
        if target.product_type != APPLICATION_PRODUCT_TYPE:
            continue
        version = target.setting("MARKETING_VERSION")
        identifier = target.setting("PRODUCT_BUNDLE_IDENTIFIER")
        entries.append(
            AppEntry(
                name=target.name,
                product=target.name,
                version=str(version) if version is not None else "0.1.0",
                identifier=str(identifier) if identifier is not None else None,
            )
        )
    return entries


class ConfigurationEmitter:
    """Transcribes build settings into one section per configuration.

    Values are written as found, in declaration order; nothing is validated.
    """

    TEMPLATE = "Bundler.toml.j2"

    def __init__(self, *, file_name: str = "Bundler.toml", env: Environment | None = None) -> None:
        self.file_name = file_name
        self._env = env or create_environment()

    def render(self, configurations: Sequence[BuildConfiguration], apps: Sequence[AppEntry] = ()) -> str:
        template = self._env.get_template(self.TEMPLATE)
        return template.render(
            format_version=FORMAT_VERSION,
            apps=list(apps),
            configurations=list(configurations),
        )

    def write(
        self,
        package_root: Path,
        configurations: Sequence[BuildConfiguration],
        apps: Sequence[AppEntry] = (),
    ) -> Path:
        path = package_root / self.file_name
        text = self.render(configurations, apps)
        try:
            path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise FailedToCreateConfigurationFile(path, exc) from exc
        return path


__all__ = ["AppEntry", "ConfigurationEmitter", "app_entries"]
