"""Configuration loading for xcconvert (.xcconvert.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from .models import PhaseKind

CONFIG_FILE_NAME = ".xcconvert.yml"
_DEFAULT_PHASES = (PhaseKind.SOURCES, PhaseKind.RESOURCES, PhaseKind.HEADERS)


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ConvertConfig:
    """Represents the settings defined in .xcconvert.yml."""

    package_name: Optional[str] = None
    tools_version: str = "5.5"
    manifest_file: str = "Package.swift"
    configuration_file: str = "Bundler.toml"
    build_root: Optional[Path] = None
    phases: Tuple[PhaseKind, ...] = field(default=_DEFAULT_PHASES)
    templates_dir: Optional[Path] = None


def load_config(config_path: Path) -> ConvertConfig:
    """Load configuration from disk, returning defaults when the file is absent."""
    config_file = _resolve_config_path(Path(config_path))
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ConvertConfig()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILE_NAME} must contain a mapping at the root")

    config = ConvertConfig()
    config.package_name = _as_str(data.get("package_name"))
    config.tools_version = _as_str(data.get("tools_version")) or config.tools_version
    config.manifest_file = _as_str(data.get("manifest_file")) or config.manifest_file
    config.configuration_file = _as_str(data.get("configuration_file")) or config.configuration_file

    build_root = _as_str(data.get("build_root"))
    if build_root:
        config.build_root = (root / build_root).resolve()
    templates_dir = _as_str(data.get("templates_dir"))
    if templates_dir:
        config.templates_dir = root / templates_dir

    phase_names = _as_str_list(data.get("phases"))
    if phase_names:
        config.phases = tuple(_as_phase(name) for name in phase_names)

    for name in (config.manifest_file, config.configuration_file):
        if Path(name).name != name:
            raise ConfigError(f"Generated file name '{name}' must not contain directories")

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.suffix == ".xcodeproj":
        return (config_path.parent / CONFIG_FILE_NAME).resolve()
    if config_path.is_dir():
        return (config_path / CONFIG_FILE_NAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    raise ConfigError(f"Expected a string, got {type(value).__name__}")


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value.strip()] if value.strip() else []
    if isinstance(value, list):
        return [str(item).strip() for item in value if str(item).strip()]
    raise ConfigError(f"Expected a list of strings, got {type(value).__name__}")


def _as_phase(name: str) -> PhaseKind:
    try:
        return PhaseKind(name.lower())
    except ValueError:
        choices = ", ".join(kind.value for kind in PhaseKind)
        raise ConfigError(f"Unknown build phase '{name}' (expected one of: {choices})") from None


__all__ = ["CONFIG_FILE_NAME", "ConfigError", "ConvertConfig", "load_config"]
