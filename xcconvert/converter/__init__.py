"""Conversion of a loaded project graph into a package directory."""

from .configuration import AppEntry, ConfigurationEmitter, app_entries
from .manifest import ManifestGenerator, ManifestTarget
from .materializer import FileMaterializer, PlannedFile, TargetOutput
from .orchestrator import ConversionReport, ConversionState, Converter
from .paths import PathResolver
from .sources import DEFAULT_PHASES, SourceEntry, enumerate_sources

__all__ = [
    "AppEntry",
    "ConfigurationEmitter",
    "ConversionReport",
    "ConversionState",
    "Converter",
    "DEFAULT_PHASES",
    "FileMaterializer",
    "ManifestGenerator",
    "ManifestTarget",
    "PathResolver",
    "PlannedFile",
    "SourceEntry",
    "TargetOutput",
    "app_entries",
    "enumerate_sources",
]
