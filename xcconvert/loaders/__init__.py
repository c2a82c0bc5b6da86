"""Loaders that turn on-disk project formats into a project graph."""

from .xcodeproj import load_project, project_from_xcodeproj

__all__ = ["load_project", "project_from_xcodeproj"]
