"""Jinja2 environment shared by the artifact generators."""

from __future__ import annotations

import json
import re
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

_TEMPLATES_DIR = Path(__file__).with_name("templates")
_BARE_KEY = re.compile(r"^[A-Za-z0-9_-]+$")


def create_environment(templates_dir: Path | None = None) -> Environment:
    """Return an environment searching ``templates_dir`` before the bundled templates."""
    directories = []
    if templates_dir is not None:
        directories.append(str(templates_dir))
    directories.append(str(_TEMPLATES_DIR))
    env = Environment(
        loader=FileSystemLoader(directories),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    env.filters["swift_string"] = swift_string
    env.filters["toml_key"] = toml_key
    env.filters["toml_value"] = toml_value
    return env


def swift_string(value: object) -> str:
    text = str(value)
    escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n").replace("\t", "\\t")
    return f'"{escaped}"'


def toml_key(value: object) -> str:
    text = str(value)
    if _BARE_KEY.match(text):
        return text
    return json.dumps(text, ensure_ascii=False)


def toml_value(value: object) -> str:
    """Render a build-setting value as a TOML literal."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(toml_value(item) for item in value) + "]"
    return json.dumps(str(value), ensure_ascii=False)


__all__ = ["create_environment", "swift_string", "toml_key", "toml_value"]
