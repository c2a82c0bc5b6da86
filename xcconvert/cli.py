"""CLI entrypoints for xcconvert commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .converter import Converter
from .errors import ConversionError
from .loaders import load_project
from .logging import configure_logging, get_logger


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    kwargs["default"] = argparse.SUPPRESS if suppress_default else False
    parser.add_argument("-v", "--verbose", **kwargs)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xcconvert",
        description="Convert Xcode projects into Swift package layouts.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    convert_parser = subparsers.add_parser(
        "convert",
        help="Convert an .xcodeproj into a new package directory.",
    )
    _add_verbose_option(convert_parser, suppress_default=True)
    convert_parser.add_argument("project", help="Path to the .xcodeproj bundle.")
    convert_parser.add_argument("output", help="Package directory to create (must not exist).")
    convert_parser.add_argument(
        "--config",
        default=None,
        help="Path to .xcconvert.yml (defaults to the file next to the project).",
    )
    convert_parser.add_argument(
        "--package-name",
        default=None,
        help="Name of the generated package (defaults to the project name).",
    )
    convert_parser.add_argument(
        "--log-file",
        default=None,
        help="Also write debug logs to this file.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for xcconvert commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file) if getattr(args, "log_file", None) else None
    configure_logging(verbose=bool(args.verbose), log_file=log_file)
    logger = get_logger("cli")

    if args.command == "convert":
        project_path = Path(args.project).expanduser()
        try:
            config = load_config(Path(args.config) if args.config else project_path)
        except ConfigError as exc:
            parser.exit(1, f"Invalid configuration: {exc}\n")
        if args.package_name:
            config.package_name = args.package_name

        try:
            project = load_project(project_path)
        except ConversionError as exc:
            parser.exit(1, f"{exc}\n")

        report = Converter(config).convert(project, Path(args.output))
        if not report.ok:
            logger.debug("Conversion stopped in state %s", report.state.value)
            parser.exit(1, f"xcconvert convert failed: {report.error}\n")
        print(f"Package created at {_relativize(report.package_root)}")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
