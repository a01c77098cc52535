"""CLI entrypoint for viewing package.xml manifests."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from . import __version__
from .components import build_rows
from .config import ConfigError, ViewerConfig, load_config
from .formatters import OutputError, write_output
from .logging import configure_logging, get_logger
from .manifest import ManifestError, load_manifest
from .models import OutputFormat, SortOrder

_logger = get_logger("cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pkgview",
        description=(
            "Salesforce package.xml viewer - displays metadata components in readable formats."
        ),
    )
    parser.add_argument("path", type=Path, help="Path to the package.xml file.")
    parser.add_argument(
        "-f",
        "--format",
        dest="output_format",
        type=OutputFormat,
        choices=list(OutputFormat),
        metavar="{" + ",".join(member.value for member in OutputFormat) + "}",
        default=None,
        help="Output format (default: table).",
    )
    parser.add_argument(
        "-s",
        "--sort",
        dest="sort_order",
        type=SortOrder,
        choices=list(SortOrder),
        metavar="{" + ",".join(member.value for member in SortOrder) + "}",
        default=None,
        help="Sort order (default: by-type).",
    )
    parser.add_argument(
        "--no-split-parent",
        dest="split_parent",
        action="store_false",
        default=None,
        help="Disable splitting Parent.Member format into separate columns.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a .pkgview.yml file or its directory (defaults to the current directory).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records to this file.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _resolve_settings(args: argparse.Namespace, config: ViewerConfig) -> ViewerConfig:
    """Overlay explicit command-line options on top of config defaults."""
    return ViewerConfig(
        output_format=args.output_format or config.output_format,
        sort_order=args.sort_order or config.sort_order,
        split_parent=config.split_parent if args.split_parent is None else args.split_parent,
        source=config.source,
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for pkgview."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    try:
        config = load_config(args.config if args.config is not None else Path.cwd())
    except ConfigError as exc:
        parser.exit(1, f"Error: invalid configuration: {exc}\n")
    if config.source is not None:
        _logger.debug("Using configuration from %s", config.source)
    settings = _resolve_settings(args, config)

    try:
        manifest = load_manifest(args.path)
    except ManifestError as exc:
        parser.exit(1, f"Error: Failed to parse {args.path}: {exc}\n")

    rows = build_rows(manifest, settings.sort_order, settings.split_parent)

    try:
        completed = write_output(
            rows,
            settings.output_format,
            sys.stdout,
            split_parent=settings.split_parent,
        )
    except OutputError as exc:
        parser.exit(1, f"Error writing output: {exc}\n")
    if not completed:
        _silence_stdout()


def _silence_stdout() -> None:
    # Point the stdout descriptor at devnull so the interpreter's final flush
    # does not raise a second BrokenPipeError on exit.
    try:
        fd = sys.stdout.fileno()
    except (AttributeError, OSError, ValueError):
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    try:
        os.dup2(devnull, fd)
    finally:
        os.close(devnull)


if __name__ == "__main__":
    main(sys.argv[1:])
