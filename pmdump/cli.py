"""Command line entry point."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

import yaml

from pmdump.config import read_config

DEFAULT_CONFIG = "pmdump.yaml"


def list_configs(config_file: str, target_file: str | None = None) -> None:
    """Print the settings read from ``config_file``.

    ``target_file`` overrides the archive path from the settings. Raises
    OSError, ValueError or yaml.YAMLError if the settings cannot be read.
    """
    settings = read_config(config_file)
    target = target_file if target_file is not None else settings.target_file
    print(f"Configuration file: {config_file}")
    print(f"Database URL: {settings.database_url}")
    print(f"Media Root: {settings.media_root}")
    print(f"Target File: {target}")
    print(f"App Version: {settings.app_version}")


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pmdump", description="Export and import document management data."
    )
    parser.add_argument(
        "-c", "--config", default=DEFAULT_CONFIG, help="path to the YAML settings file"
    )
    parser.add_argument(
        "-f", "--file", dest="target", default=None, help="path of the tar.gz archive"
    )
    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("list", help="show the settings in use")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line; return the exit status."""
    args = _parser().parse_args(argv)
    try:
        if args.command == "list":
            list_configs(args.config, args.target)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())