"""Staticroute CLI — run the server from a config file.

Entry point registered as ``staticroute`` in ``pyproject.toml``::

    [project.scripts]
    staticroute = "staticroute.cli:main"
"""

import argparse
import sys

from staticroute import __version__

LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ``staticroute`` command."""
    parser = argparse.ArgumentParser(
        prog="staticroute",
        description="Serve files over HTTP from a TOML route table.",
        epilog="Use `--` before CONFIG if the path starts with a dash.",
    )
    parser.add_argument("config", nargs="?", help="Path to the config file")
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s v{__version__}",
    )
    parser.add_argument(
        "--print-readme",
        action="store_true",
        help="Write this software's documentation (README.md) to stdout and exit",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="info",
        help="Minimum level of diagnostics written to stderr (default: info)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``staticroute`` command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.print_readme:
        from staticroute.cli._readme import print_readme

        print_readme()
        sys.exit(0)

    if args.config is None:
        parser.error("missing config argument")

    from staticroute.cli._run import run

    run(args)
