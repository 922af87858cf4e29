#!/usr/bin/env python3
"""
Main CLI entry point with argument parser and command dispatch.
"""

from __future__ import annotations

import argparse

from linkprune.__version__ import __version__
from linkprune.interfaces.cli.commands.deeplinks_cli import cmd_deeplinks
from linkprune.interfaces.cli.commands.treeshake_cli import cmd_treeshake
from linkprune.interfaces.cli.utils import configure_logging


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--root", default=".", help="project root (default: current directory)")
    common.add_argument("--config", help="YAML config file (overrides linkprune.yaml)")
    common.add_argument("-v", "--verbose", action="store_true", help="debug logging")

    p = argparse.ArgumentParser(
        prog="linkprune",
        description="linkprune - deep link registry generation and tree shaking for Ionic builds",
        epilog="Examples:\n"
        "  linkprune deeplinks                        # Print discovered routes and registry\n"
        "  linkprune deeplinks --aot --write          # Patch the compiled root factory\n"
        "  linkprune treeshake stats.json             # Report unused components\n"
        "  linkprune treeshake stats.json --write     # Rewrite the framework barrel",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    sub = p.add_subparsers(
        dest="cmd",
        title="commands",
        description="Available commands (use 'linkprune <command> --help' for command-specific help)",
    )

    # deeplinks: Build the route registry
    s = sub.add_parser("deeplinks", parents=[common], help="Build the deep link registry from @IonicPage classes")
    s.add_argument("--aot", action="store_true", help="compiled (AOT) mode: target the root module factory")
    s.add_argument("--write", action="store_true", help="write the registry into the registration site")
    s.set_defaults(func=cmd_deeplinks)

    # treeshake: Prune unused components
    s = sub.add_parser("treeshake", parents=[common], help="Find and purge unused framework components")
    s.add_argument("graph", help="dependency graph JSON ({module: [importers]} or webpack stats)")
    s.add_argument("--write", action="store_true", help="rewrite the framework barrel and root factory")
    s.set_defaults(func=cmd_treeshake)

    return p


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # If no command provided, show help
    if args.cmd is None:
        parser.print_help()
        return 0

    configure_logging(args.verbose)
    result: int = args.func(args)
    return result


if __name__ == "__main__":
    raise SystemExit(main())
