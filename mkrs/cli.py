"""
cli.py

Responsibility: CLI entrypoint for cargo-mkrs.

High-level flow:
1) Load configuration (header text, default visibility)
2) Run the module pipeline for the target (`modules.make_module`)
3) Report errors on stderr and map them to an exit code

Works both as `cargo-mkrs foo::bar` and as the cargo subcommand
`cargo mkrs foo::bar`.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Mapping

from mkrs import MkrsError, __version__
from mkrs.config import load_config
from mkrs.modules import make_module

logger = logging.getLogger("mkrs.cli")

SUBCOMMAND = "mkrs"


def _strip_cargo_subcommand(argv: list[str], env: Mapping[str, str]) -> list[str]:
    # cargo runs `cargo-mkrs mkrs <args>` and exports CARGO.
    if argv and argv[0] == SUBCOMMAND and "CARGO" in env:
        return argv[1:]
    return argv


def _configure_logging(verbose: int, quiet: bool) -> None:
    if quiet:
        level = logging.ERROR
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def run_cmd(args: argparse.Namespace) -> int:
    config = load_config(args.config)

    header = config.header if args.header is None else args.header
    public = config.public if args.public is None else bool(args.public)

    result = make_module(args.target, header=header, public=public)

    if result.parent is not None and result.declared:
        logger.info("Added %r to %s", result.name, result.parent)
    if result.populated:
        logger.info("Declared %s in %s", ", ".join(result.populated), result.path)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="cargo-mkrs",
        description="Create a Rust module file and declare it in its parent module",
    )
    p.add_argument("target", help="Module path: foo::bar::baz or foo/bar/baz")
    p.add_argument("--public", dest="public", action="store_true", default=None, help="Make module public (pub mod)")
    p.add_argument("--private", dest="public", action="store_false", default=None, help="Make module private (mod)")
    p.add_argument("--config", default=None, help="Config file (or set env MKRS_CONFIG)")
    p.add_argument("--header", default=None, help="Header text for the new file (overrides config)")
    p.add_argument("-v", "--verbose", action="count", default=0, help="Log progress (-vv for debug output)")
    p.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.set_defaults(func=run_cmd)
    return p


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    argv = _strip_cargo_subcommand(list(argv), os.environ)

    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose, args.quiet)

    try:
        return int(args.func(args))
    except (MkrsError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
