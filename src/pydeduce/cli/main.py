"""CLI entry point for pydeduce.

Usage::

    pydeduce laws [--store progress.json] [--json]
    pydeduce progress --store progress.json [--reset] [--json]
"""

from __future__ import annotations

import argparse
import logging
import sys

from pydeduce._version import __version__


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the ``pydeduce`` CLI."""
    parser = argparse.ArgumentParser(
        prog="pydeduce",
        description="pydeduce: natural-deduction law matching",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Log progress to stderr (-vv for debug output)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- laws ---
    laws_parser = subparsers.add_parser("laws", help="List the built-in laws")
    laws_parser.add_argument("-s", "--store", default=None,
                             help="Path to a JSON progress file (restores unlocked laws)")
    laws_parser.add_argument("--json", action="store_true", help="Emit JSON")

    # --- progress ---
    progress_parser = subparsers.add_parser("progress", help="Show or reset stored progress")
    progress_parser.add_argument("-s", "--store", required=True, help="Path to a JSON progress file")
    progress_parser.add_argument("--reset", action="store_true", help="Forget all stored progress")
    progress_parser.add_argument("--json", action="store_true", help="Emit JSON")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG if args.verbose > 1 else logging.INFO,
            format="%(levelname)s %(name)s: %(message)s",
        )

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "laws":
        from pydeduce.cli.laws import run_laws
        return run_laws(args)
    elif args.command == "progress":
        from pydeduce.cli.progress import run_progress
        return run_progress(args)

    return 0


if __name__ == "__main__":
    sys.exit(main())
