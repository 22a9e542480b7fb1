"""``pydeduce progress`` subcommand: show or reset stored progress."""

from __future__ import annotations

import argparse
import logging

from pydeduce.cli.exitcodes import EXIT_ERROR, EXIT_SUCCESS
from pydeduce.cli.output import emit_error, emit_json, progress_response
from pydeduce.store import JsonFileStore

logger = logging.getLogger(__name__)


def run_progress(args: argparse.Namespace) -> int:
    """Execute the ``progress`` subcommand."""
    try:
        store = JsonFileStore(args.store)
    except (OSError, ValueError) as e:
        emit_error(str(e), json_mode=args.json)
        return EXIT_ERROR

    if args.reset:
        store.clear()
        logger.info("Reset progress in %s", args.store)

    entries = store.items()
    if args.json:
        emit_json(progress_response(entries, args.store, args.reset))
        return EXIT_SUCCESS

    if args.reset:
        print(f"Progress in {args.store} reset.")
        return EXIT_SUCCESS
    if not entries:
        print("No progress recorded.")
        return EXIT_SUCCESS
    for key, value in sorted(entries.items()):
        if key.startswith("proof "):
            print(f"{key}:")
            for line in value.splitlines():
                print(f"    {line}")
        else:
            print(f"{key}: {value}")
    return EXIT_SUCCESS
