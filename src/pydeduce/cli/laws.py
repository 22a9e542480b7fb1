"""``pydeduce laws`` subcommand: list the built-in law catalog."""

from __future__ import annotations

import argparse
import logging

from pydeduce.catalog import build_catalog
from pydeduce.cli.exitcodes import EXIT_ERROR, EXIT_SUCCESS
from pydeduce.cli.output import emit_error, emit_json, laws_response
from pydeduce.laws import EngineState
from pydeduce.store import JsonFileStore

logger = logging.getLogger(__name__)


def run_laws(args: argparse.Namespace) -> int:
    """Execute the ``laws`` subcommand."""
    store = None
    if args.store is not None:
        try:
            store = JsonFileStore(args.store)
        except (OSError, ValueError) as e:
            emit_error(str(e), json_mode=args.json)
            return EXIT_ERROR

    state = EngineState(store=store)
    catalog = build_catalog(state)
    laws = list(catalog)

    if args.json:
        emit_json(laws_response(laws, args.store))
        return EXIT_SUCCESS

    for law in laws:
        mark = "+" if law.unlocked else " "
        print(f"{mark} {law.index:3d}  {law.desc}")
    unlocked = sum(1 for law in laws if law.unlocked)
    print(f"\n{len(laws)} laws, {unlocked} unlocked")
    logger.info("Listed %d laws", len(laws))
    return EXIT_SUCCESS
