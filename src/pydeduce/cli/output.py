"""Structured JSON output for the pydeduce CLI."""

from __future__ import annotations

import json
import logging
import sys

from pydeduce.laws import Law

logger = logging.getLogger(__name__)


def emit_json(data: dict) -> None:
    """Print compact single-line JSON to stdout."""
    print(json.dumps(data, separators=(",", ":")))


def law_entry(law: Law) -> dict:
    """Build the JSON entry for one law."""
    d: dict = {
        "name": law.name,
        "index": law.index,
        "unlocked": law.unlocked,
        "desc": law.string,
    }
    if law.special is not None:
        d["special"] = law.special
    if law.clone is not None:
        d["clone_index"] = law.clone.index
    return d


def laws_response(laws: list[Law], store_file: str | None) -> dict:
    """Build a laws response dict."""
    d: dict = {"laws": [law_entry(law) for law in laws]}
    if store_file is not None:
        d["store_file"] = store_file
    return d


def progress_response(entries: dict[str, str], store_file: str, reset: bool) -> dict:
    """Build a progress response dict."""
    return {
        "action": "reset" if reset else "show",
        "entries": dict(sorted(entries.items())),
        "store_file": store_file,
    }


def error_response(message: str) -> dict:
    """Build an error response dict."""
    return {"error": message}


def emit_error(message: str, *, json_mode: bool = False) -> None:
    """Print an error message to stderr, or as JSON to stdout."""
    if json_mode:
        emit_json(error_response(message))
    else:
        print(f"Error: {message}", file=sys.stderr)
