# fuzzymatch/cli.py
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Dict, Optional

from . import config as CFG
from .config import SearchOptions
from .engine import Engine
from .errors import FuzzyMatchError, SearchCancelled, SearchTimeout
from .loader import load_mapping, load_records
from .models import Matches, MatchOutcome

log = logging.getLogger(__name__)


def add_engine_args(p: argparse.ArgumentParser) -> None:
    """Options shared by the CLI and the web UI for building an Engine."""
    p.add_argument("--records", required=True, help="Records file (.json or .jsonl)")
    p.add_argument("--synonyms", default=None, help="JSON object: word -> [synonyms]")
    p.add_argument("--usage", default=None, help="JSON object: word -> usage weight")
    p.add_argument("--options", default=None, help="JSON object of engine options")
    p.add_argument("--algorithm", nargs="+", default=None, help="One or more algorithm names")
    p.add_argument("--threshold", type=float, default=None)
    p.add_argument("--language", default=None)
    p.add_argument("--index", choices=["direct", "inverted"], default=CFG.INDEX_KIND)
    p.add_argument("--verbose", action="store_true")


def engine_from_args(args: argparse.Namespace, **overrides: Any) -> Engine:
    if args.verbose or CFG.VERBOSE:
        logging.basicConfig(level=logging.INFO)

    opts: Dict[str, Any] = load_mapping(args.options) if args.options else {}
    if args.algorithm:
        opts["algorithm"] = args.algorithm
    if args.threshold is not None:
        opts["threshold"] = args.threshold
    if args.language:
        opts["language"] = args.language
    opts.update(overrides)

    return Engine(
        load_records(args.records),
        synonyms=load_mapping(args.synonyms) if args.synonyms else None,
        usage=load_mapping(args.usage) if args.usage else None,
        options=SearchOptions.from_mapping(opts),
        index=args.index,
    )


def _print_outcome(outcome: MatchOutcome, as_json: bool) -> None:
    if as_json:
        print(json.dumps(outcome.to_dict(), ensure_ascii=False, indent=2))
        return
    if isinstance(outcome, Matches):
        if not outcome:
            print("(no matches)"); return
        print("#  Id        Name                      Tags")
        rows = outcome.records
    else:
        print(outcome.message)
        rows = outcome.suggestions
    for i, r in enumerate(rows, 1):
        print(f"{i:<2} {str(r.id):<9} {r.name:<25} {', '.join(r.tags)}")


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Fuzzy record search CLI")
    add_engine_args(p)
    p.add_argument("--q", default=None, help="Single query to run once")
    p.add_argument("--repl", action="store_true", help="Interactive loop after init")
    p.add_argument("--json", action="store_true", help="Emit JSON outcome")
    args = p.parse_args(argv)

    try:
        # one query at a time from a terminal: no need to wait for a debounce window
        eng = engine_from_args(args, debounce_delay=0)
    except (OSError, ValueError, FuzzyMatchError) as exc:
        log.error("Could not build engine: %s", exc)
        print(f"error: {exc}", file=sys.stderr)
        return 2

    def run_query(q: str) -> None:
        try:
            outcome = asyncio.run(eng.search(q))
        except (SearchTimeout, SearchCancelled) as exc:
            print(f"error: {exc}", file=sys.stderr)
            return
        _print_outcome(outcome, args.json)

    try:
        if args.q:
            run_query(args.q)

        if args.repl:
            print("Type a query (empty line to exit).")
            while True:
                try:
                    q = input("> ").strip()
                except (EOFError, KeyboardInterrupt):
                    break
                if not q:
                    break
                run_query(q)
        return 0
    finally:
        eng.shutdown()
