"""Command-line host for a local pygeiger store.

Usage
-----
::

    pygeiger --db geiger.sqlite3 init --sender cosmos1...
    pygeiger measure --sender cosmos1...
    pygeiger radioactivity cosmos1...
    pygeiger leaderboard --json

``GEIGER_DB_PATH`` / ``GEIGER_ADDRESS_PREFIX`` are honoured when the
matching options are not given.
"""

from __future__ import annotations

import argparse
import contextlib
import dataclasses
import json
import logging
import sys
from collections.abc import Sequence

from pygeiger._constants import U64_MAX
from pygeiger.client import GeigerCounter
from pygeiger.config import GeigerConfig
from pygeiger.exceptions import GeigerError

DEFAULT_DB_PATH = "geiger.sqlite3"


def _epoch_seconds(value: str) -> int:
    seconds = int(value)
    if not 0 <= seconds <= U64_MAX:
        raise argparse.ArgumentTypeError(f"time must be between 0 and {U64_MAX}, got {seconds}")
    return seconds


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pygeiger", description="Daily radioactivity counter.")
    parser.add_argument("--db", help=f"SQLite database file (default: $GEIGER_DB_PATH or {DEFAULT_DB_PATH})")
    parser.add_argument("--prefix", help="Required bech32 prefix for queried addresses")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    init = sub.add_parser("init", help="Instantiate the store with an owner")
    init.add_argument("--sender", required=True, help="Owner identity")

    measure = sub.add_parser("measure", help="Take today's measurement")
    measure.add_argument("--sender", required=True, help="Caller identity")
    measure.add_argument("--time", type=_epoch_seconds, help="Block time in epoch seconds (default: now)")

    reset = sub.add_parser("reset", help="Zero all counters (owner only)")
    reset.add_argument("--sender", required=True, help="Caller identity")

    sub.add_parser("config", help="Show the stored config")

    radioactivity = sub.add_parser("radioactivity", help="Show one identity's counter")
    radioactivity.add_argument("address")

    leaderboard = sub.add_parser("leaderboard", help="Show all counters, highest first")
    leaderboard.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")

    sub.add_parser("migrate", help="Run the schema migration hook")
    return parser


def _run(counter: GeigerCounter, args: argparse.Namespace) -> None:
    command = args.command
    if command == "init":
        print(json.dumps(counter.instantiate(args.sender).as_dict()))
    elif command == "measure":
        print(json.dumps(counter.measure(args.sender, now=args.time).as_dict()))
    elif command == "reset":
        print(json.dumps(counter.reset(args.sender).as_dict()))
    elif command == "migrate":
        print(json.dumps(counter.migrate().as_dict()))
    elif command == "config":
        print(counter.get_config().model_dump_json())
    elif command == "radioactivity":
        print(counter.get_radioactivity(args.address))
    elif command == "leaderboard":
        board = counter.get_leaderboard()
        if args.json_mode:
            print(json.dumps(board))
        else:
            for rank, (identity, value) in enumerate(board, start=1):
                print(f"{rank:>3}. {identity}  {value}")


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    overrides: dict[str, object] = {}
    if args.db:
        overrides["db_path"] = args.db
    if args.prefix:
        overrides["address_prefix"] = args.prefix
    try:
        config = GeigerConfig.from_env(**overrides)
        if config.db_path is None:
            config = dataclasses.replace(config, db_path=DEFAULT_DB_PATH)
        with contextlib.closing(config.open_storage()) as storage:
            _run(GeigerCounter(storage, validator=config.identity_validator()), args)
    except GeigerError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
