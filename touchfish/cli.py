# touchfish/cli.py
"""git-tc CLI.

Commit with a random timestamp inside a configured daily window.
"""

from __future__ import annotations

import argparse
import sys

from touchfish.commit import amend_commit, create_commit
from touchfish.config import ConfigError, load_window, store_window
from touchfish.engine import EngineError
from touchfish.repo import CommitError
from touchfish.validation import ValidationError, format_window, parse_window


USAGE = """Usage:
git-tc set <start> <end>
git-tc show
git-tc amend [git commit args...]
git-tc [git commit args...]
"""


def _build_set_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git-tc set",
        description="Set the daily window used for random commit times",
    )

    parser.add_argument("start", help="Window start, HH:MM (24-hour)")
    parser.add_argument("end", help="Window end, HH:MM (24-hour), later than start")

    return parser


def _build_show_parser() -> argparse.ArgumentParser:
    return argparse.ArgumentParser(
        prog="git-tc show",
        description="Show the configured daily window",
    )


def _cmd_set(argv: list[str]) -> int:
    args = _build_set_parser().parse_args(argv)

    window = parse_window(args.start, args.end)
    store_window(window)

    print(f"Time window set to: {format_window(window)}")
    return 0


def _cmd_show(argv: list[str]) -> int:
    _build_show_parser().parse_args(argv)

    window = load_window()
    print(f"Current time window: {format_window(window)}")
    return 0


def main(argv: list[str] | None = None) -> int:
    cli = list(sys.argv[1:] if argv is None else argv)

    if not cli:
        print(USAGE)
        return 0

    command, rest = cli[0], cli[1:]

    try:
        if command == "set":
            return _cmd_set(rest)

        if command == "show":
            return _cmd_show(rest)

        if command == "amend":
            amend_commit(rest)
            return 0

        # Everything else goes straight to `git commit`, e.g. -m "message"
        create_commit(cli)
        return 0

    except (ConfigError, ValidationError, EngineError, CommitError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

