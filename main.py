#!/usr/bin/env python3
"""git-tc CLI.

Run from a checkout without installing: python main.py show
"""

from touchfish.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
