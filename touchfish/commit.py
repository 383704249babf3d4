# touchfish/commit.py
"""
Commit actions.

Responsibilities:
- Gather the window and the last commit timestamp
- Generate one timestamp and hand it to git

This module does NOT:
- parse command line arguments
- retry failed commits
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence
import random

from touchfish.config import load_window
from touchfish.engine import generate_timestamp
from touchfish.repo import format_git_date, last_commit_timestamp, run_commit


def create_commit(
    args: Sequence[str],
    *,
    repo_path: Path | None = None,
    config_path: Path | None = None,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> datetime:
    """
    Create a new commit with a randomized timestamp.
    """
    return _commit_with_random_time(
        args,
        amend=False,
        repo_path=repo_path,
        config_path=config_path,
        now=now,
        rng=rng,
    )


def amend_commit(
    args: Sequence[str],
    *,
    repo_path: Path | None = None,
    config_path: Path | None = None,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> datetime:
    """
    Amend HEAD with a randomized timestamp, keeping its message.

    Ordered against the current HEAD, so repeated amends can move the
    date forward by a day each time.
    """
    return _commit_with_random_time(
        args,
        amend=True,
        repo_path=repo_path,
        config_path=config_path,
        now=now,
        rng=rng,
    )


def _commit_with_random_time(
    args: Sequence[str],
    *,
    amend: bool,
    repo_path: Path | None,
    config_path: Path | None,
    now: Optional[datetime],
    rng: Optional[random.Random],
) -> datetime:
    repo = repo_path if repo_path is not None else Path.cwd()

    window = load_window(config_path)
    reference = last_commit_timestamp(repo)
    timestamp = generate_timestamp(window, reference, now=now, rng=rng)

    formatted = format_git_date(timestamp)
    if amend:
        print(f"Amending the last commit with random time {formatted}...")
    else:
        print(f"Running git commit with random time {formatted}...")

    run_commit(repo, timestamp, list(args), amend=amend)

    print("Amend succeeded." if amend else "git commit succeeded.")
    return timestamp
