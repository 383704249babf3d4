# touchfish/repo.py
"""
Git access.

Reads the timestamp of the history tip and runs `git commit` with
author and committer dates injected through the environment.
Handles Git Bash ↔ Windows path normalisation.
"""

from datetime import datetime
from subprocess import run, PIPE, CalledProcessError
from typing import Dict, List, Optional, Sequence
from pathlib import Path
import os


class GitRepositoryError(RuntimeError):
    pass


class CommitError(RuntimeError):
    pass


def _normalise_repo_path(repo_path: Path) -> Path:
    """
    Convert Git Bash paths (/c/Users/...) to native Windows paths (C:\\Users\\...).
    No-op on non-Windows systems.
    """
    if os.name != "nt":
        return repo_path

    p = str(repo_path)

    if p.startswith("/") and len(p) >= 3 and p[2] == "/":
        drive = p[1]
        if drive.isalpha():
            return Path(f"{drive.upper()}:/{p[3:]}")

    return Path(p)


def _run_git_command(repo_path: Path, args: List[str]) -> str:
    repo_path = _normalise_repo_path(repo_path)

    try:
        result = run(
            ["git", "-C", str(repo_path)] + args,
            stdout=PIPE,
            stderr=PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=True,
        )
        return result.stdout.strip()
    except CalledProcessError as e:
        stderr = (e.stderr or "").strip()
        raise GitRepositoryError(stderr if stderr else "git command failed") from e
    except FileNotFoundError as e:
        raise GitRepositoryError("git executable not found") from e


def format_git_date(dt: datetime) -> str:
    """
    ISO 8601 with offset and whole seconds, e.g. 2024-01-02T09:15:00+08:00.
    Git accepts this for GIT_AUTHOR_DATE / GIT_COMMITTER_DATE.
    """
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt.replace(microsecond=0).isoformat()


def read_commit_timestamp(repo_path: Path, rev: str = "HEAD") -> datetime:
    """
    Committer timestamp of `rev`.

    Raises GitRepositoryError when the revision cannot be resolved.
    """
    out = _run_git_command(repo_path, ["log", "-1", "--format=%cI", rev, "--"])

    if not out:
        raise GitRepositoryError(f"No commit found for {rev}")

    try:
        return datetime.fromisoformat(out)
    except ValueError as e:
        raise GitRepositoryError(f"Invalid timestamp format in git log: {out!r}") from e


def last_commit_timestamp(repo_path: Path) -> Optional[datetime]:
    """
    Timestamp of the history tip, or None.

    A fresh repository has no history, so a failed query is not an error here.
    """
    try:
        return read_commit_timestamp(repo_path)
    except GitRepositoryError:
        return None


def build_commit_command(extra_args: Sequence[str], amend: bool = False) -> List[str]:
    cmd = ["git", "commit"]
    if amend:
        cmd.extend(["--amend", "--no-edit", "--reset-author"])
    cmd.extend(extra_args)
    return cmd


def run_commit(
    repo_path: Path,
    timestamp: datetime,
    extra_args: Sequence[str],
    *,
    amend: bool = False,
) -> None:
    """
    Run `git commit` in repo_path with both dates set to timestamp.

    stdin/stdout/stderr are inherited so git can open the editor and
    print its own summary.
    """
    formatted = format_git_date(timestamp)
    cmd = build_commit_command(extra_args, amend=amend)

    env: Dict[str, str] = dict(os.environ)
    env["GIT_AUTHOR_DATE"] = formatted
    env["GIT_COMMITTER_DATE"] = formatted

    try:
        completed = run(
            cmd,
            cwd=str(_normalise_repo_path(repo_path)),
            env=env,
            check=False,
        )
    except FileNotFoundError as e:
        raise CommitError("git executable not found") from e

    action = "git commit --amend" if amend else "git commit"
    if completed.returncode != 0:
        raise CommitError(f"{action} failed with exit code {completed.returncode}")
