"""
Shared fixtures for git-tc tests
"""
import random
import shutil
import subprocess
from pathlib import Path

import pytest


class FixedRandom(random.Random):
    """Random source that always returns the same offset and records the range asked for"""

    def __init__(self, value: int):
        super().__init__(0)
        self.value = value
        self.calls = []

    def randint(self, a, b):
        self.calls.append((a, b))
        return self.value


@pytest.fixture
def fixed_random():
    return FixedRandom


@pytest.fixture
def config_dir(tmp_path, monkeypatch) -> Path:
    """Point the config store at a temporary directory"""
    path = tmp_path / "config"
    monkeypatch.setenv("GIT_TC_CONFIG_DIR", str(path))
    return path


def _git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", "-C", str(repo), *args],
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        check=True,
    )
    return result.stdout.strip()


@pytest.fixture
def git():
    return _git


@pytest.fixture
def git_repo(tmp_path, monkeypatch) -> Path:
    """Empty git repository with a local identity configured"""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    for var in ("GIT_AUTHOR_DATE", "GIT_COMMITTER_DATE", "GIT_DIR", "GIT_WORK_TREE"):
        monkeypatch.delenv(var, raising=False)

    repo = tmp_path / "repo"
    repo.mkdir()
    _git(repo, "init", "-q")
    _git(repo, "config", "user.name", "Test User")
    _git(repo, "config", "user.email", "test@example.com")
    _git(repo, "config", "commit.gpgsign", "false")
    return repo
