"""Shared test configuration and fixtures for gitps1_core tests.

Provides:
- An isolated git environment (no user or system config leaks in).
- A fresh repository on branch 'main' for integration tests.
"""
from __future__ import annotations

import os
from pathlib import Path

import pytest

from helpers import GitRepo

# Variables that would change what git or the prompt sees.
_LEAKY_VARIABLES = (
    "GIT_DIR",
    "GIT_WORK_TREE",
    "GIT_INDEX_FILE",
    "GIT_CEILING_DIRECTORIES",
    "GIT_PS1_SHOWUPSTREAM",
    "GIT_PS1_DESCRIBESTYLE",
    "GIT_SVN_ID",
)


@pytest.fixture
def git_env(tmp_path: Path) -> dict[str, str]:
    """Environment with an empty HOME and a fixed identity."""
    home = tmp_path / "home"
    home.mkdir()
    env = {key: value for key, value in os.environ.items() if key not in _LEAKY_VARIABLES}
    env.update({
        "HOME": str(home),
        "XDG_CONFIG_HOME": str(home / ".config"),
        "GIT_CONFIG_GLOBAL": str(home / ".gitconfig"),
        "GIT_CONFIG_NOSYSTEM": "1",
        "GIT_AUTHOR_NAME": "Test User",
        "GIT_AUTHOR_EMAIL": "test@example.com",
        "GIT_COMMITTER_NAME": "Test User",
        "GIT_COMMITTER_EMAIL": "test@example.com",
        "LC_ALL": "C",
    })
    return env


@pytest.fixture
def git_repo(tmp_path: Path, git_env: dict[str, str]) -> GitRepo:
    """Empty repository whose HEAD points at refs/heads/main."""
    path = tmp_path / "repo"
    path.mkdir()
    repo = GitRepo(path, git_env)
    repo.git("init", "-q")
    repo.git("symbolic-ref", "HEAD", "refs/heads/main")
    repo.git("config", "commit.gpgsign", "false")
    return repo


@pytest.fixture
def git_dir(tmp_path: Path) -> Path:
    """Bare metadata directory for marker-file tests."""
    path = tmp_path / "meta" / ".git"
    path.mkdir(parents=True)
    return path
