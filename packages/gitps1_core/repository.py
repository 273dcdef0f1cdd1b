"""Repository location.

Finds the git metadata directory for the current directory, an explicit
path, or an environment override. Failing to find one is not an error;
it means the prompt is outside any repository.

Execution Context:
    Library module - first stage of the prompt pipeline

Dependencies:
    - gitps1_core.runner: git rev-parse fallback

Metadata:
    Version: 0.1.0
    Author: gitps1 Team
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from gitps1_core.runner import GitRunner

logger = logging.getLogger(__name__)


# ---- Constants ----------------------------------------------------------------------------------------------


GIT_DIR_NAME = ".git"
GIT_DIR_ENV = "GIT_DIR"


# ---- Module Functions ---------------------------------------------------------------------------------------


def locate_git_dir(
        path: Path | str | None = None,
        *,
        runner: GitRunner,
        environ: Mapping[str, str] | None = None,
        cached_dir: Path | str | None = None,
) -> Path | None:
    """Find the git metadata directory.

    With an explicit path, returns its nested '.git' directory if there is
    one, otherwise the path itself. Without one, the first hit among the
    cached directory, the GIT_DIR environment variable, a '.git' directory
    in the runner's working directory, and 'git rev-parse --git-dir' wins.

    Args:
        path: Explicit repository or metadata directory.
        runner: Runner whose working directory is searched.
        environ: Environment providing GIT_DIR.
        cached_dir: Directory already resolved by the caller.

    Returns:
        Path to the metadata directory, or None outside a repository.
    """
    if path is not None:
        explicit = Path(path)
        nested = explicit / GIT_DIR_NAME
        return nested if nested.is_dir() else explicit

    if cached_dir:
        return Path(cached_dir)

    environ = environ if environ is not None else {}
    env_dir = environ.get(GIT_DIR_ENV)
    if env_dir:
        env_path = _resolve(runner, env_dir)
        if not env_path.is_dir():
            logger.debug(f"{GIT_DIR_ENV}={env_dir} is not a directory")
            return None
        return env_path

    local = runner.directory / GIT_DIR_NAME
    if local.is_dir():
        return local

    output = runner.output(["rev-parse", "--git-dir"])
    if not output:
        return None
    return _resolve(runner, output)


def _resolve(
        runner: GitRunner,
        value: str,
) -> Path:
    """Interpret a possibly relative path against the runner's directory."""
    candidate = Path(value)
    if candidate.is_absolute():
        return candidate
    return runner.directory / candidate
