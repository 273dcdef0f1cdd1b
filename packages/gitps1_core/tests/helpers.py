"""Test helpers for gitps1_core tests.

Provides a scripted GitRunner replacement for unit tests and a small
wrapper around real temporary git repositories for integration tests.
"""
from __future__ import annotations

import shutil
import subprocess
from collections.abc import Mapping
from collections.abc import Sequence
from pathlib import Path

import pytest

from gitps1_core.runner import GitResult
from gitps1_core.runner import GitRunner

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


class FakeRunner(GitRunner):
    """GitRunner answering from a table of canned responses.

    Responses map an argument tuple to stdout (exit 0) or to a
    (returncode, stdout) pair. Anything else fails with exit 128.
    """

    def __init__(
            self,
            responses: Mapping[tuple[str, ...], str | tuple[int, str]] | None = None,
            cwd: Path | str | None = None,
    ) -> None:
        super().__init__(cwd=cwd)
        self.responses = dict(responses or {})
        self.calls: list[tuple[str, ...]] = []

    def run(
            self,
            args: Sequence[str],
    ) -> GitResult:
        argv = tuple(args)
        self.calls.append(argv)
        response = self.responses.get(argv)
        if response is None:
            return GitResult(argv, 128, stderr="fatal: not scripted")
        if isinstance(response, str):
            return GitResult(argv, 0, response)
        returncode, stdout = response
        return GitResult(argv, returncode, stdout)


class GitRepo:
    """A real git repository in a temporary directory."""

    def __init__(
            self,
            path: Path,
            env: dict[str, str],
    ) -> None:
        self.path = path
        self.env = env

    def git(
            self,
            *args: str,
            cwd: Path | None = None,
    ) -> str:
        """Run git and return stdout; fail the test on error."""
        result = subprocess.run(
            ["git", *args],
            cwd=str(cwd or self.path),
            env=self.env,
            check=True,
            text=True,
            capture_output=True,
        )
        return result.stdout.strip()

    def write(
            self,
            name: str,
            content: str = "content\n",
    ) -> Path:
        target = self.path / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
        return target

    def commit(
            self,
            message: str,
            name: str | None = None,
    ) -> str:
        """Write a file, commit everything, and return the new commit id."""
        self.write(name or f"{message.replace(' ', '_')}.txt", f"{message}\n")
        self.git("add", "-A")
        self.git("commit", "-q", "-m", message)
        return self.git("rev-parse", "HEAD")

    def runner(
            self,
            cwd: Path | None = None,
    ) -> GitRunner:
        return GitRunner(cwd=cwd or self.path, env=self.env)
