"""Git subprocess runner.

Thin wrapper around git invocations. Every query made by the prompt
pipeline goes through a GitRunner so failures (non-zero exit, missing
binary, hung process) become a failed result instead of an exception.

Execution Context:
    Library module - imported by the pipeline stages

Dependencies:
    - subprocess: git invocation

Metadata:
    Version: 0.1.0
    Author: gitps1 Team
"""
from __future__ import annotations

import logging
import subprocess
from collections.abc import Mapping
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


# ---- Constants ----------------------------------------------------------------------------------------------


DEFAULT_TIMEOUT = 10.0
FAILED_RETURNCODE = -1


# ---- Errors -------------------------------------------------------------------------------------------------


class GitCommandError(RuntimeError):
    """Raised when a git command is required to succeed and does not."""


# ---- Result -------------------------------------------------------------------------------------------------


@dataclass(frozen=True)
class GitResult:
    """Outcome of one git invocation.

    Attributes:
        args: Arguments passed after 'git'.
        returncode: Exit status, or -1 if git could not be run.
        stdout: Captured standard output.
        stderr: Captured standard error.
    """

    args: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(
            self,
    ) -> bool:
        return self.returncode == 0


# ---- Runner -------------------------------------------------------------------------------------------------


class GitRunner:
    """Runs git commands in a fixed directory and environment.

    Attributes:
        cwd: Working directory for every command (None for the process cwd).
        env: Environment for every command (None to inherit).
        timeout: Seconds before a command is abandoned.
        git: Name or path of the git executable.
    """

    def __init__(
            self,
            cwd: Path | str | None = None,
            env: Mapping[str, str] | None = None,
            timeout: float | None = DEFAULT_TIMEOUT,
            git: str = "git",
    ) -> None:
        self.cwd = Path(cwd) if cwd is not None else None
        self.env = dict(env) if env is not None else None
        self.timeout = timeout
        self.git = git

    @property
    def directory(
            self,
    ) -> Path:
        """Directory commands run in."""
        return self.cwd if self.cwd is not None else Path.cwd()

    def run(
            self,
            args: Sequence[str],
    ) -> GitResult:
        """Run git and capture its output; never raises.

        Args:
            args: Arguments passed after 'git'.

        Returns:
            GitResult describing the outcome.
        """
        argv = tuple(args)
        try:
            completed = subprocess.run(
                [self.git, *argv],
                cwd=str(self.cwd) if self.cwd is not None else None,
                env=self.env,
                check=False,
                text=True,
                capture_output=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            logger.warning(f"git {' '.join(argv)} timed out after {self.timeout}s")
            return GitResult(argv, FAILED_RETURNCODE)
        except OSError as run_error:
            logger.debug(f"git {' '.join(argv)} could not be run: {run_error}")
            return GitResult(argv, FAILED_RETURNCODE, stderr=str(run_error))

        if completed.returncode != 0:
            logger.debug(f"git {' '.join(argv)} exited {completed.returncode}: {completed.stderr.strip()}")
        return GitResult(argv, completed.returncode, completed.stdout, completed.stderr)

    def output(
            self,
            args: Sequence[str],
    ) -> str | None:
        """Return stdout without its trailing newline, or None on failure."""
        result = self.run(args)
        if not result.ok:
            return None
        return result.stdout.rstrip("\n")

    def ok(
            self,
            args: Sequence[str],
    ) -> bool:
        """Return True when git exits with status 0."""
        return self.run(args).ok

    def check_output(
            self,
            args: Sequence[str],
    ) -> str:
        """Return stdout of a command that must succeed.

        Raises:
            GitCommandError: If git fails or cannot be run.
        """
        result = self.run(args)
        if not result.ok:
            stderr = result.stderr.strip() or result.stdout.strip()
            msg = f"git {' '.join(result.args)} failed in {self.directory}: {stderr}"
            raise GitCommandError(msg)
        return result.stdout.rstrip("\n")

    def is_true(
            self,
            args: Sequence[str],
    ) -> bool:
        """Return True when a rev-parse style query prints 'true'."""
        return self.output(args) == "true"
