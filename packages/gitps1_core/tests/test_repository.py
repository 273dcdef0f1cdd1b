"""Tests for repository location.

Execution Context:
    Test module - run via pytest

Dependencies:
    - pytest: Test framework
    - gitps1_core.repository: Module under test
"""
from __future__ import annotations

from pathlib import Path

from gitps1_core.repository import GIT_DIR_NAME
from gitps1_core.repository import locate_git_dir
from gitps1_core.runner import GitRunner
from helpers import FakeRunner
from helpers import GitRepo
from helpers import requires_git


# ---- Explicit Path Tests ------------------------------------------------------------------------------------


class TestExplicitPath:
    """Tests for an explicitly given path."""

    def test_nested_git_dir(self, tmp_path: Path) -> None:
        """A work tree path resolves to its .git directory."""
        (tmp_path / GIT_DIR_NAME).mkdir()

        assert locate_git_dir(tmp_path, runner=FakeRunner()) == tmp_path / GIT_DIR_NAME

    def test_literal_path(self, tmp_path: Path) -> None:
        """Without a nested .git the path is used as-is."""
        assert locate_git_dir(tmp_path, runner=FakeRunner()) == tmp_path

    def test_explicit_path_skips_search(self, tmp_path: Path) -> None:
        """Environment and git are not consulted."""
        runner = FakeRunner()

        locate_git_dir(tmp_path, runner=runner, environ={"GIT_DIR": "/elsewhere"})

        assert runner.calls == []


# ---- Search Order Tests -------------------------------------------------------------------------------------


class TestSearchOrder:
    """Tests for the implicit search order."""

    def test_cached_dir_first(self, tmp_path: Path) -> None:
        """A cached directory wins over everything."""
        (tmp_path / GIT_DIR_NAME).mkdir()
        runner = FakeRunner(cwd=tmp_path)

        result = locate_git_dir(runner=runner, environ={"GIT_DIR": str(tmp_path)}, cached_dir="/cached")

        assert result == Path("/cached")

    def test_environment_override(self, tmp_path: Path) -> None:
        """GIT_DIR is used when it is a directory."""
        meta = tmp_path / "meta"
        meta.mkdir()

        result = locate_git_dir(runner=FakeRunner(cwd=tmp_path), environ={"GIT_DIR": str(meta)})

        assert result == meta

    def test_relative_environment_override(self, tmp_path: Path) -> None:
        """A relative GIT_DIR is resolved against the working directory."""
        (tmp_path / "meta").mkdir()

        result = locate_git_dir(runner=FakeRunner(cwd=tmp_path), environ={"GIT_DIR": "meta"})

        assert result == tmp_path / "meta"

    def test_invalid_environment_override(self, tmp_path: Path) -> None:
        """A GIT_DIR that is not a directory means no repository."""
        (tmp_path / GIT_DIR_NAME).mkdir()

        result = locate_git_dir(runner=FakeRunner(cwd=tmp_path), environ={"GIT_DIR": str(tmp_path / "missing")})

        assert result is None

    def test_local_git_dir(self, tmp_path: Path) -> None:
        """A .git directory in the working directory is found without git."""
        (tmp_path / GIT_DIR_NAME).mkdir()
        runner = FakeRunner(cwd=tmp_path)

        assert locate_git_dir(runner=runner, environ={}) == tmp_path / GIT_DIR_NAME
        assert runner.calls == []

    def test_rev_parse_fallback(self, tmp_path: Path) -> None:
        """git resolves the directory from further up."""
        runner = FakeRunner({("rev-parse", "--git-dir"): "/work/project/.git\n"}, cwd=tmp_path)

        assert locate_git_dir(runner=runner, environ={}) == Path("/work/project/.git")

    def test_not_a_repository(self, tmp_path: Path) -> None:
        """No hit anywhere means None, not an error."""
        assert locate_git_dir(runner=FakeRunner(cwd=tmp_path), environ={}) is None


@requires_git
class TestRealGit:
    """Location inside real repositories."""

    def test_subdirectory(self, git_repo: GitRepo) -> None:
        """A subdirectory of the work tree finds the top-level .git."""
        subdir = git_repo.path / "src" / "pkg"
        subdir.mkdir(parents=True)

        result = locate_git_dir(runner=git_repo.runner(subdir), environ={})

        assert result is not None
        assert result.resolve() == (git_repo.path / GIT_DIR_NAME).resolve()

    def test_outside_repository(self, tmp_path: Path, git_env: dict[str, str]) -> None:
        """A plain directory is not a repository."""
        plain = tmp_path / "plain"
        plain.mkdir()
        env = dict(git_env, GIT_CEILING_DIRECTORIES=str(tmp_path))

        assert locate_git_dir(runner=GitRunner(cwd=plain, env=env), environ={}) is None
