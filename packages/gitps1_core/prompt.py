"""Prompt pipeline entry points.

Runs the stages in order (configuration, locator, state, upstream and
stash, file status) and hands the result to the formatter. Two entry
points share the composer: render_status returns the status alone
(query mode) and render_prompt returns a complete prompt with the
caller's text around it (apply mode).

Neither entry point raises: a prompt helper must never break the shell
that calls it, so unexpected failures are logged and the status is
left out.

Execution Context:
    Library module - called by the CLI and by embedding applications

Dependencies:
    - gitps1_core: All pipeline stages

Metadata:
    Version: 0.1.0
    Author: gitps1 Team
"""
from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from gitps1_core.config import load_config
from gitps1_core.formatter import ShellDialect
from gitps1_core.formatter import format_status
from gitps1_core.formatter import substitute
from gitps1_core.models import FileStatusTally
from gitps1_core.models import PromptConfig
from gitps1_core.models import PromptSnapshot
from gitps1_core.models import UpstreamDelta
from gitps1_core.repository import locate_git_dir
from gitps1_core.runner import GitRunner
from gitps1_core.state import detect_state
from gitps1_core.status import collect_status
from gitps1_core.upstream import compare_upstream
from gitps1_core.upstream import has_stash

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "%s"


# ---- Pipeline -----------------------------------------------------------------------------------------------


def collect_snapshot(
        directory: Path | str | None = None,
        *,
        git_dir: Path | str | None = None,
        runner: GitRunner | None = None,
        environ: Mapping[str, str] | None = None,
        cached_dir: Path | str | None = None,
        config: PromptConfig | None = None,
) -> PromptSnapshot | None:
    """Gather everything the formatter needs for one prompt.

    Args:
        directory: Directory to inspect (defaults to the process cwd).
        git_dir: Explicit repository or metadata directory.
        runner: Runner to use instead of one built for directory.
        environ: Environment (defaults to os.environ).
        cached_dir: Metadata directory already known to the caller.
        config: Preloaded configuration.

    Returns:
        PromptSnapshot, or None when git status is disabled or the
        directory is not inside a repository.
    """
    environ = environ if environ is not None else os.environ
    runner = runner or GitRunner(cwd=directory, env=environ)
    config = config or load_config(runner, environ)

    if not config.display.enable_git_status:
        logger.debug("Git status disabled by configuration")
        return None

    location = locate_git_dir(git_dir, runner=runner, environ=environ, cached_dir=cached_dir)
    if location is None:
        logger.debug(f"No repository found from {runner.directory}")
        return None

    state = detect_state(location, runner=runner, describe_style=config.describe_style)

    upstream = UpstreamDelta()
    stash = False
    if state.is_inside_work_tree:
        if config.display.show_stash_state:
            stash = has_stash(runner)
        upstream = compare_upstream(runner, config)

    tally = FileStatusTally()
    if config.display.enable_file_status and state.is_inside_work_tree:
        tally = collect_status(runner)

    return PromptSnapshot(
        git_dir=location,
        state=state,
        upstream=upstream,
        tally=tally,
        has_stash=stash,
        config=config,
    )


def _compose(
        template: str,
        dialect: ShellDialect,
        **kwargs,
) -> str:
    try:
        snapshot = collect_snapshot(**kwargs)
    except Exception as pipeline_error:
        logger.debug(f"Prompt status unavailable: {pipeline_error}", exc_info=True)
        return ""
    if snapshot is None:
        return ""
    return substitute(template, format_status(snapshot, dialect=dialect))


# ---- Entry Points -------------------------------------------------------------------------------------------


def render_status(
        template: str = DEFAULT_TEMPLATE,
        *,
        dialect: ShellDialect = ShellDialect.BASH,
        **kwargs,
) -> str:
    """Return the status string substituted into template.

    Returns an empty string outside a repository. Keyword arguments are
    passed on to collect_snapshot.
    """
    return _compose(template or DEFAULT_TEMPLATE, dialect, **kwargs)


def render_prompt(
        pre: str,
        post: str,
        template: str = DEFAULT_TEMPLATE,
        *,
        dialect: ShellDialect = ShellDialect.BASH,
        **kwargs,
) -> str:
    """Return a complete prompt: pre, the status, then post.

    Outside a repository the prompt is just pre followed by post.
    """
    return pre + _compose(template or DEFAULT_TEMPLATE, dialect, **kwargs) + post
