"""Repository state detection.

Works out which branch HEAD is on (or how to describe a detached HEAD)
and whether a rebase, am, merge, cherry-pick, revert, or bisect is in
progress, by probing marker files in the git metadata directory.

Execution Context:
    Library module - second stage of the prompt pipeline

Dependencies:
    - gitps1_core.runner: symbolic-ref, describe and rev-parse queries
    - gitps1_core.models: RepoState and SpecialOperation

Metadata:
    Version: 0.1.0
    Author: gitps1 Team
"""
from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from pathlib import Path

from gitps1_core.models import GIT_DIR_SENTINEL
from gitps1_core.models import OperationStep
from gitps1_core.models import RepoState
from gitps1_core.models import SpecialOperation
from gitps1_core.runner import GitRunner

logger = logging.getLogger(__name__)


# ---- Marker Rules -------------------------------------------------------------------------------------------


@dataclass(frozen=True)
class MarkerRule:
    """One entry of the operation precedence table.

    Attributes:
        marker: Path relative to the git directory that must exist.
        operation: Operation reported when the marker is present.
        is_dir: Whether the marker must be a directory rather than a file.
        step_files: Files holding the current step and the total.
        head_name_file: File holding the ref being rebased.
    """

    marker: str
    operation: SpecialOperation
    is_dir: bool = False
    step_files: tuple[str, str] | None = None
    head_name_file: str | None = None

    def matches(
            self,
            git_dir: Path,
    ) -> bool:
        target = git_dir / self.marker
        return target.is_dir() if self.is_dir else target.is_file()


_REBASE_MERGE_STEPS = ("rebase-merge/msgnum", "rebase-merge/end")
_REBASE_APPLY_STEPS = ("rebase-apply/next", "rebase-apply/last")

# Evaluated top to bottom, first match wins.
OPERATION_RULES: tuple[MarkerRule, ...] = (
    MarkerRule(
        "rebase-merge/interactive",
        SpecialOperation.REBASE_INTERACTIVE,
        step_files=_REBASE_MERGE_STEPS,
        head_name_file="rebase-merge/head-name",
    ),
    MarkerRule(
        "rebase-merge",
        SpecialOperation.REBASE_MERGE,
        is_dir=True,
        step_files=_REBASE_MERGE_STEPS,
        head_name_file="rebase-merge/head-name",
    ),
    MarkerRule("rebase-apply/rebasing", SpecialOperation.REBASE_APPLY, step_files=_REBASE_APPLY_STEPS),
    MarkerRule("rebase-apply/applying", SpecialOperation.APPLYING_MAILBOX, step_files=_REBASE_APPLY_STEPS),
    MarkerRule("rebase-apply", SpecialOperation.AMBIGUOUS_AM_REBASE, is_dir=True, step_files=_REBASE_APPLY_STEPS),
    MarkerRule("MERGE_HEAD", SpecialOperation.MERGING),
    MarkerRule("CHERRY_PICK_HEAD", SpecialOperation.CHERRY_PICKING),
    MarkerRule("REVERT_HEAD", SpecialOperation.REVERTING),
    MarkerRule("BISECT_LOG", SpecialOperation.BISECTING),
)

DESCRIBE_COMMANDS: dict[str, tuple[str, ...]] = {
    "contains": ("describe", "--contains", "HEAD"),
    "branch": ("describe", "--contains", "--all", "HEAD"),
    "describe": ("describe", "HEAD"),
    "default": ("describe", "--tags", "--exact-match", "HEAD"),
}

ABBREV_LENGTH = 7
UNKNOWN_HEAD = "unknown"


# ---- Helpers ------------------------------------------------------------------------------------------------


def read_marker(
        path: Path,
) -> str | None:
    """Read a marker file, treating any failure as absence."""
    try:
        return path.read_text(encoding="utf-8", errors="replace").strip()
    except OSError:
        return None


def match_operation(
        git_dir: Path,
        rules: tuple[MarkerRule, ...] = OPERATION_RULES,
) -> MarkerRule | None:
    """Return the first rule whose marker exists."""
    for rule in rules:
        if rule.matches(git_dir):
            return rule
    return None


def read_step(
        git_dir: Path,
        rule: MarkerRule,
) -> OperationStep | None:
    """Read step/total progress for a matched rule."""
    if not rule.step_files:
        return None
    current_file, total_file = rule.step_files
    current = read_marker(git_dir / current_file)
    total = read_marker(git_dir / total_file)
    if not current or not total:
        return None
    try:
        return OperationStep(int(current), int(total))
    except ValueError:
        logger.debug(f"Unreadable progress '{current}/{total}' in {git_dir}")
        return None


def describe_detached(
        git_dir: Path,
        *,
        runner: GitRunner,
        describe_style: str | None = None,
) -> str:
    """Describe a detached HEAD, parenthesized.

    Tries the configured describe style, then an abbreviated commit id read
    from HEAD, then the literal 'unknown'.
    """
    command = DESCRIBE_COMMANDS.get(describe_style or "default", DESCRIBE_COMMANDS["default"])
    description = runner.output(command)
    if not description:
        head = read_marker(git_dir / "HEAD")
        description = f"{head[:ABBREV_LENGTH]}..." if head is not None else UNKNOWN_HEAD
    return f"({description})"


# ---- State Detection ----------------------------------------------------------------------------------------


def detect_state(
        git_dir: Path,
        *,
        runner: GitRunner,
        describe_style: str | None = None,
) -> RepoState:
    """Determine HEAD identity and any operation in progress.

    Args:
        git_dir: Git metadata directory from the locator.
        runner: Runner used for git queries.
        describe_style: contains, branch, describe, or default.

    Returns:
        RepoState for the repository.
    """
    rule = match_operation(git_dir)
    operation = rule.operation if rule else SpecialOperation.NONE
    step = read_step(git_dir, rule) if rule else None

    branch_name = None
    if rule and rule.head_name_file:
        branch_name = read_marker(git_dir / rule.head_name_file) or None

    is_detached = False
    describe_text = None
    if branch_name is None:
        branch_name = runner.output(["symbolic-ref", "HEAD"])
        if not branch_name:
            branch_name = None
            is_detached = True
            describe_text = describe_detached(git_dir, runner=runner, describe_style=describe_style)

    state = RepoState(
        branch_name=branch_name,
        is_detached=is_detached,
        describe_text=describe_text,
        special_operation=operation,
        operation_step=step,
    )

    if runner.is_true(["rev-parse", "--is-inside-git-dir"]):
        if runner.is_true(["rev-parse", "--is-bare-repository"]):
            return dataclasses.replace(state, is_inside_git_dir=True, is_bare=True)
        return dataclasses.replace(
            state,
            is_inside_git_dir=True,
            branch_name=GIT_DIR_SENTINEL,
            is_detached=False,
            describe_text=None,
        )

    return dataclasses.replace(
        state,
        is_inside_work_tree=runner.is_true(["rev-parse", "--is-inside-work-tree"]),
    )
