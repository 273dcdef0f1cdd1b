"""Data models for the gitps1 prompt status.

Defines the transient structures produced by each stage of the prompt
pipeline: repository state, upstream delta, file status tally, and the
display configuration consumed by the formatter.

Execution Context:
    Library module - imported by other gitps1_core modules

Dependencies:
    - dataclasses: Data class decorators
    - enum: Special operation tags

Metadata:
    Version: 0.1.0
    Author: gitps1 Team
"""
from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from pathlib import Path


# ---- Constants ----------------------------------------------------------------------------------------------


ESC = "\x1b"
RESET_COLOR = f"{ESC}[0m"
BARE_PREFIX = "BARE:"
GIT_DIR_SENTINEL = "GIT_DIR!"
HEADS_PREFIX = "refs/heads/"


# ---- Repository State ---------------------------------------------------------------------------------------


class SpecialOperation(Enum):
    """In-progress operation detected from marker files.

    The value of each member is the tag shown in the prompt.
    """

    NONE = ""
    REBASE_INTERACTIVE = "|REBASE-i"
    REBASE_MERGE = "|REBASE-m"
    REBASE_APPLY = "|REBASE"
    APPLYING_MAILBOX = "|AM"
    AMBIGUOUS_AM_REBASE = "|AM/REBASE"
    MERGING = "|MERGING"
    CHERRY_PICKING = "|CHERRY-PICKING"
    REVERTING = "|REVERTING"
    BISECTING = "|BISECTING"


@dataclass(frozen=True)
class OperationStep:
    """Progress of a multi-step operation such as a rebase.

    Attributes:
        current: Step currently being applied.
        total: Total number of steps.
    """

    current: int
    total: int

    def __str__(
            self,
    ) -> str:
        return f"{self.current}/{self.total}"


@dataclass(frozen=True)
class RepoState:
    """Identity of HEAD and any operation in progress.

    Attributes:
        branch_name: Full ref name (e.g. 'refs/heads/main') when attached.
        is_detached: Whether HEAD points directly at a commit.
        describe_text: Parenthesized description used when detached.
        special_operation: Operation detected from marker files.
        operation_step: Step/total progress, when the operation reports it.
        is_bare: Whether the repository is bare.
        is_inside_git_dir: Whether the cwd is inside the metadata directory.
        is_inside_work_tree: Whether the cwd is inside the work tree.
    """

    branch_name: str | None = None
    is_detached: bool = False
    describe_text: str | None = None
    special_operation: SpecialOperation = SpecialOperation.NONE
    operation_step: OperationStep | None = None
    is_bare: bool = False
    is_inside_git_dir: bool = False
    is_inside_work_tree: bool = False

    @property
    def branch_text(
            self,
    ) -> str:
        """Branch name, or the detached description when detached."""
        if self.is_detached:
            return self.describe_text or ""
        return self.branch_name or ""

    @property
    def operation_tag(
            self,
    ) -> str:
        """Prompt tag for the special operation, e.g. '|REBASE-i 3/10'."""
        tag = self.special_operation.value
        if tag and self.operation_step:
            return f"{tag} {self.operation_step}"
        return tag


# ---- Upstream -----------------------------------------------------------------------------------------------


@dataclass(frozen=True)
class UpstreamDelta:
    """Commit counts relative to the upstream branch.

    Attributes:
        ahead_by: Commits on HEAD not on the upstream.
        behind_by: Commits on the upstream not on HEAD.
    """

    ahead_by: int = 0
    behind_by: int = 0

    @property
    def diverged(
            self,
    ) -> bool:
        return self.ahead_by > 0 and self.behind_by > 0

    @property
    def is_ahead(
            self,
    ) -> bool:
        return self.ahead_by > 0

    @property
    def is_behind(
            self,
    ) -> bool:
        return self.behind_by > 0


# ---- File Status --------------------------------------------------------------------------------------------


@dataclass(frozen=True)
class StatusCounts:
    """Per-category change counts for one side of the status."""

    added: int = 0
    modified: int = 0
    deleted: int = 0
    unmerged: int = 0

    @property
    def total(
            self,
    ) -> int:
        return self.added + self.modified + self.deleted + self.unmerged


@dataclass(frozen=True)
class FileStatusTally:
    """Staged (index) and unstaged (working tree) change counts.

    Attributes:
        index: Counts parsed from the first status column.
        working: Counts parsed from the second status column.
    """

    index: StatusCounts = field(default_factory=StatusCounts)
    working: StatusCounts = field(default_factory=StatusCounts)


# ---- Display Configuration ----------------------------------------------------------------------------------


@dataclass(frozen=True)
class ColorPair:
    """Foreground and background escape sequences for a segment."""

    fg: str = ""
    bg: str = ""


YELLOW = f"{ESC}[1;33m"
CYAN = f"{ESC}[1;36m"
GREEN = f"{ESC}[1;32m"
RED = f"{ESC}[0;31m"
BLUE = f"{ESC}[0;34m"


@dataclass(frozen=True)
class DisplayConfig:
    """Segment texts, colors, and toggles used by the formatter.

    Attributes:
        before_text: Text opening the status segment.
        delim_text: Text between the index and working segments.
        after_text: Text closing the status segment.
        stash_text: Glyph shown when the stash is not empty.
        default: Colors restored at the end of the status.
        before: Colors of the opening text.
        delim: Colors of the delimiter.
        after: Colors of the closing text.
        branch: Branch colors when level with the upstream.
        branch_ahead: Branch colors when only ahead.
        branch_behind: Branch colors when only behind.
        branch_diverged: Branch colors when both ahead and behind.
        index: Colors of the index segment.
        working: Colors of the working tree segment.
        stash: Colors of the stash glyph.
        enable_git_status: Whether any status is produced at all.
        enable_file_status: Whether file counts are queried and shown.
        show_status_when_zero: Whether zero counts are still shown.
        show_stash_state: Whether the stash glyph is shown.
    """

    before_text: str = " ["
    delim_text: str = " |"
    after_text: str = "]"
    stash_text: str = "$"

    default: ColorPair = ColorPair(fg=f"{ESC}[m")
    before: ColorPair = ColorPair(fg=YELLOW)
    delim: ColorPair = ColorPair(fg=YELLOW)
    after: ColorPair = ColorPair(fg=YELLOW)
    branch: ColorPair = ColorPair(fg=CYAN)
    branch_ahead: ColorPair = ColorPair(fg=GREEN)
    branch_behind: ColorPair = ColorPair(fg=RED)
    branch_diverged: ColorPair = ColorPair(fg=YELLOW)
    index: ColorPair = ColorPair(fg=GREEN)
    working: ColorPair = ColorPair(fg=RED)
    stash: ColorPair = ColorPair(fg=BLUE)

    enable_git_status: bool = True
    enable_file_status: bool = True
    show_status_when_zero: bool = False
    show_stash_state: bool = True


@dataclass(frozen=True)
class PromptConfig:
    """Everything read from git config and the environment.

    Attributes:
        display: Formatter configuration.
        describe_style: Style used to describe a detached HEAD.
        show_upstream: Raw upstream option string; None disables the comparison.
        svn_remotes: URLs of configured svn remotes.
        svn_id: Branch name for svn checkouts without a layout.
    """

    display: DisplayConfig = field(default_factory=DisplayConfig)
    describe_style: str | None = None
    show_upstream: str | None = None
    svn_remotes: tuple[str, ...] = ()
    svn_id: str | None = None


# ---- Pipeline Snapshot --------------------------------------------------------------------------------------


@dataclass(frozen=True)
class PromptSnapshot:
    """All inputs of the formatter for one prompt invocation."""

    git_dir: Path
    state: RepoState
    upstream: UpstreamDelta = field(default_factory=UpstreamDelta)
    tally: FileStatusTally = field(default_factory=FileStatusTally)
    has_stash: bool = False
    config: PromptConfig = field(default_factory=PromptConfig)
