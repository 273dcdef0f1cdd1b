"""Tests for data models module.

Covers derived properties of RepoState, UpstreamDelta, StatusCounts and
the DisplayConfig defaults.

Execution Context:
    Test module - run via pytest

Dependencies:
    - pytest: Test framework
    - gitps1_core.models: Module under test
"""
from __future__ import annotations

import dataclasses

import pytest

from gitps1_core.models import DisplayConfig
from gitps1_core.models import FileStatusTally
from gitps1_core.models import OperationStep
from gitps1_core.models import RepoState
from gitps1_core.models import SpecialOperation
from gitps1_core.models import StatusCounts
from gitps1_core.models import UpstreamDelta


# ---- RepoState Tests ----------------------------------------------------------------------------------------


class TestRepoState:
    """Tests for RepoState properties."""

    def test_branch_text_when_attached(self) -> None:
        """Attached state shows the branch name."""
        state = RepoState(branch_name="refs/heads/main")

        assert state.branch_text == "refs/heads/main"

    def test_branch_text_when_detached(self) -> None:
        """Detached state shows the describe text."""
        state = RepoState(is_detached=True, describe_text="(v1.0)")

        assert state.branch_text == "(v1.0)"

    def test_operation_tag_with_step(self) -> None:
        """Step and total follow the tag."""
        state = RepoState(
            branch_name="refs/heads/feature",
            special_operation=SpecialOperation.REBASE_INTERACTIVE,
            operation_step=OperationStep(3, 10),
        )

        assert state.operation_tag == "|REBASE-i 3/10"

    def test_operation_tag_without_step(self) -> None:
        """Operations without progress show the bare tag."""
        state = RepoState(special_operation=SpecialOperation.MERGING)

        assert state.operation_tag == "|MERGING"

    def test_operation_tag_empty_without_operation(self) -> None:
        """No operation means no tag, even if a step is set."""
        state = RepoState(operation_step=OperationStep(1, 2))

        assert state.operation_tag == ""

    def test_frozen(self) -> None:
        """States are immutable."""
        state = RepoState()

        with pytest.raises(dataclasses.FrozenInstanceError):
            state.branch_name = "x"  # type: ignore[misc]


# ---- UpstreamDelta Tests ------------------------------------------------------------------------------------


class TestUpstreamDelta:
    """Tests for UpstreamDelta properties."""

    @pytest.mark.parametrize(
        ("ahead", "behind", "diverged", "is_ahead", "is_behind"),
        [
            (0, 0, False, False, False),
            (2, 0, False, True, False),
            (0, 3, False, False, True),
            (1, 1, True, True, True),
        ],
    )
    def test_flags(self, ahead: int, behind: int, diverged: bool, is_ahead: bool, is_behind: bool) -> None:
        """Flags follow the counts."""
        delta = UpstreamDelta(ahead_by=ahead, behind_by=behind)

        assert delta.diverged is diverged
        assert delta.is_ahead is is_ahead
        assert delta.is_behind is is_behind

    def test_defaults_to_zero(self) -> None:
        """A missing upstream is a zero delta."""
        assert UpstreamDelta() == UpstreamDelta(ahead_by=0, behind_by=0)


# ---- StatusCounts Tests -------------------------------------------------------------------------------------


class TestStatusCounts:
    """Tests for StatusCounts and FileStatusTally."""

    def test_total_sums_all_categories(self) -> None:
        """Total includes unmerged entries."""
        counts = StatusCounts(added=1, modified=2, deleted=3, unmerged=4)

        assert counts.total == 10

    def test_empty_tally(self) -> None:
        """Default tally has zero totals on both sides."""
        tally = FileStatusTally()

        assert tally.index.total == 0
        assert tally.working.total == 0


# ---- DisplayConfig Tests ------------------------------------------------------------------------------------


class TestDisplayConfig:
    """Tests for DisplayConfig defaults."""

    def test_toggle_defaults(self) -> None:
        """Documented toggle defaults."""
        display = DisplayConfig()

        assert display.enable_git_status is True
        assert display.enable_file_status is True
        assert display.show_status_when_zero is False
        assert display.show_stash_state is True

    def test_text_defaults(self) -> None:
        """Default segment texts."""
        display = DisplayConfig()

        assert display.before_text == " ["
        assert display.delim_text == " |"
        assert display.after_text == "]"
        assert display.stash_text == "$"

    def test_branch_colors_are_distinct(self) -> None:
        """Neutral, ahead and behind colors differ from each other."""
        display = DisplayConfig()

        colors = {display.branch.fg, display.branch_ahead.fg, display.branch_behind.fg}
        assert len(colors) == 3
