"""Prompt status formatting.

Composes the branch, file status, operation and stash segments into a
single colorized string and substitutes it into a printf-style template.

Execution Context:
    Library module - last stage of the prompt pipeline

Dependencies:
    - gitps1_core.models: Snapshot and display configuration

Metadata:
    Version: 0.1.0
    Author: gitps1 Team
"""
from __future__ import annotations

import logging
from enum import Enum

from gitps1_core.models import BARE_PREFIX
from gitps1_core.models import HEADS_PREFIX
from gitps1_core.models import RESET_COLOR
from gitps1_core.models import ColorPair
from gitps1_core.models import DisplayConfig
from gitps1_core.models import PromptSnapshot
from gitps1_core.models import RepoState
from gitps1_core.models import StatusCounts
from gitps1_core.models import UpstreamDelta

logger = logging.getLogger(__name__)


# ---- Shell Dialects -----------------------------------------------------------------------------------------


class ShellDialect(Enum):
    """How non-printing escape sequences are marked for the shell."""

    BASH = ("\\[", "\\]")
    ZSH = ("%{", "%}")
    PLAIN = ("", "")

    def wrap(
            self,
            sequence: str,
    ) -> str:
        """Mark an escape sequence as zero-width; empty stays empty."""
        if not sequence:
            return ""
        start, end = self.value
        return f"{start}{sequence}{end}"

    def colors(
            self,
            pair: ColorPair,
    ) -> str:
        return self.wrap(pair.bg) + self.wrap(pair.fg)


# ---- Segments -----------------------------------------------------------------------------------------------


def branch_label(
        state: RepoState,
) -> str:
    """Branch text with the bare marker and 'refs/heads/' handled."""
    prefix = BARE_PREFIX if state.is_bare else ""
    return prefix + state.branch_text.removeprefix(HEADS_PREFIX)


def branch_colors(
        delta: UpstreamDelta,
        display: DisplayConfig,
) -> ColorPair:
    """Pick the branch color from the upstream delta."""
    if delta.diverged:
        return display.branch_diverged
    if delta.is_behind:
        return display.branch_behind
    if delta.is_ahead:
        return display.branch_ahead
    return display.branch


def counts_text(
        counts: StatusCounts,
) -> str:
    return f" +{counts.added} ~{counts.modified} -{counts.deleted}"


def segment_shown(
        counts: StatusCounts,
        display: DisplayConfig,
) -> bool:
    """Whether a file status segment is displayed."""
    return display.enable_file_status and (counts.total != 0 or display.show_status_when_zero)


def _counts_segment(
        counts: StatusCounts,
        colors: ColorPair,
        display: DisplayConfig,
        dialect: ShellDialect,
) -> str:
    segment = ""
    if segment_shown(counts, display):
        segment += dialect.colors(colors) + counts_text(counts)
    if counts.unmerged != 0:
        segment += " " + dialect.colors(colors) + f"!{counts.unmerged}"
    return segment


# ---- Composition --------------------------------------------------------------------------------------------


def format_status(
        snapshot: PromptSnapshot,
        *,
        dialect: ShellDialect = ShellDialect.BASH,
) -> str:
    """Compose the colorized status string for a snapshot.

    Args:
        snapshot: Pipeline output for one invocation.
        dialect: Shell whose zero-width markers wrap the escapes.

    Returns:
        The status string, ending with the default colors.
    """
    display = snapshot.config.display
    tally = snapshot.tally

    parts = [
        dialect.colors(display.before) + display.before_text,
        dialect.colors(branch_colors(snapshot.upstream, display)) + branch_label(snapshot.state),
    ]

    if display.enable_file_status:
        parts.append(_counts_segment(tally.index, display.index, display, dialect))
        if tally.index.total != 0 and segment_shown(tally.working, display):
            parts.append(dialect.colors(display.delim) + display.delim_text)
        parts.append(_counts_segment(tally.working, display.working, display, dialect))

    tag = snapshot.state.operation_tag
    if tag:
        parts.append(dialect.wrap(RESET_COLOR) + tag)

    parts.append(dialect.colors(display.after) + display.after_text)

    if display.show_stash_state and snapshot.has_stash:
        parts.append(dialect.colors(display.stash) + display.stash_text)

    parts.append(dialect.colors(display.default))
    return "".join(parts)


def substitute(
        template: str,
        text: str,
) -> str:
    """Substitute text into a printf-style template ('%s', '%%').

    A template that printf-style formatting rejects falls back to what
    printf does with one argument: the first '%s' receives the text and
    any further '%s' is left empty.
    """
    try:
        return template % (text,)
    except (TypeError, ValueError) as format_error:
        logger.debug(f"Template {template!r} rejected: {format_error}")
        head, placeholder, tail = template.partition("%s")
        if not placeholder:
            return template
        return head + text + tail.replace("%s", "")
