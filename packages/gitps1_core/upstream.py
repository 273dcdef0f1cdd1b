"""Upstream comparison.

Counts how many commits HEAD is ahead of and behind its upstream. The
upstream is either the ordinary '@{upstream}' tracking ref or, for
git-svn clones, the branch named by the 'git-svn-id' footer of the most
recent first-parent commit.

Execution Context:
    Library module - runs after state detection, before formatting

Dependencies:
    - gitps1_core.runner: rev-list and log queries
    - gitps1_core.models: UpstreamDelta and PromptConfig

Metadata:
    Version: 0.1.0
    Author: gitps1 Team
"""
from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from gitps1_core.models import PromptConfig
from gitps1_core.models import UpstreamDelta
from gitps1_core.runner import GitRunner

logger = logging.getLogger(__name__)


# ---- Constants ----------------------------------------------------------------------------------------------


TRACKING_REF = "@{upstream}"
DEFAULT_SVN_BRANCH = "git-svn"

KIND_GIT = "git"
KIND_SVN = "svn"
KIND_SVN_OR_GIT = "svn+git"
LEGACY_OPTION = "legacy"

_SVN_ID_RE = re.compile(r"^\s*git-svn-id:\s+(\S+)\s+\S+", re.MULTILINE)
_ERE_SPECIAL = set(".[]()*+?{}|^$\\")


# ---- Options ------------------------------------------------------------------------------------------------


@dataclass(frozen=True)
class UpstreamOptions:
    """Parsed show-upstream option.

    Attributes:
        kind: git, svn, or svn+git (svn when a footer is found, else git).
        legacy: Count commits one by one instead of using --count.
    """

    kind: str = KIND_GIT
    legacy: bool = False


def parse_options(
        value: str,
        has_svn_remotes: bool = False,
) -> UpstreamOptions:
    """Parse a whitespace-separated show-upstream value.

    'git' and 'svn' choose the upstream kind, the last one given winning;
    'legacy' selects legacy counting. Unknown words are ignored.
    """
    kind = KIND_SVN_OR_GIT if has_svn_remotes else KIND_GIT
    legacy = False
    for option in value.split():
        if option in (KIND_GIT, KIND_SVN):
            kind = option
        elif option == LEGACY_OPTION:
            legacy = True
    return UpstreamOptions(kind=kind, legacy=legacy)


# ---- Upstream Resolution ------------------------------------------------------------------------------------


def escape_ere(
        text: str,
) -> str:
    """Escape text for use inside a POSIX extended regular expression."""
    return "".join(f"\\{char}" if char in _ERE_SPECIAL else char for char in text)


def svn_branch_from_log(
        log_output: str,
        svn_remotes: Iterable[str],
        svn_id: str | None = None,
) -> str | None:
    """Extract the upstream branch from a commit carrying a git-svn-id footer.

    Args:
        log_output: Output of 'git log -1' for the footer commit.
        svn_remotes: Configured svn remote URLs, stripped as prefixes.
        svn_id: Branch name to use when nothing remains after stripping.

    Returns:
        Branch name, or None when the output has no footer.
    """
    matches = _SVN_ID_RE.findall(log_output)
    if not matches:
        return None

    url = matches[-1]
    if "@" in url:
        url = url.rsplit("@", 1)[0]
    for remote in svn_remotes:
        url = url.removeprefix(remote)

    if not url:
        return svn_id or DEFAULT_SVN_BRANCH
    return url.removeprefix("/")


def resolve_upstream(
        runner: GitRunner,
        options: UpstreamOptions,
        config: PromptConfig,
) -> str:
    """Name the ref HEAD is compared against."""
    if options.kind == KIND_GIT or not config.svn_remotes:
        return TRACKING_REF

    pattern = "|".join(escape_ere(remote) for remote in config.svn_remotes)
    log_output = runner.output([
        "log",
        "--first-parent",
        "-1",
        "--extended-regexp",
        f"--grep=^git-svn-id: ({pattern})",
    ])
    branch = svn_branch_from_log(log_output or "", config.svn_remotes, config.svn_id)
    if branch is None:
        logger.debug("No git-svn-id footer found, falling back to the tracking ref")
        return TRACKING_REF
    return branch


# ---- Counting -----------------------------------------------------------------------------------------------


def parse_count_output(
        output: str | None,
) -> UpstreamDelta:
    """Parse 'rev-list --count --left-right' output ('<behind>\\t<ahead>')."""
    if not output:
        return UpstreamDelta()
    parts = output.split()
    if len(parts) != 2:
        logger.debug(f"Unexpected rev-list count output: {output!r}")
        return UpstreamDelta()
    try:
        behind, ahead = (int(part) for part in parts)
    except ValueError:
        logger.debug(f"Unexpected rev-list count output: {output!r}")
        return UpstreamDelta()
    return UpstreamDelta(ahead_by=ahead, behind_by=behind)


def tally_left_right(
        lines: Iterable[str],
) -> UpstreamDelta:
    """Tally 'rev-list --left-right' lines ('<sha' behind, '>sha' ahead)."""
    ahead = 0
    behind = 0
    for line in lines:
        marker = line.strip()[:1]
        if marker == "<":
            behind += 1
        elif marker == ">":
            ahead += 1
    return UpstreamDelta(ahead_by=ahead, behind_by=behind)


def count_combined(
        runner: GitRunner,
        upstream: str,
) -> UpstreamDelta:
    """Count ahead/behind with a single 'rev-list --count' query."""
    output = runner.output(["rev-list", "--count", "--left-right", f"{upstream}...HEAD"])
    return parse_count_output(output)


def count_legacy(
        runner: GitRunner,
        upstream: str,
) -> UpstreamDelta:
    """Count ahead/behind by listing every differing commit.

    For git versions whose rev-list lacks --count.
    """
    output = runner.output(["rev-list", "--left-right", f"{upstream}...HEAD"])
    if not output:
        return UpstreamDelta()
    return tally_left_right(output.splitlines())


def compare_upstream(
        runner: GitRunner,
        config: PromptConfig,
) -> UpstreamDelta:
    """Compute the ahead/behind delta of HEAD against its upstream.

    The comparison is opt-in: without a show-upstream value it returns a
    zero delta straight away. Every failure also yields a zero delta.

    Args:
        runner: Runner used for git queries.
        config: Loaded prompt configuration.

    Returns:
        UpstreamDelta for HEAD.
    """
    if not config.show_upstream or not config.show_upstream.strip():
        return UpstreamDelta()

    options = parse_options(config.show_upstream, has_svn_remotes=bool(config.svn_remotes))
    upstream = resolve_upstream(runner, options, config)
    if options.legacy:
        return count_legacy(runner, upstream)
    return count_combined(runner, upstream)


def has_stash(
        runner: GitRunner,
) -> bool:
    """Return True when at least one stash entry exists."""
    return runner.ok(["rev-parse", "--verify", "--quiet", "refs/stash"])
