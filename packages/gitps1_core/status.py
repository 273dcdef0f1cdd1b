"""Porcelain status tally.

Counts added, modified, deleted and unmerged entries on the index side
and the working tree side of 'git status --porcelain'.

Execution Context:
    Library module - runs when file status is enabled

Dependencies:
    - gitps1_core.runner: git status
    - gitps1_core.models: FileStatusTally

Metadata:
    Version: 0.1.0
    Author: gitps1 Team
"""
from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from gitps1_core.models import FileStatusTally
from gitps1_core.models import StatusCounts
from gitps1_core.runner import GitRunner


# ---- Constants ----------------------------------------------------------------------------------------------


# Renames and copies are reported as modifications.
INDEX_CODES = {
    "A": "added",
    "M": "modified",
    "R": "modified",
    "C": "modified",
    "D": "deleted",
    "U": "unmerged",
}

WORKING_CODES = {
    "?": "added",
    "A": "added",
    "M": "modified",
    "D": "deleted",
    "U": "unmerged",
}


# ---- Tally --------------------------------------------------------------------------------------------------


def tally_status(
        lines: Iterable[str],
) -> FileStatusTally:
    """Tally porcelain status lines ('XY path').

    Args:
        lines: Lines of 'git status --porcelain' output.

    Returns:
        FileStatusTally with index and working tree counts.
    """
    index: Counter[str] = Counter()
    working: Counter[str] = Counter()

    for line in lines:
        if len(line) < 2:
            continue
        index_category = INDEX_CODES.get(line[0])
        if index_category:
            index[index_category] += 1
        working_category = WORKING_CODES.get(line[1])
        if working_category:
            working[working_category] += 1

    return FileStatusTally(
        index=StatusCounts(**index),
        working=StatusCounts(**working),
    )


def collect_status(
        runner: GitRunner,
) -> FileStatusTally:
    """Run 'git status --porcelain' and tally the result."""
    output = runner.output(["status", "--porcelain"])
    if not output:
        return FileStatusTally()
    return tally_status(output.splitlines())
