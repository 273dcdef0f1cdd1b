"""gitps1 Core Library.

Builds a colorized git status summary for shell prompts: branch or
detached HEAD, operations in progress, upstream ahead/behind counts,
stash presence, and index/working tree change counts.

Execution Context:
    Library package - imported by the CLI and other applications

Dependencies:
    - git: Queried as a subprocess

Metadata:
    Version: 0.1.0
    Author: gitps1 Team
"""
from __future__ import annotations

from gitps1_core.formatter import ShellDialect
from gitps1_core.models import DisplayConfig
from gitps1_core.models import FileStatusTally
from gitps1_core.models import PromptConfig
from gitps1_core.models import RepoState
from gitps1_core.models import SpecialOperation
from gitps1_core.models import UpstreamDelta
from gitps1_core.prompt import collect_snapshot
from gitps1_core.prompt import render_prompt
from gitps1_core.prompt import render_status

__version__ = "0.1.0"

__all__ = [
    "DisplayConfig",
    "FileStatusTally",
    "PromptConfig",
    "RepoState",
    "ShellDialect",
    "SpecialOperation",
    "UpstreamDelta",
    "collect_snapshot",
    "render_prompt",
    "render_status",
    "__version__",
]
