"""gitps1 CLI Application.

Command-line interface that prints git status summaries for shell
prompts.

Execution Context:
    CLI application - invoked from a shell prompt hook or a terminal

Dependencies:
    - click: CLI framework
    - rich: Terminal formatting
    - gitps1_core: Core library

Metadata:
    Version: 0.1.0
    Author: gitps1 Team
"""
from __future__ import annotations

__version__ = "0.1.0"
