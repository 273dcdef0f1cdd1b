"""gitps1 CLI command modules.

Contains all Click command implementations for the gitps1 CLI.

Execution Context:
    Imported by main.py

Dependencies:
    - click: CLI framework

Metadata:
    Version: 0.1.0
    Author: gitps1 Team
"""
from __future__ import annotations
