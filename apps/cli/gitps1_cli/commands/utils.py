"""Utility functions for gitps1 CLI commands.

Execution Context:
    CLI command utilities - imported by command modules

Dependencies:
    - click: Shared options

Metadata:
    Version: 0.1.0
    Author: gitps1 Team
"""
from __future__ import annotations

from collections.abc import Callable

import click

from gitps1_core.formatter import ShellDialect

SHELL_CHOICES = {
    "bash": ShellDialect.BASH,
    "zsh": ShellDialect.ZSH,
    "plain": ShellDialect.PLAIN,
}


def get_dialect(shell: str) -> ShellDialect:
    """Map a --shell choice to its dialect."""
    return SHELL_CHOICES[shell.lower()]


directory_option = click.option(
    "--directory",
    "-C",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help="Run as if started in this directory.",
)


def shell_option(default: str) -> Callable:
    """--shell option; status output defaults to plain, PS1 assignment to bash."""
    return click.option(
        "--shell",
        "shell",
        type=click.Choice(sorted(SHELL_CHOICES), case_sensitive=False),
        default=default,
        show_default=True,
        help="Shell whose zero-width markers wrap color escapes.",
    )
