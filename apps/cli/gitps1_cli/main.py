"""gitps1 CLI entry point.

Orchestrator for the gitps1 command-line interface. Registers all
command modules and provides the main entry point.

Execution Context:
    CLI application - run via `python main.py` or `gitps1` command

Dependencies:
    - click: CLI framework
    - gitps1_core: Core library

Metadata:
    Version: 0.1.0
    Author: gitps1 Team
"""
from __future__ import annotations

import logging
import sys

import click

from gitps1_cli import __version__
from gitps1_cli.commands.init import init
from gitps1_cli.commands.inspect import inspect
from gitps1_cli.commands.status import prompt
from gitps1_cli.commands.status import status


# ---- CLI Group ----------------------------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="gitps1")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Log git invocations and fallbacks to stderr.",
)
def cli(
        verbose: bool,
) -> None:
    """gitps1 - Git status for shell prompts.

    Prints the current branch, operations in progress, upstream
    ahead/behind state, stash, and file change counts as a colorized
    string for PS1.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            stream=sys.stderr,
        )


# ---- Register Commands --------------------------------------------------------------------------------------


cli.add_command(status)
cli.add_command(prompt)
cli.add_command(inspect)
cli.add_command(init)


# ---- Main Function ------------------------------------------------------------------------------------------


def main() -> int:
    """Main entry point for gitps1 CLI.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        cli()
        return 0
    except Exception as cli_error:
        click.echo(f"Error: {cli_error}", err=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
