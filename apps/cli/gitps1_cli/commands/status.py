"""gitps1 status and prompt commands.

Print the git status for a shell prompt, either on its own (status) or
wrapped in the caller's prompt text (prompt).

Execution Context:
    CLI command - invoked via `gitps1 status` and `gitps1 prompt`

Dependencies:
    - click: CLI framework
    - gitps1_core: Prompt pipeline

Metadata:
    Version: 0.1.0
    Author: gitps1 Team
"""
from __future__ import annotations

import click

from gitps1_core.prompt import DEFAULT_TEMPLATE
from gitps1_core.prompt import render_prompt
from gitps1_core.prompt import render_status

from .utils import directory_option
from .utils import get_dialect
from .utils import shell_option


# ---- Status Command -----------------------------------------------------------------------------------------


@click.command()
@click.argument("template", required=False, default=DEFAULT_TEMPLATE)
@directory_option
@shell_option("plain")
def status(
        template: str,
        directory: str | None,
        shell: str,
) -> None:
    """Print the prompt status string.

    TEMPLATE is a printf-style format whose %s receives the status.
    Nothing is printed outside a repository. Escapes are written raw by
    default, since bash does not interpret \\[ \\] in command substitution.

    Examples:
        gitps1 status
        gitps1 status " (%s)"
        gitps1 status --shell zsh
        PS1='\\w$(gitps1 status " (%s)")\\$ '
    """
    text = render_status(template, dialect=get_dialect(shell), directory=directory)
    # stdout is a pipe under command substitution; keep the escapes
    click.echo(text, nl=False, color=True)


# ---- Prompt Command -----------------------------------------------------------------------------------------


@click.command()
@click.argument("pre")
@click.argument("post")
@click.argument("template", required=False, default=DEFAULT_TEMPLATE)
@directory_option
@shell_option("bash")
def prompt(
        pre: str,
        post: str,
        template: str,
        directory: str | None,
        shell: str,
) -> None:
    """Print a complete prompt: PRE, the status, then POST.

    Meant for PROMPT_COMMAND style hooks that assign PS1. Outside a
    repository the prompt is PRE followed by POST.

    Examples:
        gitps1 prompt '\\u@\\h:\\w' '\\$ '
        gitps1 prompt '\\u@\\h:\\w' '\\$ ' ' {%s}'
    """
    text = render_prompt(pre, post, template, dialect=get_dialect(shell), directory=directory)
    click.echo(text, nl=False, color=True)
