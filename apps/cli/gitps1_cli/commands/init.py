"""gitps1 init command.

Prints a shell snippet defining `__git_ps1` on top of the gitps1 CLI,
so existing prompt setups keep working:

    PS1='[\\u@\\h \\W$(__git_ps1 " (%s)")]\\$ '
    PROMPT_COMMAND='__git_ps1 "\\u@\\h:\\w" "\\\\\\$ "'

With zero or one argument the function prints the status; with two or
three it assigns PS1.

Execution Context:
    CLI command - invoked via `eval "$(gitps1 init bash)"`

Dependencies:
    - click: CLI framework

Metadata:
    Version: 0.1.0
    Author: gitps1 Team
"""
from __future__ import annotations

import click


# ---- Snippets -----------------------------------------------------------------------------------------------


# Command substitution output is not scanned for \[ \] by bash, so the
# status mode prints raw escapes there.
BASH_SNIPPET = """\
__git_ps1 ()
{
    case "$#" in
        0|1) command gitps1 status --shell plain -- "${1:-%s}" ;;
        2|3) PS1="$(command gitps1 prompt --shell bash -- "$1" "$2" "${3:-%s}")" ;;
    esac
}
"""

ZSH_SNIPPET = """\
setopt PROMPT_SUBST
__git_ps1 ()
{
    case "$#" in
        0|1) command gitps1 status --shell zsh -- "${1:-%s}" ;;
        2|3) PS1="$(command gitps1 prompt --shell zsh -- "$1" "$2" "${3:-%s}")" ;;
    esac
}
"""

SNIPPETS = {
    "bash": BASH_SNIPPET,
    "zsh": ZSH_SNIPPET,
}


# ---- Init Command -------------------------------------------------------------------------------------------


@click.command()
@click.argument("shell", type=click.Choice(sorted(SNIPPETS), case_sensitive=False))
def init(
        shell: str,
) -> None:
    """Print the __git_ps1 shell integration for SHELL.

    Examples:
        eval "$(gitps1 init bash)"
        eval "$(gitps1 init zsh)"
    """
    click.echo(SNIPPETS[shell.lower()], nl=False)
