"""gitps1 inspect command.

Shows everything the prompt pipeline detected for a directory: HEAD
identity, operation in progress, upstream delta, file counts, stash,
and the active toggles. Useful when the prompt looks wrong.

Execution Context:
    CLI command - invoked via `gitps1 inspect`

Dependencies:
    - click: CLI framework
    - rich: Terminal output
    - gitps1_core: Prompt pipeline

Metadata:
    Version: 0.1.0
    Author: gitps1 Team
"""
from __future__ import annotations

import os

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from gitps1_core.formatter import ShellDialect
from gitps1_core.formatter import branch_label
from gitps1_core.formatter import format_status
from gitps1_core.prompt import collect_snapshot
from gitps1_core.runner import GitRunner

from .utils import directory_option

console = Console()


# ---- Inspect Command ----------------------------------------------------------------------------------------


@click.command()
@directory_option
def inspect(
        directory: str | None,
) -> None:
    """Show the detected repository state.

    Example:
        gitps1 inspect
        gitps1 inspect -C ~/src/project
    """
    try:
        runner = GitRunner(cwd=directory, env=os.environ)
        git_version = runner.check_output(["--version"])
        snapshot = collect_snapshot(runner=runner)

        if snapshot is None:
            console.print("[red]Not a git repository, or git status is disabled[/red]")
            console.print("[dim]Check 'git config bash.enableGitStatus'.[/dim]")
            return

        state = snapshot.state
        display = snapshot.config.display

        console.print(Panel(
            f"[bold]Branch:[/bold] [cyan]{escape(branch_label(state))}[/cyan]",
            title="gitps1 Inspect",
            border_style="blue",
        ))

        table = Table(show_header=True, header_style="bold")
        table.add_column("Property")
        table.add_column("Value")

        table.add_row("Git", git_version)
        table.add_row("Git directory", escape(str(snapshot.git_dir)))
        table.add_row("Detached", "yes" if state.is_detached else "no")
        table.add_row("Operation", state.operation_tag or "[dim]none[/dim]")
        table.add_row("Bare", "yes" if state.is_bare else "no")
        table.add_row("Inside git dir", "yes" if state.is_inside_git_dir else "no")
        table.add_row("Ahead / behind", f"{snapshot.upstream.ahead_by} / {snapshot.upstream.behind_by}")
        table.add_row("Upstream option", snapshot.config.show_upstream or "[dim](not set)[/dim]")

        index = snapshot.tally.index
        working = snapshot.tally.working
        table.add_row("Index", f"+{index.added} ~{index.modified} -{index.deleted} !{index.unmerged}")
        table.add_row("Working tree", f"+{working.added} ~{working.modified} -{working.deleted} !{working.unmerged}")
        table.add_row("Stash", "yes" if snapshot.has_stash else "no")

        table.add_row("File status", "enabled" if display.enable_file_status else "disabled")
        table.add_row("Show when zero", "enabled" if display.show_status_when_zero else "disabled")
        table.add_row("Stash state", "enabled" if display.show_stash_state else "disabled")

        console.print(table)
        console.print()
        console.print("[bold]Rendered:[/bold]", end=" ")
        click.echo(format_status(snapshot, dialect=ShellDialect.PLAIN))

    except Exception as inspect_error:
        msg = f"Failed to inspect repository: {inspect_error}"
        raise click.ClickException(msg) from inspect_error
