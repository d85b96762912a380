#!/usr/bin/env python3
"""
GuardFS - guarded file operations

Main entry point for the GuardFS CLI application.
"""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from core import AuditLogger, ConfigError, Settings, load_settings
from core.config import save_settings
from modules.fault_demos import run_all
from modules.file_guard import GuardedFileOperator, run_demo


console = Console()


def get_operator(settings: Settings) -> GuardedFileOperator:
    """Get a guarded file operator configured from settings."""
    try:
        logger = AuditLogger(log_path=settings.audit_log)
    except OSError as e:
        console.print(f"Audit log unavailable: {e}", style="red", markup=False, highlight=False)
        logger = None
    return GuardedFileOperator(
        logger=logger,
        console=console,
        encoding=settings.encoding
    )


def resolve_dry_run(settings: Settings, dry_run: Optional[bool]) -> bool:
    return settings.dry_run if dry_run is None else dry_run


dry_run_option = click.option(
    "--dry-run/--execute",
    default=None,
    help="Preview the action without changing anything."
)


@click.group()
@click.version_option(version="0.1.0", prog_name="GuardFS")
@click.option("--config", "config_path", default="config.yaml", show_default=True,
              help="Path to the YAML settings file.")
@click.pass_context
def guardfs(ctx, config_path: str):
    """
    GuardFS - file operations that look before they leap

    Every command checks that the files it relies on exist (or don't)
    before acting, and reports a conflict instead of failing.
    """
    try:
        ctx.obj = load_settings(config_path)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        sys.exit(1)


@guardfs.command()
@click.argument("path")
@click.argument("content")
@dry_run_option
@click.pass_obj
def create(settings: Settings, path: str, content: str, dry_run: Optional[bool]):
    """Create PATH containing CONTENT, unless it already exists."""
    get_operator(settings).create_file(path, content, dry_run=resolve_dry_run(settings, dry_run))


@guardfs.command()
@click.argument("path")
@click.pass_obj
def read(settings: Settings, path: str):
    """Print PATH line by line, if it exists."""
    get_operator(settings).read_file(path)


@guardfs.command()
@click.argument("src")
@click.argument("dst")
@dry_run_option
@click.pass_obj
def copy(settings: Settings, src: str, dst: str, dry_run: Optional[bool]):
    """Copy SRC to DST, unless SRC is missing or DST exists."""
    get_operator(settings).copy_file(src, dst, dry_run=resolve_dry_run(settings, dry_run))


@guardfs.command()
@click.argument("src")
@click.argument("dst")
@dry_run_option
@click.pass_obj
def move(settings: Settings, src: str, dst: str, dry_run: Optional[bool]):
    """Move SRC to DST, unless SRC is missing or DST exists."""
    get_operator(settings).move_file(src, dst, dry_run=resolve_dry_run(settings, dry_run))


@guardfs.command()
@click.argument("path")
@dry_run_option
@click.pass_obj
def delete(settings: Settings, path: str, dry_run: Optional[bool]):
    """Delete PATH, if it exists."""
    get_operator(settings).delete_file(path, dry_run=resolve_dry_run(settings, dry_run))


@guardfs.command()
@click.argument("path")
@dry_run_option
@click.pass_obj
def mkdir(settings: Settings, path: str, dry_run: Optional[bool]):
    """Create directory PATH and its parents, unless it already exists."""
    get_operator(settings).make_directory(path, dry_run=resolve_dry_run(settings, dry_run))


@guardfs.command()
@click.option("--workdir", default=".", show_default=True,
              type=click.Path(file_okay=False), help="Directory to run the walkthrough in.")
@click.pass_obj
def demo(settings: Settings, workdir: str):
    """Run the scripted walkthrough of every guarded operation."""
    console.print(Panel.fit(
        "[bold blue]File Handling[/bold blue]\n"
        f"[dim]Working directory: {escape(workdir)}[/dim]",
        title="📂 Demo"
    ))

    operator = get_operator(settings)
    operator.make_directory(workdir)
    console.print()
    results = run_demo(operator, workdir)

    table = Table(title="Summary")
    table.add_column("Step", style="dim")
    table.add_column("Operation")
    table.add_column("Outcome")
    for i, result in enumerate(results, start=1):
        outcome = result.status.value
        if result.success:
            outcome = f"[green]{outcome}[/green]"
        else:
            outcome = f"[yellow]{outcome}[/yellow]"
        table.add_row(str(i), result.operation, outcome)
    console.print(table)


@guardfs.command()
def faults():
    """Trigger and catch a few faults on purpose."""
    console.print(Panel.fit("[bold blue]Exceptions[/bold blue]", title="⚠️  Faults"))
    run_all(console)


@guardfs.command()
@click.option("--limit", default=20, show_default=True, help="Number of entries to show.")
@click.pass_obj
def audit(settings: Settings, limit: int):
    """View the audit log."""
    try:
        entries = AuditLogger(log_path=settings.audit_log).get_recent(limit=limit)
    except OSError as e:
        console.print(f"Audit log unavailable: {e}", style="red", markup=False, highlight=False)
        return

    if not entries:
        console.print("[dim]No audit entries found.[/dim]")
        return

    table = Table(title="Recent Audit Log")
    table.add_column("Time", style="dim")
    table.add_column("Action")
    table.add_column("Description")
    table.add_column("Status")

    for entry in entries:
        # Format timestamp
        time_str = entry.timestamp.split("T")[1].split(".")[0] if "T" in entry.timestamp else entry.timestamp

        # Status color
        status_str = entry.status
        if entry.status == "executed":
            status_str = f"[green]{entry.status}[/green]"
        elif entry.status == "conflict":
            status_str = f"[yellow]{entry.status}[/yellow]"
        elif entry.status == "failed":
            status_str = f"[red]{entry.status}[/red]"
        elif entry.status == "dry_run":
            status_str = f"[cyan]{entry.status}[/cyan]"

        description = entry.action_description
        if len(description) > 50:
            description = description[:50] + "..."
        table.add_row(
            time_str,
            escape(entry.action_type),
            escape(description),
            status_str
        )

    console.print(table)


@guardfs.command()
@click.pass_context
def init(ctx):
    """Write a settings file with the defaults, unless one exists."""
    config_path = ctx.parent.params["config_path"]
    if Path(config_path).exists():
        console.print(f"Cannot write! {config_path} already exists", style="yellow",
                      markup=False, highlight=False)
        return
    save_settings(Settings(), config_path)
    console.print(f"[green]Settings written:[/green] {escape(config_path)}")


if __name__ == "__main__":
    guardfs()
