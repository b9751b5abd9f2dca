"""CLI interface for sessionkeeper."""

import json
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich.markup import escape

from sessionkeeper import __version__
from sessionkeeper.analyzer import aggregate, largest_projects, oldest_sessions
from sessionkeeper.config import get_settings
from sessionkeeper.display import (
    confirm_action,
    console,
    show_content,
    show_deletion_preview,
    show_deletion_result,
    show_error,
    show_projects,
    show_root,
    show_sessions,
    show_statistics,
)
from sessionkeeper.errors import SessionKeeperError
from sessionkeeper.logging_setup import configure_logging
from sessionkeeper.store import SessionStore
from sessionkeeper.transcript import render_transcript

# Create Typer app
app = typer.Typer(
    name="sessionkeeper",
    help="Inspect and clean up Claude Code session transcripts",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"sessionkeeper version {__version__}")
        raise typer.Exit()


def _store(ctx: typer.Context) -> SessionStore:
    return ctx.ensure_object(dict)["store"]


def _require_root(store: SessionStore) -> Path:
    root = store.locate_root()
    if root is None:
        show_root(None, store.locator.candidates())
        raise typer.Exit(1)
    return root


def _print_json(items) -> None:
    if isinstance(items, list):
        data = [item.model_dump(mode="json") for item in items]
    else:
        data = items.model_dump(mode="json")
    # One JSON document on stdout, never wrapped
    typer.echo(json.dumps(data, indent=2))


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    root: Optional[Path] = typer.Option(
        None, "--root", help="Projects directory to manage (skips auto-detection)."
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Show debug logs on stderr."),
) -> None:
    """sessionkeeper - inspect and clean up Claude Code sessions."""
    try:
        settings = get_settings(root=root, log_level="DEBUG" if verbose else None)
    except ValidationError as e:
        show_error(f"Invalid configuration: {e.errors()[0]['msg']}")
        raise typer.Exit(1)

    configure_logging(settings.log_level)
    ctx.ensure_object(dict)["store"] = SessionStore(settings=settings)

    # If no command specified, show statistics
    if ctx.invoked_subcommand is None:
        ctx.invoke(stats, ctx)


@app.command()
def where(ctx: typer.Context) -> None:
    """Show the managed projects directory."""
    store = _store(ctx)
    root = store.locate_root()
    show_root(root, store.locator.candidates())
    if root is None:
        raise typer.Exit(1)


@app.command()
def stats(ctx: typer.Context) -> None:
    """Show session statistics."""
    store = _store(ctx)
    _require_root(store)

    projects = store.scan_projects()
    show_statistics(aggregate(projects), largest_projects(projects), oldest_sessions(projects))


@app.command()
def projects(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table."),
) -> None:
    """List all projects."""
    store = _store(ctx)
    _require_root(store)

    found = store.scan_projects()
    if as_json:
        _print_json(found)
    else:
        show_projects(found)


@app.command()
def sessions(
    ctx: typer.Context,
    project: str = typer.Argument(..., help="Project name or path"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table."),
) -> None:
    """List the sessions of one project."""
    store = _store(ctx)
    _require_root(store)

    try:
        found = store.get_project(project)
    except SessionKeeperError as e:
        show_error(str(e))
        raise typer.Exit(1)

    if as_json:
        _print_json(found.sessions)
    else:
        show_sessions(found.sessions, title=escape(found.name))


@app.command()
def old(
    ctx: typer.Context,
    days: int = typer.Argument(..., min=0, help="Minimum age in days"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table."),
) -> None:
    """List sessions at least DAYS old across all projects."""
    store = _store(ctx)
    _require_root(store)

    found = store.filter_sessions_by_age(days)
    if as_json:
        _print_json(found)
    else:
        show_sessions(found, title=f"Sessions at least {days} days old")


@app.command()
def clean(
    ctx: typer.Context,
    older_than: int = typer.Option(
        ..., "--older-than", "-o", min=0, help="Delete sessions at least this many days old"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Simulate without deleting"),
    yes: bool = typer.Option(False, "-y", "--yes", help="Skip confirmation prompts"),
) -> None:
    """Delete every session older than a number of days."""
    store = _store(ctx)
    _require_root(store)

    candidates = store.filter_sessions_by_age(older_than)
    if not candidates:
        console.print(f"[yellow]No sessions are {older_than} days old or older.[/yellow]")
        raise typer.Exit(0)

    show_deletion_preview(candidates, older_than, dry_run=dry_run)
    if dry_run:
        return

    if not yes:
        console.print()
        if not confirm_action("Permanently delete these sessions?"):
            console.print("[yellow]Cancelled[/yellow]")
            raise typer.Exit(0)

    # Rescans before deleting; the preview above is never reused
    result = store.delete_old_sessions(older_than)
    show_deletion_result(result)

    remaining = store.get_statistics()
    console.print(
        f"[dim]Remaining: {remaining.total_sessions} sessions, {remaining.total_size_human}[/dim]"
    )
    if not result.success:
        raise typer.Exit(1)


@app.command()
def delete(
    ctx: typer.Context,
    session_paths: List[str] = typer.Argument(..., help="Session files (absolute or root-relative)"),
    yes: bool = typer.Option(False, "-y", "--yes", help="Skip confirmation prompts"),
) -> None:
    """Delete specific session files."""
    store = _store(ctx)
    _require_root(store)

    if not yes:
        if not confirm_action(f"Permanently delete {len(session_paths)} session(s)?"):
            console.print("[yellow]Cancelled[/yellow]")
            raise typer.Exit(0)

    result = store.delete_sessions(session_paths)
    show_deletion_result(result)
    if not result.success:
        raise typer.Exit(1)


@app.command(name="delete-project")
def delete_project(
    ctx: typer.Context,
    project: str = typer.Argument(..., help="Project name or path"),
    yes: bool = typer.Option(False, "-y", "--yes", help="Skip confirmation prompts"),
) -> None:
    """Delete a project and all of its sessions."""
    store = _store(ctx)
    _require_root(store)

    try:
        found = store.get_project(project)
    except SessionKeeperError as e:
        show_error(str(e))
        raise typer.Exit(1)

    console.print(
        f"[bold]{escape(found.name)}[/bold]: {found.session_count} sessions, {found.total_size_human}"
    )
    if not yes:
        if not confirm_action("Permanently delete this project and all its sessions?"):
            console.print("[yellow]Cancelled[/yellow]")
            raise typer.Exit(0)

    try:
        store.delete_project(project)
    except SessionKeeperError as e:
        show_error(str(e))
        raise typer.Exit(1)

    console.print(f"[green]Deleted project {escape(found.name)}[/green]")


@app.command()
def show(
    ctx: typer.Context,
    session_path: str = typer.Argument(..., help="Session file (absolute or root-relative)"),
    raw: bool = typer.Option(False, "--raw", help="Print the file exactly as stored"),
) -> None:
    """Show the full content of a session."""
    store = _store(ctx)
    _require_root(store)

    try:
        content = store.get_session_content(session_path)
    except SessionKeeperError as e:
        show_error(str(e))
        raise typer.Exit(1)

    if raw:
        typer.echo(content, nl=False)
    else:
        show_content(Path(session_path).name, render_transcript(content))


if __name__ == "__main__":
    app()
