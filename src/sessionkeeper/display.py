"""Rich terminal display for sessionkeeper."""

from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from sessionkeeper.formatting import format_age, format_size, truncate
from sessionkeeper.models import DeletionResult, Project, Session, Statistics

console = Console()

PREVIEW_COLUMN_WIDTH = 60


def age_color(age_days: int) -> str:
    """Color for an age: recent sessions green, stale ones red."""
    if age_days >= 90:
        return "red"
    elif age_days >= 30:
        return "yellow"
    return "green"


def age_label(age_days: int) -> str:
    """Styled age label."""
    color = age_color(age_days)
    return f"[{color}]{format_age(age_days)}[/{color}]"


def one_line(text: Optional[str], width: int = PREVIEW_COLUMN_WIDTH) -> str:
    """Collapse whitespace and truncate for a table cell."""
    if not text:
        return ""
    return escape(truncate(" ".join(text.split()), width))


def show_root(root: Optional[Path], candidates: list[Path]) -> None:
    """Display the managed root, or where it was looked for."""
    if root is not None:
        console.print(f"Managed root: [bold]{escape(str(root))}[/bold]")
        return

    console.print("[yellow]No Claude Code projects directory found.[/yellow]")
    console.print("Looked in:")
    for candidate in candidates:
        console.print(f"  • {escape(str(candidate))}")
    console.print("[dim]Use --root or SESSIONKEEPER_ROOT to point at it explicitly.[/dim]")


def show_statistics(
    stats: Statistics,
    largest: list[Project] | None = None,
    oldest: list[tuple[Project, Session]] | None = None,
) -> None:
    """Display global statistics and rankings."""
    table = Table(title="Session Statistics", show_header=True, header_style="bold")
    table.add_column("Projects", justify="right")
    table.add_column("Sessions", justify="right")
    table.add_column("Total Size", justify="right")
    table.add_row(
        str(stats.total_projects),
        str(stats.total_sessions),
        f"[bold]{stats.total_size_human}[/bold]",
    )
    console.print(table)

    if largest:
        console.print()
        console.print("[bold]Largest Projects[/bold]")
        ranked = Table(show_header=True, header_style="bold blue")
        ranked.add_column("Project", style="blue")
        ranked.add_column("Sessions", justify="right")
        ranked.add_column("Size", justify="right")
        for project in largest:
            ranked.add_row(escape(project.name), str(project.session_count), project.total_size_human)
        console.print(ranked)

    if oldest:
        console.print()
        console.print("[bold]Oldest Sessions[/bold]")
        old = Table(show_header=True, header_style="bold yellow")
        old.add_column("Project")
        old.add_column("Session")
        old.add_column("Age", justify="right")
        old.add_column("Size", justify="right")
        for project, session in oldest:
            old.add_row(escape(project.name), escape(session.name), age_label(session.age_days), session.size_human)
        console.print(old)


def show_projects(projects: list[Project]) -> None:
    """Display all projects."""
    if not projects:
        console.print("[yellow]No projects found.[/yellow]")
        return

    table = Table(title="Projects", show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Project", style="cyan")
    table.add_column("Sessions", justify="right")
    table.add_column("Size", justify="right")
    table.add_column("Latest")

    for i, project in enumerate(projects, 1):
        table.add_row(
            str(i),
            escape(project.name),
            str(project.session_count),
            project.total_size_human,
            one_line(project.latest_preview),
        )

    console.print(table)
    total = sum(p.total_size for p in projects)
    console.print(f"[dim]{len(projects)} projects, {format_size(total)}[/dim]")


def show_sessions(sessions: list[Session], title: str = "Sessions") -> None:
    """Display a list of sessions."""
    if not sessions:
        console.print("[yellow]No sessions found.[/yellow]")
        return

    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Session")
    table.add_column("Age", justify="right")
    table.add_column("Size", justify="right")
    table.add_column("Preview")

    for session in sessions:
        table.add_row(
            escape(session.name),
            age_label(session.age_days),
            session.size_human,
            one_line(session.content_preview),
        )

    console.print(table)
    total = sum(s.size for s in sessions)
    console.print(f"[dim]{len(sessions)} sessions, {format_size(total)}[/dim]")


def show_deletion_preview(sessions: list[Session], days: int, dry_run: bool = False) -> None:
    """Display the sessions an age sweep would remove."""
    if dry_run:
        console.print("[yellow]DRY RUN - No files will be deleted[/yellow]\n")

    show_sessions(sessions, title=f"Sessions at least {days} days old")
    total = sum(s.size for s in sessions)
    console.print(f"\n[bold]Total to delete: {len(sessions)} sessions, {format_size(total)}[/bold]")


def show_deletion_result(result: DeletionResult, item_type: str = "sessions") -> None:
    """Display the outcome of a deletion."""
    for failure in result.failures:
        console.print(f"  [red]✗[/red] {escape(failure.path)}: {failure.reason.value} - {escape(failure.detail)}")

    color = "green" if result.success else "yellow"
    console.print(f"[{color}]Deleted {result.deleted_count} {item_type}[/{color}]")
    if result.failures:
        console.print(f"[red]{result.failure_count} failed[/red]")


def show_content(name: str, content: str) -> None:
    """Display the full content of a session."""
    console.print(Panel(Text(content), title=f"[bold]{escape(name)}[/bold]", border_style="blue"))


def show_error(message: str) -> None:
    """Display an error message."""
    console.print(f"[red]Error: {escape(message)}[/red]")


def confirm_action(message: str) -> bool:
    """Ask for confirmation."""
    from rich.prompt import Confirm

    return Confirm.ask(message)
