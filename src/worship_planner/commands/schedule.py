"""Schedule commands for worship-planner.

Shows upcoming service occurrences and manages setlist reminders.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from worship_planner.commands import load_config, load_data
from worship_planner.services.scheduling import (
    calculate_reminder_dates,
    format_service_time,
    generate_upcoming_notifications,
    get_active_notifications,
    get_day_name,
    get_next_service_date,
    is_setlist_overdue,
)

console = Console()
app = typer.Typer(help="Service schedule and reminders")


def _parse_from(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        console.print(f"[red]Invalid date: {value}[/red]")
        raise typer.Exit(1)


@app.command("next")
def next_services(
    from_date: Optional[str] = typer.Option(
        None,
        "--from",
        help="Reference date (YYYY-MM-DD, defaults to now)",
    ),
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Show the next occurrence of each active service."""
    config = load_config(console, config_path)
    data = load_data(console, config)
    reference = _parse_from(from_date)

    table = Table(title="Upcoming Services")
    table.add_column("Service", style="cyan")
    table.add_column("When", style="green")
    table.add_column("Date")
    table.add_column("Setlist Due", style="yellow")
    table.add_column("Team Reminder", style="yellow")
    table.add_column("Status")

    for service in data.recurring_services:
        if not service.active:
            continue
        try:
            day_name = get_day_name(service.day_of_week)
            occurrence = get_next_service_date(service, reference)
        except ValueError as e:
            console.print(f"[red]Service {service.id} has an invalid schedule: {e}[/red]")
            raise typer.Exit(1)

        reminders = calculate_reminder_dates(service, occurrence)
        target_date = occurrence.date().isoformat()
        has_setlist = any(
            s.service_id == service.id and s.date == target_date for s in data.setlists
        )

        if has_setlist:
            status = "[green]Setlist ready[/green]"
        elif is_setlist_overdue(service, target_date, has_setlist, now=reference):
            status = "[red]Overdue[/red]"
        else:
            status = "[dim]Pending[/dim]"

        table.add_row(
            service.title,
            f"{day_name} {format_service_time(service.time)}",
            target_date,
            reminders.setlist_reminder.date().isoformat(),
            reminders.team_reminder.date().isoformat(),
            status,
        )

    console.print(table)


@app.command("notify")
def notify(
    weeks: Optional[int] = typer.Option(
        None,
        "--weeks",
        "-w",
        help="Weeks to look ahead (defaults to config)",
    ),
    save: bool = typer.Option(
        False,
        "--save",
        help="Save new reminders into the data file",
    ),
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Generate setlist reminders for upcoming services."""
    config = load_config(console, config_path)
    data = load_data(console, config)

    assignee = config.default_assignee
    if not assignee:
        director = data.first_musical_director()
        assignee = director.id if director else ""

    try:
        created = generate_upcoming_notifications(
            data.recurring_services,
            data.notifications,
            weeks_ahead=weeks if weeks is not None else config.weeks_ahead,
            assigned_to=assignee,
        )
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if not created:
        console.print("[yellow]No new reminders.[/yellow]")
        return

    table = Table(title="New Reminders")
    table.add_column("ID", style="dim")
    table.add_column("Service", style="cyan")
    table.add_column("Date", style="green")
    table.add_column("Message")

    for notification in created:
        table.add_row(
            notification.id, notification.service_id, notification.target_date, notification.message
        )

    console.print(table)
    console.print(f"[green]Created {len(created)} reminder(s)[/green]")

    if save:
        data.notifications.extend(created)
        data.save(config.data_path)
        console.print(f"[green]Saved to {config.data_path}[/green]")


@app.command("active")
def active(
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Show pending reminders for services in the coming week."""
    config = load_config(console, config_path)
    data = load_data(console, config)

    notifications = get_active_notifications(
        data.notifications, window_days=config.active_window_days
    )
    if not notifications:
        console.print("[yellow]No active reminders.[/yellow]")
        return

    for notification in notifications:
        console.print(f"[cyan]{notification.target_date}[/cyan] {notification.message}")
