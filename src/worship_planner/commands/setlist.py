"""Setlist commands for worship-planner.

Generates setlists from templates and shows setlist summaries.
"""

import random
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from worship_planner.commands import load_config, load_data
from worship_planner.services.setlist import (
    InvalidTemplateError,
    SetlistSummary,
    adjust_setlist_keys,
    generate_auto_setlist,
    generate_setlist_summary,
    optimize_key_flow,
)

console = Console()
app = typer.Typer(help="Setlist operations")


def print_summary(summary: SetlistSummary) -> None:
    """Render a setlist summary."""
    console.print(
        Panel.fit(
            f"[cyan]Date:[/cyan] {summary.date}\n"
            f"[cyan]Songs:[/cyan] {summary.total_songs}\n"
            f"[cyan]Duration:[/cyan] {summary.estimated_duration} min\n"
            f"[cyan]Praise Leader:[/cyan] {summary.leaders['praise']}\n"
            f"[cyan]Worship Leader:[/cyan] {summary.leaders['worship']}\n"
            f"[cyan]Musical Director:[/cyan] {summary.leaders['musicalDirector']}",
            title=summary.title,
            border_style="green",
        )
    )

    table = Table()
    table.add_column("#", style="dim")
    table.add_column("Section", style="yellow")
    table.add_column("Title", style="cyan")
    table.add_column("Original", style="magenta")
    table.add_column("Play In", style="green")

    for section, songs in summary.songs_by_section.items():
        for song in songs:
            table.add_row(str(song.order), section, song.title, song.original_key, song.preferred_key)

    console.print(table)

    for section, missing in summary.shortfalls.items():
        console.print(f"[yellow]{section}: {missing} song(s) short[/yellow]")

    for note in summary.notes:
        console.print(f"[dim]- {note}[/dim]")


@app.command("generate")
def generate(
    template_id: str = typer.Option(..., "--template", "-t", help="Template ID"),
    service_id: str = typer.Option(..., "--service", "-s", help="Recurring service ID"),
    service_date: str = typer.Option(..., "--date", "-d", help="Service date (YYYY-MM-DD)"),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        help="Random seed for song selection (defaults to config)",
    ),
    adjust: bool = typer.Option(
        True,
        "--adjust/--no-adjust",
        help="Adjust keys to the musical director's preferences",
    ),
    optimize: bool = typer.Option(
        False,
        "--optimize",
        "-o",
        help="Group songs by section for key flow",
    ),
    save: bool = typer.Option(
        False,
        "--save",
        help="Save the setlist into the data file",
    ),
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Generate a setlist for a service from a template."""
    config = load_config(console, config_path)
    data = load_data(console, config)

    template = data.get_template(template_id)
    if not template:
        console.print(f"[red]Template not found: {template_id}[/red]")
        raise typer.Exit(1)

    if seed is None:
        seed = config.random_seed

    try:
        setlist = generate_auto_setlist(
            template,
            data.songs,
            data.users,
            service_date,
            service_id,
            rng=random.Random(seed),
        )
    except InvalidTemplateError as e:
        console.print(f"[red]Invalid template: {e}[/red]")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if adjust and setlist.musical_director:
        setlist = adjust_setlist_keys(setlist, data.get_user(setlist.musical_director), data.songs)

    if optimize:
        setlist = optimize_key_flow(setlist, data.songs)

    print_summary(generate_setlist_summary(setlist, data.songs, data.users, template))

    if save:
        data.upsert_setlist(setlist)
        data.save(config.data_path)
        console.print(f"[green]Saved setlist {setlist.id}[/green]")


@app.command("summary")
def summary(
    setlist_id: str = typer.Argument(..., help="Setlist ID"),
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Show a saved setlist."""
    config = load_config(console, config_path)
    data = load_data(console, config)

    setlist = data.get_setlist(setlist_id)
    if not setlist:
        console.print(f"[red]Setlist not found: {setlist_id}[/red]")
        raise typer.Exit(1)

    print_summary(generate_setlist_summary(setlist, data.songs, data.users))
