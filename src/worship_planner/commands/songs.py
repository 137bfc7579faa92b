"""Song library commands for worship-planner."""

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from worship_planner.commands import load_config, load_data
from worship_planner.services.music import WORSHIP_TAGS
from worship_planner.services.song_import import (
    COMMON_WORSHIP_TAGS,
    generate_song_template,
    process_bulk_import,
    suggest_tags,
)

console = Console()
app = typer.Typer(help="Song library operations")


@app.command("import")
def import_songs(
    file: Path = typer.Argument(..., help="JSON file with a list of songs"),
    save: bool = typer.Option(
        False,
        "--save",
        help="Save imported songs into the data file",
    ),
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Validate and import songs from a JSON file."""
    config = load_config(console, config_path)
    data = load_data(console, config)

    try:
        rows = json.loads(file.read_text(encoding="utf-8"))
    except FileNotFoundError:
        console.print(f"[red]File not found: {file}[/red]")
        raise typer.Exit(1)
    except json.JSONDecodeError as e:
        console.print(f"[red]Invalid JSON: {e}[/red]")
        raise typer.Exit(1)

    if not isinstance(rows, list):
        console.print("[red]Import file must contain a JSON list of songs[/red]")
        raise typer.Exit(1)

    result = process_bulk_import(rows, data.songs)

    if result.imported:
        table = Table(title="Imported Songs")
        table.add_column("ID", style="dim")
        table.add_column("Title", style="cyan")
        table.add_column("Key", style="magenta")
        table.add_column("Tags", style="green")
        for song in result.imported:
            table.add_row(song.id, song.title, song.original_key, ", ".join(song.tags) or "-")
        console.print(table)

    for title in result.duplicates:
        console.print(f"[yellow]Skipped duplicate: {title}[/yellow]")

    for row_error in result.errors:
        title = row_error.row.get("title") or "(untitled)"
        console.print(f"[red]{title}: {'; '.join(row_error.errors)}[/red]")

    console.print(
        f"[green]{len(result.imported)} imported[/green], "
        f"{len(result.duplicates)} duplicates, {len(result.errors)} invalid"
    )

    if save and result.imported:
        data.songs.extend(result.imported)
        data.save(config.data_path)
        console.print(f"[green]Saved to {config.data_path}[/green]")

    if not result.success:
        raise typer.Exit(1)


@app.command("suggest-tags")
def suggest(title: str = typer.Argument(..., help="Song title")) -> None:
    """Suggest tags for a song title."""
    tags = suggest_tags(title)
    if not tags:
        console.print("[yellow]No suggestions.[/yellow]")
        return
    console.print(", ".join(tags))


@app.command("tags")
def tags() -> None:
    """List reference tags for classifying songs."""
    table = Table(title="Reference Tags")
    table.add_column("Group", style="cyan")
    table.add_column("Tags", style="green")

    grouped = set()
    for group, group_tags in COMMON_WORSHIP_TAGS.items():
        table.add_row(group, ", ".join(group_tags))
        grouped.update(group_tags)

    other = [tag for tag in WORSHIP_TAGS if tag not in grouped]
    if other:
        table.add_row("other", ", ".join(other))

    console.print(table)


@app.command("template")
def template() -> None:
    """Print an example import row."""
    console.print_json(generate_song_template())
