"""Key and transposition commands for worship-planner."""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from worship_planner.commands import load_config, load_data
from worship_planner.services.music import (
    InvalidKeyError,
    calculate_transposition,
    generate_transposition_chart,
    get_capo_key,
)

console = Console()
app = typer.Typer(help="Key and transposition tools")


@app.command("transpose")
def transpose(
    original_key: str = typer.Argument(..., help="Key the song is written in"),
    target_key: str = typer.Argument(..., help="Key to play in"),
) -> None:
    """Show the semitone move between two keys."""
    try:
        info = calculate_transposition(original_key, target_key)
    except InvalidKeyError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(f"[cyan]{original_key} -> {target_key}:[/cyan] {info.description}")
    if info.capo_suggestion:
        console.print(f"[green]Capo suggestion: fret {info.capo_suggestion}[/green]")


@app.command("capo")
def capo(
    key: str = typer.Argument(..., help="Key of the chord shapes"),
    fret: int = typer.Argument(..., help="Capo fret"),
) -> None:
    """Show the sounding key for chord shapes played with a capo."""
    console.print(f"{key} with capo {fret} sounds in [bold]{get_capo_key(key, fret)}[/bold]")


@app.command("chart")
def chart(
    song_id: str = typer.Argument(..., help="Song ID"),
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Show each team member's transposition for a song."""
    config = load_config(console, config_path)
    data = load_data(console, config)

    song = data.get_song(song_id)
    if not song:
        console.print(f"[red]Song not found: {song_id}[/red]")
        raise typer.Exit(1)

    try:
        result = generate_transposition_chart(song.original_key, data.team_preferences(song_id))
    except InvalidKeyError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"{song.title} (original key {song.original_key})")
    table.add_column("User", style="cyan")
    table.add_column("Key", style="magenta")
    table.add_column("Transposition")
    table.add_column("Capo", style="green")

    for suggestion in result.suggestions:
        user = data.get_user(suggestion.user_id)
        info = suggestion.transposition
        table.add_row(
            user.name if user else suggestion.user_id,
            suggestion.preferred_key,
            info.description,
            str(info.capo_suggestion) if info.capo_suggestion else "-",
        )

    console.print(table)
    if result.most_common_key:
        count = result.key_frequency[result.most_common_key]
        console.print(f"Most requested key: [bold]{result.most_common_key}[/bold] ({count})")
