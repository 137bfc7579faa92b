"""Main entry point for the worship-planner CLI.

Provides a Typer-based CLI for transposing keys, generating setlists,
and scheduling setlist reminders from a church data snapshot.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from worship_planner import __version__
from worship_planner.commands import keys as keys_commands
from worship_planner.commands import schedule as schedule_commands
from worship_planner.commands import setlist as setlist_commands
from worship_planner.commands import songs as songs_commands
from worship_planner.config import ensure_config_exists, get_config_path

console = Console()

app = typer.Typer(
    name="worship-planner",
    help="Planning tools for worship teams",
    rich_markup_mode="rich",
)

app.add_typer(keys_commands.app, name="keys", help="Key and transposition tools")
app.add_typer(setlist_commands.app, name="setlist", help="Setlist operations")
app.add_typer(schedule_commands.app, name="schedule", help="Service schedule and reminders")
app.add_typer(songs_commands.app, name="songs", help="Song library operations")


def version_callback(value: bool) -> None:
    """Callback for --version flag."""
    if value:
        console.print(f"worship-planner version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """worship-planner: Planning tools for worship teams.

    ## Commands

    * [bold cyan]keys[/bold cyan] - Transpositions, capo keys, team key charts
    * [bold cyan]setlist[/bold cyan] - Generate and review setlists
    * [bold cyan]schedule[/bold cyan] - Upcoming services and setlist reminders
    * [bold cyan]songs[/bold cyan] - Bulk import and tag suggestions

    ## Getting Started

    1. Create the config and point it at your data export:
       [dim]$ worship-planner config set data_path ~/church/data.json[/dim]

    2. Generate reminders for the next month:
       [dim]$ worship-planner schedule notify --save[/dim]
    """
    pass


@app.command()
def config(
    action: str = typer.Argument(
        ...,
        help="Action to perform (show, set, path)",
    ),
    key: str = typer.Argument(
        None,
        help="Configuration key (for set action)",
    ),
    value: str = typer.Argument(
        None,
        help="Configuration value (for set action)",
    ),
    config_path: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Manage configuration.

    Examples:
        worship-planner config show
        worship-planner config set weeks_ahead 6
        worship-planner config path
    """
    path = config_path or get_config_path()

    if action == "show":
        try:
            cfg = ensure_config_exists(path)
        except (OSError, ValueError) as e:
            console.print(f"[red]Error loading config: {e}[/red]")
            raise typer.Exit(1)

        seed = cfg.random_seed if cfg.random_seed is not None else "(not set)"
        console.print(
            Panel.fit(
                f"[cyan]Data Path:[/cyan] {cfg.data_path}\n"
                f"[cyan]Weeks Ahead:[/cyan] {cfg.weeks_ahead}\n"
                f"[cyan]Active Window:[/cyan] {cfg.active_window_days} days\n"
                f"[cyan]Default Assignee:[/cyan] {cfg.default_assignee or '(not set)'}\n"
                f"[cyan]Random Seed:[/cyan] {seed}\n"
                f"[cyan]Log Dir:[/cyan] {cfg.log_dir}\n"
                f"[cyan]Log Level:[/cyan] {cfg.log_level}",
                title="Configuration",
                border_style="green",
            )
        )

    elif action == "set":
        if not key or value is None:
            console.print("[red]Usage: worship-planner config set <key> <value>[/red]")
            raise typer.Exit(1)

        try:
            cfg = ensure_config_exists(path)
            cfg.set(key, value)
            cfg.save(path)
            console.print(f"[green]Set {key} = {value}[/green]")
        except ValueError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(1)

    elif action == "path":
        console.print(str(path))

    else:
        console.print(f"[red]Unknown action: {action}[/red]")
        console.print("Valid actions: show, set, path")
        raise typer.Exit(1)


def cli_entry() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli_entry()
