"""CLI command groups for worship-planner."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from worship_planner.config import PlannerConfig
from worship_planner.data import PlannerData
from worship_planner.logging_config import setup_logging


def load_config(console: Console, config_path: Optional[Path]) -> PlannerConfig:
    """Load configuration and start file logging.

    Args:
        console: Console for error output
        config_path: Explicit config path, or None for the default

    Returns:
        PlannerConfig

    Raises:
        typer.Exit: If the config file is missing
    """
    try:
        config = PlannerConfig.load(config_path) if config_path else PlannerConfig.load()
    except FileNotFoundError:
        console.print("[red]Config file not found. Run 'worship-planner config show' first.[/red]")
        raise typer.Exit(1)

    setup_logging(config.log_dir, config.log_level)
    return config


def load_data(console: Console, config: PlannerConfig) -> PlannerData:
    """Load the data snapshot named in the config.

    Args:
        console: Console for error output
        config: Planner configuration

    Returns:
        PlannerData

    Raises:
        typer.Exit: If the snapshot is missing, not valid JSON, or has a
            record without a required field
    """
    try:
        return PlannerData.load(config.data_path)
    except FileNotFoundError:
        console.print(f"[red]Data file not found at {config.data_path}[/red]")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]Error reading data file: {e}[/red]")
        raise typer.Exit(1)
    except KeyError as e:
        console.print(f"[red]Data file record is missing field {e}[/red]")
        raise typer.Exit(1)
