"""Helpers shared by CLI commands."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..config import Config
from ..db import ArticleStore, EventStore
from ..errors import InvalidConfiguration
from ..trending import TrendingService

console = Console()


def load_cli_config(config_path: Optional[Path]) -> Config:
    """Load configuration or exit with a readable message."""
    config = Config(config_path)
    try:
        config.config
    except FileNotFoundError:
        console.print(f"[red]Config not found at {config.config_path}. Run 'newstrend init' first.[/red]")
        raise typer.Exit(1)
    except InvalidConfiguration as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    return config


def build_service(config: Config) -> TrendingService:
    """Wire Postgres-backed stores into a trending service."""
    db_config = config.get_db_config()
    return TrendingService(
        ArticleStore(db_config),
        EventStore(db_config),
        config=config.config.trending,
        simulation=config.config.simulation,
    )
