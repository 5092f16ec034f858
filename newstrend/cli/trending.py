"""Trending command implementation."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ..db import close_connection_pool
from ..errors import StoreUnavailable
from ..trending import cluster_key
from .common import build_service, load_cli_config

console = Console()


def trending_command(
    lat: float = typer.Option(..., "--lat", help="Query latitude", min=-90.0, max=90.0),
    lon: float = typer.Option(..., "--lon", help="Query longitude", min=-180.0, max=180.0),
    limit: int = typer.Option(5, "--limit", "-n", help="Number of articles", min=1, max=100),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to config.yaml"),
) -> None:
    """Show trending articles near a location."""
    config = load_cli_config(config_path)
    service = build_service(config)

    try:
        articles = service.get_trending_articles(lat, lon, limit)
    except StoreUnavailable as e:
        console.print(f"[red]❌ Could not compute trending articles: {e}[/red]")
        raise typer.Exit(1)
    finally:
        close_connection_pool()

    key = cluster_key(lat, lon, config.config.trending.cluster_degrees)
    if not articles:
        console.print(f"[yellow]No articles found for cluster {key}.[/yellow]")
        return

    table = Table(title=f"Trending near ({lat:.4f}, {lon:.4f}) - cluster {key}")
    table.add_column("#", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Source", style="magenta")
    table.add_column("Published", style="green")
    table.add_column("Location", style="yellow")

    for i, article in enumerate(articles, 1):
        table.add_row(
            str(i),
            article.title,
            article.source_name,
            article.publication_date.strftime("%Y-%m-%d %H:%M"),
            f"{article.latitude:.2f}, {article.longitude:.2f}",
        )

    console.print(table)
