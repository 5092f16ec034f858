"""Simulate command implementation."""

import logging
import threading
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..db import close_connection_pool
from ..errors import StoreUnavailable
from ..log import setup_logging
from .common import build_service, load_cli_config

console = Console()


def simulate_command(
    count: Optional[int] = typer.Option(
        None,
        "--count",
        help="Write this many events once and exit instead of running continuously",
        min=1,
    ),
    click_probability: Optional[float] = typer.Option(
        None,
        "--click-probability",
        help="Override the configured click probability",
        min=0.0,
        max=1.0,
    ),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to config.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every tick"),
) -> None:
    """Simulate user views and clicks on stored articles."""
    setup_logging(logging.DEBUG if verbose else logging.INFO, console=console)

    config = load_cli_config(config_path)
    service = build_service(config)

    if count is not None:
        try:
            written = service.simulator.simulate_burst(count, click_probability=click_probability)
        except StoreUnavailable as e:
            console.print(f"[red]❌ Simulation failed: {e}[/red]")
            raise typer.Exit(1)
        finally:
            close_connection_pool()
        console.print(f"[green]✅ Simulated {written}/{count} user events[/green]")
        return

    if click_probability is not None:
        service.simulator.config = service.simulator.config.model_copy(
            update={"click_probability": click_probability}
        )

    stop = threading.Event()
    service.cache.start_housekeeping()
    service.start_event_simulation(stop)
    console.print("[dim]Simulating events, press Ctrl+C to stop...[/dim]")

    try:
        while not stop.wait(1.0):
            pass
    except KeyboardInterrupt:
        console.print("\n[yellow]Stopping simulation[/yellow]")
    finally:
        service.stop()
        close_connection_pool()
