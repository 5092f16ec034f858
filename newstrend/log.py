"""Logging setup."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: int = logging.INFO, console: Optional[Console] = None) -> None:
    """Route all package logging through a rich handler on the root logger."""
    handler = RichHandler(
        console=console,
        rich_tracebacks=True,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)
