"""Main CLI application."""

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .init import init_command
from .simulate import simulate_command
from .trending import trending_command

app = typer.Typer(
    name="newstrend",
    help="Location-aware trending news articles",
    no_args_is_help=True,
)

# Register commands
app.command("init")(init_command)
app.command("trending")(trending_command)
app.command("simulate")(simulate_command)


if __name__ == "__main__":
    app()
