"""CLI entry point for virtual-coach."""

import click

from . import __version__
from .commands import exercises, generate, init, logs, play, serve
from .commands.base import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="virtual-coach")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    help="Log level for diagnostic output (default: WARNING)",
)
def main(log_level: str):
    """virtual-coach: workout plan generator and training player.

    Build a workout from your goal, target muscles, difficulty and available
    time, then follow it with a countdown timer.

    Example usage:

        # Initialize the project
        virtual-coach init

        # Generate a plan
        virtual-coach generate --goal weight_loss -m legs -m core -t 30

        # Play it and review your history
        virtual-coach play
        virtual-coach logs list
    """
    configure_logging(log_level)


# Register commands
main.add_command(init)
main.add_command(generate)
main.add_command(play)
main.add_command(exercises)
main.add_command(logs)
main.add_command(serve)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
