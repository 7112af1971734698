"""Command line entry point for pit-wall."""

import logging
import sys
import time
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.text import Text

from pit_wall import __version__
from pit_wall.progress import Progress
from pit_wall.utils.config import Config
from pit_wall.utils.duration import format_duration

# Configure logging
logging.basicConfig(level=logging.WARNING)
logger = logging.getLogger(__name__)

console = Console()


def setup_config(config_path: Optional[Path] = None) -> Config:
    """Setup and return configuration instance.

    Args:
        config_path: Optional path to config file

    Returns:
        Configuration instance
    """
    return Config(config_path)


def apply_log_level(config: Config, verbose: bool) -> None:
    """Set the root log level from the config, or INFO when verbose."""
    if verbose:
        logging.getLogger().setLevel(logging.INFO)
        return

    level_name = str(config.get("log_level", "WARNING")).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        logger.warning(f"Unknown log level '{level_name}' in config, using WARNING")
        level = logging.WARNING
    logging.getLogger().setLevel(level)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path),
              help="Path to a JSON config file")
@click.pass_context
def main(ctx: click.Context, verbose: bool, config_path: Optional[Path]) -> None:
    """pit-wall - report progress and ETA for unit-counted jobs."""
    config = setup_config(config_path)
    apply_log_level(config, verbose)
    ctx.obj = config

    if verbose:
        console.print(f"[bold green]pit-wall v{__version__}[/bold green]")


@main.command("estimate")
@click.argument("total", type=click.IntRange(min=0))
@click.argument("done", type=click.IntRange(min=0))
@click.option("--elapsed", "-e", type=click.FloatRange(min=0), default=0.0,
              help="Seconds since the job started")
@click.option("--title", "-t", help="Job title (defaults to the configured title)")
@click.pass_obj
def estimate_command(
    config: Config,
    total: int,
    done: int,
    elapsed: float,
    title: Optional[str]
) -> None:
    """Print the progress line for DONE of TOTAL units of work."""
    try:
        title = title or config.get("title", "job")
        progress = Progress(title, total, started_at=time.monotonic() - elapsed)
        progress.increment_work_done_by(done)
        logger.info(f"Estimating {progress!r} after {elapsed}s")

        console.print(Text(progress.progress_string()), soft_wrap=True)

    except Exception as e:
        console.print(f"[red]Error: {str(e)}[/red]")
        sys.exit(1)


@main.command("duration")
@click.argument("seconds", type=click.FloatRange(min=0))
def duration_command(seconds: float) -> None:
    """Print SECONDS in its coarsest whole unit."""
    console.print(format_duration(seconds), soft_wrap=True)


@main.command("config")
@click.argument("key", type=click.Choice(["title", "log_level"]))
@click.argument("value")
@click.pass_obj
def config_command(config: Config, key: str, value: str) -> None:
    """Store VALUE as the default for KEY in the config file."""
    try:
        config.set(key, value)
        config.save()
        console.print(f"[green]Saved {key} to {config.config_file}[/green]")

    except OSError as e:
        console.print(f"[red]Error writing config: {str(e)}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
