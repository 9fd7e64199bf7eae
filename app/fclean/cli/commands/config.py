"""Configuration commands.

Provides commands to show the effective configuration, write a
default config file and print the config file location.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from fclean.core.config import CleanerConfig, ConfigError, load_config, save_config
from fclean.core.paths import get_config_path
from fclean.utils.formatting import console, print_error, print_success, print_warning

app = typer.Typer(
    help="Show and initialize fclean configuration.",
    no_args_is_help=True,
)


@app.command()
def show(
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to a config file."),
    ] = None,
) -> None:
    """Show the effective configuration."""
    path = config_path or get_config_path()
    try:
        config = load_config(path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    source = str(path) if path.exists() else "built-in defaults"
    table = Table(
        title=f"Configuration ({escape(source)})",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Setting", no_wrap=True)
    table.add_column("Value")

    table.add_row("manifest_name", escape(config.manifest_name))
    table.add_row("source_dir_name", escape(config.source_dir_name))
    table.add_row("primary_tool", escape(config.primary_tool))
    table.add_row("alternate_tool", escape(config.alternate_tool))
    table.add_row("artifact_paths", escape("\n".join(config.artifact_paths)) or "-")
    table.add_row("measure_freed_bytes", str(config.measure_freed_bytes).lower())

    console.print(table)


@app.command()
def init(
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path of the config file to write."),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with the default settings."""
    path = config_path or get_config_path()

    if path.exists() and not force:
        print_warning(f"Config file already exists: {path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        saved = save_config(CleanerConfig(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")


@app.command()
def path() -> None:
    """Print the config file location."""
    typer.echo(str(get_config_path()))
