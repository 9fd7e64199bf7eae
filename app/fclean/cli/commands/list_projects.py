"""List command implementation.

Discovers Flutter projects below a directory without cleaning them.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from fclean.cli.commands.clean import EXIT_ROOT_INVALID
from fclean.cli.display import ConsoleNotifier, create_projects_table
from fclean.core.config import ConfigError, load_config
from fclean.models.project import ValidatedProject
from fclean.scanner.scanner import DirectoryScanner, RootPathError
from fclean.utils.formatting import console, print_error, print_info


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def list_projects(
    directory: Annotated[
        Path,
        typer.Argument(help="Directory to search for Flutter projects."),
    ] = Path("."),
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to a config file."),
    ] = None,
) -> None:
    """List the Flutter projects found below DIRECTORY."""
    try:
        config = load_config(config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    root = directory.absolute()
    scanner = DirectoryScanner(
        validator=config.create_validator(),
        notifier=ConsoleNotifier(show_spinner=False),
    )

    try:
        projects = scanner.discover(root)
    except RootPathError as e:
        print_error(str(e))
        raise typer.Exit(code=EXIT_ROOT_INVALID) from e

    if output_format == OutputFormat.JSON:
        _print_json(projects)
        return

    if not projects:
        print_info("No Flutter projects found in the specified directory.")
        return

    console.print(create_projects_table(projects, root))
    console.print(f"\n[dim]Found {len(projects)} Flutter project(s)[/dim]")


def _print_json(projects: list[ValidatedProject]) -> None:
    """Display projects as JSON."""
    data = [{"name": p.name, "path": str(p.path)} for p in projects]
    console.print_json(json.dumps(data))
