"""Clean command implementation.

Discovers Flutter projects below a directory and runs
``flutter clean`` (or ``fvm flutter clean``) in each one.
"""

from pathlib import Path
from typing import Annotated

import typer

from fclean.cli.display import ConsoleNotifier
from fclean.core.config import ConfigError, load_config
from fclean.core.orchestrator import BatchOrchestrator
from fclean.models.project import CleanOptions, ScanOptions
from fclean.scanner.scanner import DirectoryScanner
from fclean.utils.formatting import console, print_error

# Exit code when the root directory is missing or not a directory
EXIT_ROOT_INVALID = 2


def clean(
    ctx: typer.Context,
    directory: Annotated[
        Path,
        typer.Argument(help="Directory to search for Flutter projects."),
    ] = Path("."),
    fvm: Annotated[
        bool,
        typer.Option("--fvm", help="Use FVM (Flutter Version Management) to run flutter."),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Show what would be cleaned without running any command.",
        ),
    ] = False,
    measure: Annotated[
        bool | None,
        typer.Option(
            "--measure/--no-measure",
            help="Report disk space freed by each cleanup.",
            show_default=False,
        ),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to a config file."),
    ] = None,
) -> None:
    """Run flutter clean in every Flutter project below DIRECTORY."""
    try:
        config = load_config(config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    quiet = bool(ctx.obj and ctx.obj.get("quiet"))
    notifier = ConsoleNotifier(quiet=quiet)
    scanner = DirectoryScanner(validator=config.create_validator(), notifier=notifier)
    runner = config.create_runner(notifier=notifier)
    orchestrator = BatchOrchestrator(scanner, runner, notifier)

    if dry_run:
        console.print(
            "[dry_run]Running in dry-run mode - no actual cleaning will be performed[/]\n"
        )

    summary = orchestrator.run(
        directory,
        scan_options=ScanOptions(root_path=directory),
        clean_options=CleanOptions(
            use_alternate_runner=fvm,
            dry_run=dry_run,
            measure_freed_bytes=config.measure_freed_bytes if measure is None else measure,
        ),
    )

    if summary.root_error is not None:
        raise typer.Exit(code=EXIT_ROOT_INVALID)

    if summary.has_failures:
        raise typer.Exit(code=1)
