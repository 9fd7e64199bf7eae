"""CLI package for fclean.

This package contains the Typer application and all subcommands.
"""

from fclean.cli.main import app

__all__ = ["app"]
