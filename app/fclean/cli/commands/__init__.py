"""CLI commands for fclean.

This package contains all subcommand implementations.
"""

from fclean.cli.commands import clean, config, list_projects

__all__ = ["clean", "config", "list_projects"]
