"""Project discovery module.

This module provides the project validation predicate and the
recursive, symlink-safe directory scanner.
"""

from fclean.scanner.scanner import (
    DirectoryScanner,
    RootNotADirectoryError,
    RootNotFoundError,
    RootPathError,
    RootUnreadableError,
    ScanError,
    check_root,
)
from fclean.scanner.validator import ProjectValidator, is_valid_project

__all__ = [
    "DirectoryScanner",
    "ProjectValidator",
    "RootNotADirectoryError",
    "RootNotFoundError",
    "RootPathError",
    "RootUnreadableError",
    "ScanError",
    "check_root",
    "is_valid_project",
]
