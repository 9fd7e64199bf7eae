"""Cleanup command execution module.

This module provides the command runner and build artifact accounting.
"""

from fclean.runner.artifacts import DEFAULT_ARTIFACT_PATHS, artifacts_size, path_size
from fclean.runner.runner import DEFAULT_ALTERNATE_TOOL, DEFAULT_PRIMARY_TOOL, CommandRunner

__all__ = [
    "DEFAULT_ALTERNATE_TOOL",
    "DEFAULT_ARTIFACT_PATHS",
    "DEFAULT_PRIMARY_TOOL",
    "CommandRunner",
    "artifacts_size",
    "path_size",
]
