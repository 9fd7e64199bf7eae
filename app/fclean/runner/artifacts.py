"""Build artifact size accounting.

Measures the on-disk size of the well-known build outputs of a Flutter
project so the space released by a cleanup can be reported. Measurement
is best-effort: unreadable entries contribute zero.
"""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

# Paths relative to the project root that `flutter clean` removes
DEFAULT_ARTIFACT_PATHS: tuple[str, ...] = (
    "build",
    ".dart_tool",
    ".flutter-plugins",
    ".flutter-plugins-dependencies",
    "ios/Pods",
    "ios/.symlinks",
    "android/.gradle",
    "macos/Pods",
    "linux/flutter/ephemeral",
    "windows/flutter/ephemeral",
)


def path_size(path: Path) -> int:
    """Get the size in bytes of a file or directory tree.

    Symbolic links are counted by their own size and never followed.
    Entries that cannot be read contribute zero.

    Args:
        path: File or directory to measure.

    Returns:
        Size in bytes (0 if the path does not exist).
    """
    try:
        stat = path.lstat()
    except OSError:
        return 0

    if path.is_symlink() or not path.is_dir():
        return stat.st_size

    total = 0
    for dirpath, _dirnames, filenames in os.walk(path, onerror=_log_walk_error):
        for filename in filenames:
            try:
                total += os.lstat(os.path.join(dirpath, filename)).st_size
            except OSError:
                continue
    return total


def artifacts_size(project: Path, artifact_paths: tuple[str, ...] = DEFAULT_ARTIFACT_PATHS) -> int:
    """Sum the sizes of the build artifacts present in a project.

    Args:
        project: Project root directory.
        artifact_paths: Artifact locations relative to the project root.

    Returns:
        Total size in bytes of all artifact paths that exist.
    """
    return sum(path_size(project / relative) for relative in artifact_paths)


def _log_walk_error(error: OSError) -> None:
    """Log a directory that could not be listed while measuring."""
    logger.debug("Cannot measure %s: %s", error.filename, error.strerror)
