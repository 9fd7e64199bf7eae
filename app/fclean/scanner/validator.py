"""Project validation predicate.

A directory is a Flutter project when it directly contains a
``pubspec.yaml`` file and a ``lib`` directory. Only existence is
checked; neither entry is read or parsed.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST_NAME = "pubspec.yaml"
DEFAULT_SOURCE_DIR_NAME = "lib"


class ProjectValidator:
    """Decides whether a directory looks like a target project.

    Args:
        manifest_name: File that must exist directly inside the directory.
        source_dir_name: Subdirectory that must exist directly inside the directory.
    """

    def __init__(
        self,
        manifest_name: str = DEFAULT_MANIFEST_NAME,
        source_dir_name: str = DEFAULT_SOURCE_DIR_NAME,
    ) -> None:
        self._manifest_name = manifest_name
        self._source_dir_name = source_dir_name

    @property
    def manifest_name(self) -> str:
        """Name of the required manifest file."""
        return self._manifest_name

    @property
    def source_dir_name(self) -> str:
        """Name of the required source directory."""
        return self._source_dir_name

    def is_valid_project(self, path: Path) -> bool:
        """Check if a directory contains both the manifest and the source folder.

        Symbolic links are rejected without being dereferenced. Access
        errors (permission denied, path removed mid-scan) are treated as
        "not a project" rather than raised.

        Args:
            path: Directory to check.

        Returns:
            True if the directory is a project, False otherwise.
        """
        try:
            if path.is_symlink() or not path.is_dir():
                return False
            return (path / self._manifest_name).is_file() and (
                path / self._source_dir_name
            ).is_dir()
        except OSError as e:
            logger.debug("Cannot validate %s: %s", path, e)
            return False


def is_valid_project(path: Path) -> bool:
    """Check if a directory is a Flutter project using the default names.

    Args:
        path: Directory to check.

    Returns:
        True if ``path`` holds ``pubspec.yaml`` and ``lib/``.
    """
    return ProjectValidator().is_valid_project(path)
