"""Recursive project discovery.

Walks a directory tree depth-first without following symbolic links
and collects every directory accepted by a ProjectValidator. Nested
projects are all reported: finding a project does not stop descent
into it.
"""

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from fclean.core.notifier import Notifier
from fclean.models.project import ValidatedProject
from fclean.scanner.validator import ProjectValidator

logger = logging.getLogger(__name__)


class ScanError(Exception):
    """Base exception for scan errors."""


class RootPathError(ScanError):
    """Raised when the scan root cannot be used.

    Attributes:
        path: The rejected root path.
    """

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(message)
        self.path = path


class RootNotFoundError(RootPathError):
    """Raised when the scan root does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, f"The provided directory does not exist: {path}")


class RootNotADirectoryError(RootPathError):
    """Raised when the scan root exists but is not a directory."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, f"The provided path is not a directory: {path}")


class RootUnreadableError(RootPathError):
    """Raised when the scan root cannot be inspected."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(path, f"Cannot access the provided directory {path}: {reason}")


def check_root(root: Path) -> None:
    """Verify that a scan root exists and is a directory.

    Args:
        root: Root directory to check.

    Raises:
        RootNotFoundError: If the root does not exist.
        RootNotADirectoryError: If the root exists but is not a directory.
        RootUnreadableError: If the root cannot be inspected, e.g. below an
            unsearchable parent.
    """
    try:
        exists = root.exists()
        is_dir = exists and root.is_dir()
    except OSError as e:
        raise RootUnreadableError(root, e.strerror or str(e)) from e
    if not exists:
        raise RootNotFoundError(root)
    if not is_dir:
        raise RootNotADirectoryError(root)


class DirectoryScanner:
    """Discovers project directories below a root directory.

    Each call to :meth:`discover` performs a fresh traversal. Children
    are visited in name order so the walk is deterministic for a given
    filesystem snapshot.

    Args:
        validator: Predicate deciding which directories are projects.
            Defaults to a ProjectValidator with Flutter names.
        notifier: Receives ``scan_error`` events for unreadable directories.

    Example:
        >>> scanner = DirectoryScanner()
        >>> for project in scanner.discover(Path("~/code").expanduser()):
        ...     print(project.path)
    """

    def __init__(
        self,
        validator: ProjectValidator | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        self._validator = validator or ProjectValidator()
        self._notifier = notifier or Notifier()

    def discover(self, root: Path | str) -> list[ValidatedProject]:
        """Collect every project below (and including) the root directory.

        Args:
            root: Directory to scan.

        Returns:
            Projects in depth-first discovery order.

        Raises:
            RootNotFoundError: If the root does not exist.
            RootNotADirectoryError: If the root is not a directory.
        """
        return list(self.iter_projects(root))

    def iter_projects(self, root: Path | str) -> Iterator[ValidatedProject]:
        """Yield projects below (and including) the root directory.

        The root is checked eagerly; the walk itself is lazy.

        Args:
            root: Directory to scan.

        Returns:
            Iterator over projects in depth-first discovery order.

        Raises:
            RootNotFoundError: If the root does not exist.
            RootNotADirectoryError: If the root is not a directory.
        """
        root_path = Path(root).absolute()
        check_root(root_path)
        return self._walk(root_path)

    def _walk(self, root: Path) -> Iterator[ValidatedProject]:
        """Depth-first pre-order walk using an explicit stack."""
        stack: list[Path] = [root]

        while stack:
            directory = stack.pop()

            try:
                is_link = directory.is_symlink()
            except OSError as e:
                # lstat fails for children of a readable but unsearchable directory
                self._report_unreadable(directory, e)
                continue
            if is_link:
                logger.debug("Skipping symbolic link: %s", directory)
                continue

            if self._validator.is_valid_project(directory):
                logger.debug("Found project: %s", directory)
                yield ValidatedProject(path=directory)

            # Reversed so the first child in name order is popped first
            stack.extend(reversed(self._list_subdirectories(directory)))

    def _list_subdirectories(self, directory: Path) -> list[Path]:
        """List the real subdirectories of a directory, sorted by name.

        Symbolic links are left out. Enumeration failures are logged and
        reported to the notifier, and yield no children.

        Args:
            directory: Directory to enumerate.

        Returns:
            Sorted list of child directories.
        """
        children: list[Path] = []
        try:
            with os.scandir(directory) as entries:
                for entry in entries:
                    try:
                        if entry.is_symlink():
                            logger.debug("Skipping symbolic link: %s", entry.path)
                            continue
                        if entry.is_dir(follow_symlinks=False):
                            children.append(Path(entry.path))
                    except OSError as e:
                        logger.warning("Cannot determine type of %s: %s", entry.path, e)
        except OSError as e:
            self._report_unreadable(directory, e)
            return []

        children.sort(key=lambda p: p.name)
        return children

    def _report_unreadable(self, directory: Path, error: OSError) -> None:
        """Log and report a directory the walk cannot enter."""
        message = error.strerror or str(error)
        logger.warning("Cannot read directory %s: %s", directory, message)
        self._notifier.scan_error(directory, message)
