"""Progress notification interface for batch cleanup.

The scanner, runner and orchestrator report what they are doing through
a Notifier passed to their constructors. The base class implements every
event as a no-op, so ``Notifier()`` is a valid silent notifier and
subclasses only override the events they render.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from fclean.models.project import BatchSummary


class Notifier:
    """Receiver of structured progress and result events.

    Example:
        >>> class PrintingNotifier(Notifier):
        ...     def project_progress(self, index, total, name):
        ...         print(f"[{index}/{total}] {name}")
    """

    def scan_started(self) -> None:
        """Called before the directory scan begins."""

    def scan_finished(self, count: int) -> None:
        """Called after the scan with the number of projects found."""

    def scan_error(self, path: Path, message: str) -> None:
        """Called when a directory cannot be enumerated during the scan."""

    def root_invalid(self, path: Path, message: str) -> None:
        """Called when the root path is missing or not a directory."""

    def no_projects(self) -> None:
        """Called when the scan found no projects."""

    def project_progress(self, index: int, total: int, name: str) -> None:
        """Called before a project is cleaned (index is 1-based)."""

    def dry_run(self, project: Path, command: list[str]) -> None:
        """Called instead of running the command in dry-run mode."""

    def project_result(self, name: str, succeeded: bool, error_message: str | None) -> None:
        """Called after a project has been cleaned."""

    def batch_complete(self, summary: BatchSummary) -> None:
        """Called once all projects have been processed."""


class RecordingNotifier(Notifier):
    """Notifier that records every event it receives.

    Attributes:
        events: List of (event_name, args) tuples in the order received.
    """

    def __init__(self) -> None:
        self.events: list[tuple[str, tuple[Any, ...]]] = []

    def names(self) -> list[str]:
        """Return the recorded event names in order."""
        return [name for name, _ in self.events]

    def of(self, name: str) -> list[tuple[Any, ...]]:
        """Return the argument tuples recorded for one event name."""
        return [args for event, args in self.events if event == name]

    def scan_started(self) -> None:
        self.events.append(("scan_started", ()))

    def scan_finished(self, count: int) -> None:
        self.events.append(("scan_finished", (count,)))

    def scan_error(self, path: Path, message: str) -> None:
        self.events.append(("scan_error", (path, message)))

    def root_invalid(self, path: Path, message: str) -> None:
        self.events.append(("root_invalid", (path, message)))

    def no_projects(self) -> None:
        self.events.append(("no_projects", ()))

    def project_progress(self, index: int, total: int, name: str) -> None:
        self.events.append(("project_progress", (index, total, name)))

    def dry_run(self, project: Path, command: list[str]) -> None:
        self.events.append(("dry_run", (project, list(command))))

    def project_result(self, name: str, succeeded: bool, error_message: str | None) -> None:
        self.events.append(("project_result", (name, succeeded, error_message)))

    def batch_complete(self, summary: BatchSummary) -> None:
        self.events.append(("batch_complete", (summary,)))
