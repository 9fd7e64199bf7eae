"""Rich rendering of batch cleanup events.

Provides the ConsoleNotifier, which turns the events emitted by the
scanner, runner and orchestrator into themed terminal output.
"""

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.status import Status
from rich.table import Table

from fclean.core.notifier import Notifier
from fclean.models.project import BatchSummary, ValidatedProject
from fclean.utils.formatting import console, err_console, format_size


class ConsoleNotifier(Notifier):
    """Notifier that prints progress and results with Rich.

    Args:
        out: Console for regular output.
        err: Console for warnings and errors.
        quiet: If True, suppress per-project progress lines.
        show_spinner: If True, show a spinner while scanning.
    """

    def __init__(
        self,
        out: Console | None = None,
        err: Console | None = None,
        *,
        quiet: bool = False,
        show_spinner: bool = True,
    ) -> None:
        self._out = out or console
        self._err = err or err_console
        self._quiet = quiet
        self._show_spinner = show_spinner
        self._status: Status | None = None

    def scan_started(self) -> None:
        if self._show_spinner and self._out.is_terminal:
            self._status = self._out.status("[info]Scanning for Flutter projects...[/]")
            self._status.start()
        elif not self._quiet:
            self._out.print("[info]Scanning for Flutter projects...[/]")

    def scan_finished(self, count: int) -> None:
        self._stop_spinner()
        if count:
            self._out.print(f"[info]Found {count} Flutter project(s).[/]")

    def scan_error(self, path: Path, message: str) -> None:
        location = escape(str(path))
        self._err.print(f"[warning]Warning:[/] Cannot read {location}: {escape(message)}")

    def root_invalid(self, path: Path, message: str) -> None:
        self._stop_spinner()
        self._err.print(f"[error]Error:[/] {escape(message)}")

    def no_projects(self) -> None:
        self._out.print("[warning]No Flutter projects found in the specified directory.[/]")

    def project_progress(self, index: int, total: int, name: str) -> None:
        if not self._quiet:
            counter = f"[progress]\\[{index}/{total}][/]"
            self._out.print(f"{counter} Cleaning [project]{escape(name)}[/]")

    def dry_run(self, project: Path, command: list[str]) -> None:
        if not self._quiet:
            line = escape(" ".join(command))
            location = escape(str(project))
            self._out.print(
                f"  [dry_run]Dry run:[/] would execute \"{line}\" in [muted]{location}[/]"
            )

    def project_result(self, name: str, succeeded: bool, error_message: str | None) -> None:
        if succeeded:
            if not self._quiet:
                self._out.print(f"  [success]OK[/] {escape(name)}")
        else:
            reason = escape(error_message or "Unknown error")
            self._err.print(f"  [error]FAIL[/] {escape(name)}: {reason}")

    def batch_complete(self, summary: BatchSummary) -> None:
        freed = f" ({format_size(summary.freed_bytes)} freed)" if summary.freed_bytes else ""
        if summary.all_succeeded:
            self._out.print(
                f"\n[success]Cleaned {summary.successful} Flutter project(s) successfully.[/]"
                f"{freed}"
            )
        else:
            self._out.print(
                f"\n[success]{summary.successful} succeeded[/], "
                f"[error]{summary.failed} failed[/]{freed}"
            )

    def _stop_spinner(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None


def create_projects_table(projects: list[ValidatedProject], root: Path) -> Table:
    """Create a Rich table listing discovered projects.

    Args:
        projects: Projects in discovery order.
        root: Scan root, used to display relative locations.

    Returns:
        Rich Table configured for project display.
    """
    table = Table(
        title="Flutter Projects",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("#", justify="right", width=4)
    table.add_column("Project", no_wrap=True)
    table.add_column("Location", style="muted")

    for index, project in enumerate(projects, start=1):
        try:
            location = str(project.path.relative_to(root))
        except ValueError:
            location = str(project.path)
        table.add_row(str(index), f"[project]{escape(project.name)}[/]", escape(location))

    return table
