"""Batch cleanup orchestration.

Drives the scanner and the command runner over every project found
below a root directory, strictly one project at a time, and aggregates
the outcomes into a BatchSummary.
"""

import logging
from pathlib import Path

from fclean.core.notifier import Notifier
from fclean.models.project import BatchSummary, CleanOptions, ScanOptions
from fclean.runner.runner import CommandRunner
from fclean.scanner.scanner import DirectoryScanner, RootPathError, check_root

logger = logging.getLogger(__name__)


class BatchOrchestrator:
    """Runs a sequential scan-then-clean batch.

    Only an unusable root directory aborts a batch. Every per-project
    failure is counted and the loop moves on to the next project.

    Args:
        scanner: Scanner used to discover projects.
        runner: Runner used to clean each project.
        notifier: Receives scan, progress and summary events.

    Example:
        >>> orchestrator = BatchOrchestrator(DirectoryScanner(), CommandRunner())
        >>> summary = orchestrator.run(Path("~/code").expanduser())
        >>> summary.failed
        0
    """

    def __init__(
        self,
        scanner: DirectoryScanner,
        runner: CommandRunner,
        notifier: Notifier | None = None,
    ) -> None:
        self._scanner = scanner
        self._runner = runner
        self._notifier = notifier or Notifier()
        self._stop_requested = False

    def request_stop(self) -> None:
        """Ask the batch to stop before the next project starts.

        A cleanup already in progress is allowed to finish.
        """
        self._stop_requested = True

    def run(
        self,
        root: Path | str,
        scan_options: ScanOptions | None = None,
        clean_options: CleanOptions | None = None,
    ) -> BatchSummary:
        """Discover and clean every project below a root directory.

        Args:
            root: Directory to scan. Ignored when scan_options is given.
            scan_options: Scan options; built from ``root`` when None.
            clean_options: Clean options; defaults to a real run with the primary tool.

        Returns:
            BatchSummary of the run. Zeroed, with ``root_error`` set, when
            the root is missing or not a directory.
        """
        scan_options = scan_options or ScanOptions(root_path=Path(root))
        clean_options = clean_options or CleanOptions()
        root_path = scan_options.root_path
        self._stop_requested = False

        try:
            check_root(root_path)
        except RootPathError as e:
            return self._root_failed(e)

        self._notifier.scan_started()
        try:
            projects = self._scanner.discover(root_path)
        except RootPathError as e:
            # Root removed between the check and the scan
            return self._root_failed(e)
        self._notifier.scan_finished(len(projects))
        logger.info("Found %d project(s) under %s", len(projects), root_path)

        if not projects:
            self._notifier.no_projects()
            return BatchSummary.empty()

        successful = 0
        failed = 0
        freed_bytes = 0
        total = len(projects)

        for index, project in enumerate(projects, start=1):
            if self._stop_requested:
                logger.info("Stop requested, skipping %d remaining project(s)", total - index + 1)
                break

            self._notifier.project_progress(index, total, project.name)
            outcome = self._runner.clean(project, clean_options)

            if outcome.succeeded:
                successful += 1
                freed_bytes += outcome.bytes_freed or 0
            else:
                failed += 1
                logger.debug("Cleanup failed for %s: %s", project.path, outcome.error_message)

            self._notifier.project_result(project.name, outcome.succeeded, outcome.error_message)

        summary = BatchSummary(successful=successful, failed=failed, freed_bytes=freed_bytes)
        self._notifier.batch_complete(summary)
        return summary

    def _root_failed(self, error: RootPathError) -> BatchSummary:
        """Report an unusable root and return the zeroed summary."""
        message = str(error)
        logger.debug("Root rejected: %s", message)
        self._notifier.root_invalid(error.path, message)
        return BatchSummary.empty(root_error=message)


def clean_all(
    root: Path | str,
    *,
    use_fvm: bool = False,
    dry_run: bool = False,
    notifier: Notifier | None = None,
) -> BatchSummary:
    """Clean every Flutter project below a directory with default settings.

    Convenience wrapper wiring a default scanner, runner and orchestrator
    around a single notifier.

    Args:
        root: Directory to scan.
        use_fvm: Run ``fvm flutter clean`` instead of ``flutter clean``.
        dry_run: Report the commands without running them.
        notifier: Receives all progress events. Silent when None.

    Returns:
        BatchSummary of the run.
    """
    notifier = notifier or Notifier()
    orchestrator = BatchOrchestrator(
        DirectoryScanner(notifier=notifier),
        CommandRunner(notifier=notifier),
        notifier,
    )
    return orchestrator.run(
        root,
        clean_options=CleanOptions(use_alternate_runner=use_fvm, dry_run=dry_run),
    )
