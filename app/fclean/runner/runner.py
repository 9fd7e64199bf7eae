"""External cleanup command runner.

Runs ``flutter clean`` (or ``fvm flutter clean``) inside a single
project directory and turns every possible result, including a missing
executable or a failure to spawn, into a CleanOutcome value.
"""

import logging
import subprocess
from pathlib import Path

from fclean.core.notifier import Notifier
from fclean.models.project import CleanOptions, CleanOutcome, FailureKind, ValidatedProject
from fclean.runner.artifacts import DEFAULT_ARTIFACT_PATHS, artifacts_size
from fclean.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)

DEFAULT_PRIMARY_TOOL = "flutter"
DEFAULT_ALTERNATE_TOOL = "fvm"


class CommandRunner:
    """Runs the cleanup command for one project at a time.

    The alternate tool is a version-manager wrapper invoked with the
    primary tool name as its first argument, e.g. ``fvm flutter clean``.

    Args:
        primary_tool: Executable used by default.
        alternate_tool: Wrapper executable used when the alternate runner is selected.
        subcommand: Arguments appended after the tool name.
        artifact_paths: Project-relative paths measured for freed bytes.
        notifier: Receives ``dry_run`` events.

    Example:
        >>> runner = CommandRunner()
        >>> outcome = runner.clean(project, CleanOptions(dry_run=True))
        >>> outcome.succeeded
        True
    """

    def __init__(
        self,
        primary_tool: str = DEFAULT_PRIMARY_TOOL,
        alternate_tool: str = DEFAULT_ALTERNATE_TOOL,
        subcommand: tuple[str, ...] = ("clean",),
        artifact_paths: tuple[str, ...] = DEFAULT_ARTIFACT_PATHS,
        notifier: Notifier | None = None,
    ) -> None:
        self._primary_tool = primary_tool
        self._alternate_tool = alternate_tool
        self._subcommand = subcommand
        self._artifact_paths = artifact_paths
        self._notifier = notifier or Notifier()

    def executable_for(self, options: CleanOptions) -> str:
        """Return the executable that must be on PATH for these options."""
        return self._alternate_tool if options.use_alternate_runner else self._primary_tool

    def command_for(self, options: CleanOptions) -> list[str]:
        """Build the full command line for these options.

        Args:
            options: Clean options selecting the primary or alternate tool.

        Returns:
            Command and arguments, e.g. ``["fvm", "flutter", "clean"]``.
        """
        if options.use_alternate_runner:
            return [self._alternate_tool, self._primary_tool, *self._subcommand]
        return [self._primary_tool, *self._subcommand]

    def clean(self, project: ValidatedProject | Path, options: CleanOptions) -> CleanOutcome:
        """Run the cleanup command in a project directory.

        Never raises for per-project problems: a missing tool, a non-zero
        exit code and a failure to start the process all produce a failed
        outcome.

        Args:
            project: Project (or project directory) to clean.
            options: Tool selection, dry-run and measurement options.

        Returns:
            CleanOutcome describing what happened.
        """
        path = project.path if isinstance(project, ValidatedProject) else Path(project)
        command = self.command_for(options)
        executable = self.executable_for(options)

        if options.dry_run:
            logger.info("Dry-run: would run '%s' in %s", " ".join(command), path)
            if not command_exists(executable):
                logger.warning("%s not found on PATH, a real run would fail", executable)
            self._notifier.dry_run(path, command)
            return CleanOutcome(
                project=path,
                succeeded=True,
                bytes_freed=0,
                dry_run=True,
                command=tuple(command),
            )

        if not command_exists(executable):
            logger.warning("%s not found on PATH, cannot clean %s", executable, path)
            return CleanOutcome(
                project=path,
                succeeded=False,
                error_message=f"{executable} not found on PATH",
                failure_kind=FailureKind.TOOL_NOT_FOUND,
                command=tuple(command),
            )

        size_before = self._measure(path) if options.measure_freed_bytes else None

        logger.info("Running '%s' in %s", " ".join(command), path)
        try:
            # No timeout: a hung tool blocks the batch
            result = run_command(command, timeout=None, cwd=path)
        except (OSError, ValueError, subprocess.SubprocessError) as e:
            logger.warning("Failed to start '%s' in %s: %s", " ".join(command), path, e)
            return CleanOutcome(
                project=path,
                succeeded=False,
                error_message=f"Failed to run '{' '.join(command)}': {e}",
                failure_kind=FailureKind.SPAWN_ERROR,
                command=tuple(command),
            )

        if not result.success:
            error_msg = (
                result.diagnostic or f"'{' '.join(command)}' exited with code {result.returncode}"
            )
            logger.warning(
                "'%s' failed in %s (exit %d): %s",
                " ".join(command),
                path,
                result.returncode,
                error_msg,
            )
            return CleanOutcome(
                project=path,
                succeeded=False,
                error_message=error_msg,
                failure_kind=FailureKind.EXIT_NON_ZERO,
                command=tuple(command),
            )

        bytes_freed: int | None = None
        if size_before is not None:
            bytes_freed = abs(size_before - self._measure(path))

        return CleanOutcome(
            project=path,
            succeeded=True,
            bytes_freed=bytes_freed,
            command=tuple(command),
        )

    def _measure(self, path: Path) -> int:
        """Measure the artifact size of a project, treating errors as zero."""
        try:
            return artifacts_size(path, self._artifact_paths)
        except OSError as e:
            logger.debug("Cannot measure artifacts in %s: %s", path, e)
            return 0
