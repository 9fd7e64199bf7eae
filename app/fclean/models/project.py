"""Project discovery and cleanup models.

This module defines the data structures passed between the scanner,
the command runner and the batch orchestrator: the immutable option
sets, discovered projects, per-project outcomes and the batch summary.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ScanOptions:
    """Options controlling a directory scan.

    Attributes:
        root_path: Directory the scan starts from. Made absolute on construction.
        follow_symlinks: Whether to traverse symbolic links. Must be False.
    """

    root_path: Path
    follow_symlinks: bool = False

    def __post_init__(self) -> None:
        """Normalize the root path and reject symlink traversal."""
        if self.follow_symlinks:
            msg = "Following symbolic links is not supported"
            raise ValueError(msg)
        # Frozen dataclass: bypass __setattr__ to store the absolute path
        object.__setattr__(self, "root_path", Path(self.root_path).absolute())


@dataclass(frozen=True, slots=True)
class CleanOptions:
    """Options controlling how each project is cleaned.

    Attributes:
        use_alternate_runner: Run the alternate tool (fvm) instead of flutter.
        dry_run: Report the command that would run without spawning it.
        measure_freed_bytes: Measure build artifact sizes before and after cleaning.
    """

    use_alternate_runner: bool = False
    dry_run: bool = False
    measure_freed_bytes: bool = True


@dataclass(frozen=True, slots=True)
class ValidatedProject:
    """A directory confirmed to contain a manifest file and a source folder.

    Attributes:
        path: Absolute path to the project directory.
    """

    path: Path

    @property
    def name(self) -> str:
        """Directory name of the project."""
        return self.path.name or str(self.path)


class FailureKind(str, Enum):
    """Classification of a per-project cleanup failure.

    Attributes:
        TOOL_NOT_FOUND: The configured executable is not on PATH.
        EXIT_NON_ZERO: The external process exited with a non-zero code.
        SPAWN_ERROR: The external process could not be started.
    """

    TOOL_NOT_FOUND = "tool_not_found"
    EXIT_NON_ZERO = "exit_non_zero"
    SPAWN_ERROR = "spawn_error"


@dataclass(frozen=True, slots=True)
class CleanOutcome:
    """Result of cleaning a single project.

    Attributes:
        project: Path of the project that was operated on.
        succeeded: Whether the cleanup completed successfully.
        error_message: Diagnostic message when the cleanup failed.
        bytes_freed: Bytes released by the cleanup (None when not measured).
        failure_kind: Classification of the failure, None on success.
        dry_run: Whether this was a dry-run (no process spawned).
        command: Command line that was (or would have been) executed.
    """

    project: Path
    succeeded: bool
    error_message: str | None = None
    bytes_freed: int | None = None
    failure_kind: FailureKind | None = None
    dry_run: bool = False
    command: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate outcome consistency after initialization."""
        if self.succeeded and self.failure_kind is not None:
            msg = "A successful outcome cannot carry a failure kind"
            raise ValueError(msg)
        if not self.succeeded and not self.error_message:
            msg = "A failed outcome requires an error message"
            raise ValueError(msg)
        if self.bytes_freed is not None and self.bytes_freed < 0:
            msg = f"bytes_freed cannot be negative, got {self.bytes_freed}"
            raise ValueError(msg)

    @property
    def failed(self) -> bool:
        """Check if the cleanup failed."""
        return not self.succeeded


@dataclass(frozen=True, slots=True)
class BatchSummary:
    """Aggregate result of a batch cleanup run.

    Attributes:
        successful: Number of projects cleaned successfully.
        failed: Number of projects whose cleanup failed.
        freed_bytes: Total bytes freed across all successful cleanups.
        root_error: Set when the root path was rejected before scanning.
    """

    successful: int
    failed: int
    freed_bytes: int
    root_error: str | None = None

    def __post_init__(self) -> None:
        """Validate summary counts after initialization."""
        for field_name in ("successful", "failed", "freed_bytes"):
            value = getattr(self, field_name)
            if value < 0:
                msg = f"{field_name} cannot be negative, got {value}"
                raise ValueError(msg)

    @classmethod
    def empty(cls, root_error: str | None = None) -> "BatchSummary":
        """Create a zeroed summary."""
        return cls(successful=0, failed=0, freed_bytes=0, root_error=root_error)

    @property
    def total(self) -> int:
        """Number of projects processed."""
        return self.successful + self.failed

    @property
    def all_succeeded(self) -> bool:
        """Check if every processed project was cleaned successfully."""
        return self.failed == 0 and self.root_error is None

    @property
    def has_failures(self) -> bool:
        """Check if at least one project failed."""
        return self.failed > 0
