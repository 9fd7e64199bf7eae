"""Subprocess helpers.

Thin wrappers over ``subprocess`` and ``shutil.which`` so that callers
can be tested by patching a single name.
"""

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured output of a finished process.

    Attributes:
        stdout: Decoded standard output.
        stderr: Decoded standard error.
        returncode: Process exit status.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if the process exited with status 0."""
        return self.returncode == 0

    @property
    def diagnostic(self) -> str:
        """Stripped stderr, or stripped stdout when stderr is empty."""
        return self.stderr.strip() or self.stdout.strip()


def run_command(
    args: list[str],
    *,
    check: bool = False,
    timeout: float | None = 60.0,
    cwd: str | Path | None = None,
) -> CommandResult:
    """Run a command to completion with its output captured.

    The command is executed directly, never through a shell. Output bytes
    that are invalid in the locale encoding are replaced, not raised.

    Args:
        args: Executable followed by its arguments.
        check: Raise CalledProcessError on a non-zero exit status.
        timeout: Seconds to wait before giving up. None waits indefinitely.
        cwd: Working directory of the child process.

    Returns:
        CommandResult holding the captured output and exit status.

    Raises:
        subprocess.CalledProcessError: If check is set and the command fails.
        subprocess.TimeoutExpired: If the timeout elapses.
        OSError: If the executable cannot be started.
    """
    completed = subprocess.run(  # nosec: B603
        args,
        capture_output=True,
        text=True,
        errors="replace",
        check=check,
        timeout=timeout,
        cwd=cwd,
    )
    return CommandResult(completed.stdout, completed.stderr, completed.returncode)


def command_exists(name: str) -> bool:
    """Check whether an executable can be found on PATH."""
    return shutil.which(name) is not None
