"""Data models for fclean.

This module exports the option, project, outcome and summary types.
"""

from fclean.models.project import (
    BatchSummary,
    CleanOptions,
    CleanOutcome,
    FailureKind,
    ScanOptions,
    ValidatedProject,
)

__all__ = [
    "BatchSummary",
    "CleanOptions",
    "CleanOutcome",
    "FailureKind",
    "ScanOptions",
    "ValidatedProject",
]
