"""Error taxonomy shared by the import pipeline and its adapters."""

from __future__ import annotations

from enum import StrEnum


class ErrorSeverity(StrEnum):
    MINOR = "minor"
    FATAL = "fatal"


class OrbitSyncError(RuntimeError):
    """Base class for classified import failures."""

    default_severity: ErrorSeverity = ErrorSeverity.FATAL

    def __init__(self, message: str, *, severity: ErrorSeverity | None = None) -> None:
        super().__init__(message)
        self.severity = severity or self.default_severity


class FetchError(OrbitSyncError):
    """Raised when the remote member directory cannot be read.

    The message carries the stringified transport or API cause. A fetch error
    aborts the run; retrying is the caller's decision.
    """

    default_severity = ErrorSeverity.MINOR


class DecisionValidationError(OrbitSyncError, ValueError):
    """Raised when a decision source answers outside the offered menu."""

    default_severity = ErrorSeverity.MINOR
