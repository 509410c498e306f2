"""Exception hierarchy for fatal annotation conditions."""

from __future__ import annotations

from pathlib import Path


class AnnotationError(RuntimeError):
    """Base class for conditions that abort an annotation run."""


class ConfigError(AnnotationError, ValueError):
    """Startup arguments or configuration values are missing or invalid."""


class TableLoadError(AnnotationError):
    """The mapping table could not be read or produced no usable rows."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Error reading the file {self.path}: {reason}")


class OutOfMemoryError(AnnotationError, MemoryError):
    """Allocation failed while extending the schema or building output."""
