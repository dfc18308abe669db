"""
Exception hierarchy for fatal pipeline failures.

Recoverable conditions (unresolved ids, missing side files, exhausted
overlay lookups) are never raised; they fall back or travel as ``Err``
values. Everything here aborts the batch and maps to exit code 1 in the CLI.
"""

from pathlib import Path


class DtsvizError(Exception):
    """Base class for unrecoverable dtsviz errors."""


class UpstreamToolError(DtsvizError):
    """An external collaborator (depends, tree-sitter) failed."""

    def __init__(self, tool: str, message: str, exit_code: int | None = None):
        self.tool = tool
        self.exit_code = exit_code
        super().__init__(f"{tool}: {message}")


class ArtifactNotFoundError(DtsvizError):
    """A primary artifact the pipeline depends on is absent."""

    def __init__(self, path: Path, hint: str = ""):
        self.path = Path(path)
        message = f"Artifact not found: {self.path}"
        if hint:
            message = f"{message} ({hint})"
        super().__init__(message)
