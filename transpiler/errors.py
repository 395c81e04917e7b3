"""Error taxonomy for the transpiler.

Every failure is fatal to the invocation that raised it.  Callers that only
care about success or failure can catch :class:`TranspileError`.
"""

from __future__ import annotations

from pathlib import Path


class TranspileError(Exception):
    """Base class for every error raised by the transpiler."""


class ConfigurationError(TranspileError):
    """Raised when required run parameters are missing or invalid."""


class DiscoveryError(TranspileError):
    """Raised when the source tree cannot be walked or a file cannot be parsed."""

    def __init__(self, message: str, path: str | Path | None = None):
        self.path = Path(path) if path is not None else None
        super().__init__(message)


class WorkspaceError(TranspileError):
    """Raised when the temporary workspace or its program file cannot be created."""

    def __init__(self, message: str, path: str | Path | None = None):
        self.path = Path(path) if path is not None else None
        super().__init__(message)


class BuildError(TranspileError):
    """Raised when the generated program fails to build or run.

    A conversion failure inside the generated program (``ConvertToFile``
    returning an error) surfaces here too, since the program panics and exits
    non-zero.
    """

    def __init__(
        self,
        message: str,
        output: str = "",
        exit_code: int = -1,
        command: str = "",
    ):
        self.output = output
        self.exit_code = exit_code
        self.command = command
        super().__init__(message)
