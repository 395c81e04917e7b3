"""Go toolchain invocation for the generated program.

Runs ``go run <file>`` inside the workspace, captures stdout and stderr as one
stream and reports a structured :class:`RunResult`.  The orchestrator only
depends on the :class:`BuildRunner` protocol, so tests can swap in a fake
runner and never spawn a process.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Protocol

from rich.markup import escape

from ..errors import BuildError
from ..utils import console, run_command
from .models import RunResult


class BuildRunner(Protocol):
    """Builds and runs a single generated source file."""

    async def run(self, source: Path, cwd: Path) -> RunResult: ...


class GoRunner:
    """Runs the generated program with the host Go toolchain."""

    def __init__(self, go_binary: str = "go", timeout_seconds: float | None = None):
        """Initialize the runner.

        Args:
            go_binary: Path to the go executable (default: "go").
            timeout_seconds: Kill the process after this many seconds.
                ``None`` (default) waits until it exits.
        """
        self.go_binary = go_binary
        self.timeout_seconds = timeout_seconds

    def command(self, source: Path) -> list[str]:
        return [self.go_binary, "run", source.name]

    async def run(self, source: Path, cwd: Path) -> RunResult:
        """Execute ``go run`` on *source* with *cwd* as working directory.

        Returns:
            RunResult with exit code and combined output.  A non-zero exit is
            reported through ``success=False``, not raised.

        Raises:
            BuildError: If the go binary cannot be started at all.
        """
        cmd = self.command(source)
        cmd_str = " ".join(cmd)
        console.print(f"[cyan]{escape(cmd_str)}[/cyan]")

        start_time = time.monotonic()
        try:
            exit_code, output = await run_command(cmd, cwd=cwd, timeout=self.timeout_seconds)
        except FileNotFoundError:
            raise BuildError(
                f"Go binary not found: '{self.go_binary}'. "
                "Ensure the Go toolchain is installed and in PATH.",
                exit_code=127,
                command=cmd_str,
            )
        except PermissionError:
            raise BuildError(
                f"Permission denied executing: '{self.go_binary}'.",
                exit_code=126,
                command=cmd_str,
            )

        return RunResult(
            success=exit_code == 0,
            exit_code=exit_code,
            output=output,
            command=cmd_str,
            duration_seconds=time.monotonic() - start_time,
        )
