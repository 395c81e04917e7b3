"""Value objects passed through the build orchestrator."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from pydantic import BaseModel, ConfigDict, Field

from ..scanner.models import ScanResult

InitValue = Union[bool, int, float, str]


def _default_init_params() -> dict[str, InitValue]:
    return {"BackupDir": "."}


class BuildParameters(BaseModel):
    """Everything the generated program needs besides the struct names."""

    model_config = ConfigDict(frozen=True)

    models_package: str = Field(
        default="", description="Go import path of the package whose structs are converted"
    )
    output_file: Path = Field(
        default=Path("models.ts"), description="File the conversion facility writes"
    )
    custom_imports: list[str] = Field(
        default_factory=list, description="Extra import lines prepended to the output, in order"
    )
    init_params: dict[str, InitValue] = Field(
        default_factory=_default_init_params,
        description="Converter fields set before conversion, as Go literals",
    )
    interface: bool = Field(default=True, description="Emit TS interfaces instead of classes")
    verbose: bool = Field(default=False, description="Echo the rendered program")


@dataclass
class RunResult:
    """Outcome of building and running the generated program."""

    success: bool
    exit_code: int = -1
    output: str = ""
    command: str = ""
    duration_seconds: float = 0.0

    def summary(self) -> str:
        """Return a human-readable summary of the result."""
        status = "[green]SUCCESS[/green]" if self.success else "[red]FAILED[/red]"
        return "\n".join(
            [
                f"Status: {status}",
                f"Command: {self.command}",
                f"Exit code: {self.exit_code}",
                f"Duration: {self.duration_seconds:.1f}s",
            ]
        )


@dataclass
class TranspileReport:
    """What a successful orchestration did."""

    scan: ScanResult
    source: str
    workspace: Path
    result: RunResult
