"""Transpiler configuration.

Typed configuration for the scanner and the build orchestrator.  All settings
use Pydantic v2 models so they can be validated at construction time and
serialised to/from JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


DEFAULT_CONVERTER_PACKAGE = "github.com/arpitbbhayani/transpiler/typescriptify"


class BuildConfig(BaseModel):
    """Tuning knobs for the ``go run`` step."""

    timeout: int | None = Field(
        default=None,
        ge=1,
        description="Seconds to wait for the generated program; None waits forever",
    )


class Config(BaseModel):
    """Global transpiler configuration.

    Instances are typically created once by the CLI entry point (or left at
    their defaults) and passed to :class:`~transpiler.builder.Transpiler`.
    """

    go_binary: str = Field(default="go", description="Go toolchain executable")
    converter_package: str = Field(
        default=DEFAULT_CONVERTER_PACKAGE,
        description="Import path of the typescriptify conversion facility",
    )
    models_alias: str = Field(
        default="m", pattern=r"^[A-Za-z_][A-Za-z0-9_]*$",
        description="Alias the generated program imports the models package under",
    )
    source_suffix: str = Field(default=".go", min_length=1)
    workspace_prefix: str = Field(default="transpiler_", min_length=1)
    program_filename: str = Field(default="transpiler.go", min_length=1)
    build: BuildConfig = Field(default_factory=BuildConfig)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            TRANSPILER_GO_BINARY, TRANSPILER_CONVERTER_PACKAGE,
            TRANSPILER_SOURCE_SUFFIX, TRANSPILER_BUILD_TIMEOUT.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("TRANSPILER_GO_BINARY"):
            kwargs["go_binary"] = os.environ["TRANSPILER_GO_BINARY"]
        if os.environ.get("TRANSPILER_CONVERTER_PACKAGE"):
            kwargs["converter_package"] = os.environ["TRANSPILER_CONVERTER_PACKAGE"]
        if os.environ.get("TRANSPILER_SOURCE_SUFFIX"):
            kwargs["source_suffix"] = os.environ["TRANSPILER_SOURCE_SUFFIX"]

        build_kwargs: dict[str, Any] = {}
        if os.environ.get("TRANSPILER_BUILD_TIMEOUT"):
            build_kwargs["timeout"] = int(os.environ["TRANSPILER_BUILD_TIMEOUT"])

        return cls(build=BuildConfig(**build_kwargs), **kwargs)
