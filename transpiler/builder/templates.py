"""Jinja2 rendering of the generated Go program.

Provides the ProgramRenderer class which loads ``transpiler.go.j2`` from the
``transpiler/builder/templates/`` directory and fills it with the discovered
struct names and the run parameters.
"""

from __future__ import annotations

import json
import math
import unicodedata
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from ..config import Config
from ..scanner.models import ScanResult
from .models import BuildParameters


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"
PROGRAM_TEMPLATE = "transpiler.go.j2"


# ---------------------------------------------------------------------------
# ProgramRenderer
# ---------------------------------------------------------------------------


class ProgramRenderer:
    """Renders the throwaway Go program that drives the conversion facility."""

    def __init__(
        self,
        config: Config | None = None,
        template_dir: str | Path | None = None,
    ) -> None:
        self.config = config or Config()
        self.template_dir = Path(template_dir or _DEFAULT_TEMPLATE_DIR)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        self.env.filters["go_literal"] = go_literal

    def build_context(self, params: BuildParameters, scan: ScanResult) -> dict[str, Any]:
        """Assemble the template context.

        Names are trimmed, empty ones dropped, and the rest qualified with the
        models alias.  The output path is made absolute since the program
        runs from inside the workspace.
        """
        alias = self.config.models_alias
        structs = [
            f"{alias}.{name.strip()}" for name in scan.names if name.strip()
        ]
        return {
            "alias": alias,
            "models_package": params.models_package,
            "converter_package": self.config.converter_package,
            "interface": params.interface,
            "init_params": dict(params.init_params),
            "structs": structs,
            "custom_imports": list(params.custom_imports),
            "target_file": str(Path(params.output_file).absolute()),
        }

    def render(self, params: BuildParameters, scan: ScanResult) -> str:
        """Render the generated program source."""
        template = self.env.get_template(PROGRAM_TEMPLATE)
        return template.render(**self.build_context(params, scan))


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------


def go_literal(value: Any) -> str:
    """Format a Python value as a Go literal.

    Strings become interpreted string literals (JSON escaping is a subset of
    Go's), bools become ``true``/``false`` and numbers are written as-is.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Cannot express {value!r} as a Go literal")
        return repr(value)
    if isinstance(value, (str, Path)):
        return json.dumps(str(value), ensure_ascii=False)
    raise TypeError(f"Unsupported init value type: {type(value).__name__}")


def is_go_identifier(name: str) -> bool:
    """Return True if *name* can be used as a Go field name.

    A Go identifier is a letter (any Unicode letter or ``_``) followed by
    letters and decimal digits, so ``Größe`` is accepted and ``x²`` is not.
    """
    if not name or not _is_go_letter(name[0]):
        return False
    return all(_is_go_letter(ch) or unicodedata.category(ch) == "Nd" for ch in name[1:])


def _is_go_letter(ch: str) -> bool:
    return ch == "_" or unicodedata.category(ch).startswith("L")
