"""Command-line entry point for ``python -m transpiler``."""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import Any

from rich.markup import escape

from transpiler.builder import BuildParameters, Transpiler
from transpiler.config import Config
from transpiler.errors import TranspileError
from transpiler.utils import console, print_error, print_summary_table


def parse_init_value(raw: str) -> Any:
    """Interpret a ``--init`` value: ``true``/``false``, integers, else a string."""
    if raw in ("true", "false"):
        return raw == "true"
    try:
        return int(raw)
    except ValueError:
        return raw


def _init_option(raw: str) -> tuple[str, Any]:
    key, sep, value = raw.partition("=")
    if not sep or not key.strip():
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {raw!r}")
    return key.strip(), parse_init_value(value)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="transpiler",
        description="Convert every struct in a Go package to TypeScript definitions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  transpiler ./models web/src/models.ts --package example.com/app/models\n"
            "  transpiler ./models out.ts --package example.com/app/models "
            "--import \"import { Decimal } from 'decimal.js'\"\n"
            "  transpiler ./models out.ts --package example.com/app/models --init BackupDir=/tmp\n"
        ),
    )
    parser.add_argument("package_dir", help="Directory holding the Go models package")
    parser.add_argument("output", help="TypeScript file to write")
    parser.add_argument(
        "--package", "-p",
        default="",
        help="Go import path of the models package (required)",
    )
    parser.add_argument(
        "--import", "-i",
        dest="imports",
        action="append",
        default=[],
        metavar="LINE",
        help="Extra import line for the output file (repeatable)",
    )
    parser.add_argument(
        "--init",
        dest="init_params",
        action="append",
        type=_init_option,
        default=[],
        metavar="KEY=VALUE",
        help="Set a converter field before conversion (repeatable, default BackupDir=.)",
    )
    parser.add_argument(
        "--concrete",
        action="store_true",
        help="Emit classes instead of interfaces",
    )
    parser.add_argument(
        "--working-dir", "-w",
        default=".",
        help="Parent directory for the transient workspace (default: .)",
    )
    parser.add_argument(
        "--go",
        default=None,
        help="Go executable (default: $TRANSPILER_GO_BINARY or go)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print the generated program before running it",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the transpiler; returns the process exit code."""
    args = build_parser().parse_args(argv)

    try:
        config = Config.from_env()
        if args.go:
            config = config.model_copy(update={"go_binary": args.go})

        fields: dict[str, Any] = {
            "models_package": args.package,
            "output_file": Path(args.output),
            "custom_imports": args.imports,
            "interface": not args.concrete,
            "verbose": args.verbose,
        }
        if args.init_params:
            fields["init_params"] = dict(args.init_params)
        params = BuildParameters(**fields)
    except ValueError as exc:
        print_error(f"Invalid configuration: {escape(str(exc))}")
        return 1

    try:
        report = asyncio.run(Transpiler(config).run(args.package_dir, params, args.working_dir))
    except TranspileError as exc:
        # BuildError output has already been relayed; keep the headline only.
        headline = str(exc).splitlines()[0] if str(exc) else type(exc).__name__
        console.print(f"[bold red]Error:[/bold red] {escape(headline)}")
        return 1

    if args.verbose:
        print_summary_table(
            {
                "Package": params.models_package,
                "Files scanned": str(len(report.scan.files_scanned)),
                "Structs": str(len(report.scan)),
                "Output": str(params.output_file),
            },
            title="Transpile",
        )
    return 0
