"""Build orchestrator.

Drives one transpile run from start to finish:

1. Validate the run parameters.
2. Scan the models package for struct declarations.
3. Render the generated Go program.
4. Create a transient workspace and write the program into it.
5. Build and run the program through a :class:`BuildRunner`.
6. Relay the output; the workspace is removed on every path out.

Usage::

    from transpiler.builder import transpile

    transpile(".", "./models", "example.com/app/models", "web/src/models.ts")
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from rich.markup import escape
from rich.syntax import Syntax

from ..config import Config
from ..errors import BuildError, ConfigurationError
from ..scanner import DeclarationScanner
from ..utils import console, format_duration, print_error, print_output, print_success
from .go_runner import BuildRunner, GoRunner
from .models import BuildParameters, TranspileReport
from .templates import ProgramRenderer, is_go_identifier
from .workspace import TransientWorkspace


class Transpiler:
    """Scans a Go package and converts its structs through a generated program.

    Attributes:
        config: Global transpiler configuration.
        scanner: Finds struct names in the package directory.
        renderer: Produces the generated program source.
        runner: Builds and runs the generated program.
    """

    def __init__(
        self,
        config: Config | None = None,
        runner: BuildRunner | None = None,
        scanner: DeclarationScanner | None = None,
        renderer: ProgramRenderer | None = None,
    ) -> None:
        self.config = config or Config()
        self.scanner = scanner or DeclarationScanner(suffix=self.config.source_suffix)
        self.renderer = renderer or ProgramRenderer(self.config)
        self.runner: BuildRunner = runner or GoRunner(
            go_binary=self.config.go_binary,
            timeout_seconds=self.config.build.timeout,
        )

    @staticmethod
    def validate(params: BuildParameters) -> None:
        """Reject parameters the generated program could not compile with.

        Raises:
            ConfigurationError: If the package is empty or an init option is
                not a valid Go field name.
        """
        if not params.models_package.strip():
            raise ConfigurationError("No package given")
        bad_keys = [key for key in params.init_params if not is_go_identifier(key)]
        if bad_keys:
            raise ConfigurationError(
                f"Init options must be Go identifiers: {', '.join(sorted(bad_keys))}"
            )

    async def run(
        self,
        package_dir: str | Path,
        params: BuildParameters,
        working_dir: str | Path = ".",
    ) -> TranspileReport:
        """Run the whole pipeline once.

        Raises:
            ConfigurationError: Before anything touches the filesystem.
            DiscoveryError: If the package cannot be scanned (no workspace yet).
            WorkspaceError: If the workspace or program file cannot be created.
            BuildError: If the generated program fails; ``output`` holds the
                combined stdout/stderr.
        """
        self.validate(params)

        scan = self.scanner.scan(package_dir)
        console.print(f"Found {len(scan)} structs in {escape(str(params.output_file))}.")

        source = self.renderer.render(params, scan)
        if params.verbose:
            console.print(Syntax(source, "go", line_numbers=True))

        with TransientWorkspace(working_dir, prefix=self.config.workspace_prefix) as workspace:
            program = workspace.write(self.config.program_filename, source)
            result = await self.runner.run(program, workspace.path)

            if not result.success:
                print_output(result.output)
                print_error(f"Generated program failed (exit {result.exit_code})")
                raise BuildError(
                    f"Generated program failed (exit {result.exit_code}): "
                    f"{result.command}\n{result.output}",
                    output=result.output,
                    exit_code=result.exit_code,
                    command=result.command,
                )

            print_output(result.output)
            print_success(
                f"Wrote {escape(str(params.output_file))} "
                f"in {format_duration(result.duration_seconds)}"
            )
            workspace_path = workspace.path

        return TranspileReport(scan=scan, source=source, workspace=workspace_path, result=result)


def transpile(
    working_dir: str | Path,
    package_dir: str | Path,
    package_path: str,
    output_filepath: str | Path,
    *,
    custom_imports: list[str] | None = None,
    init_params: dict[str, Any] | None = None,
    interface: bool = True,
    verbose: bool = False,
    config: Config | None = None,
    runner: BuildRunner | None = None,
) -> TranspileReport:
    """Blocking entry point: convert every struct in *package_dir*.

    Args:
        working_dir: Parent directory for the transient workspace.
        package_dir: Directory holding the Go models package sources.
        package_path: Go import path of that package.
        output_filepath: Where the conversion facility writes its output.
    """
    fields: dict[str, Any] = {
        "models_package": package_path,
        "output_file": Path(output_filepath),
        "custom_imports": list(custom_imports or []),
        "interface": interface,
        "verbose": verbose,
    }
    if init_params is not None:
        fields["init_params"] = dict(init_params)
    params = BuildParameters(**fields)

    transpiler = Transpiler(config=config, runner=runner)
    return asyncio.run(transpiler.run(package_dir, params, working_dir))
