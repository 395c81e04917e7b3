"""Go struct to TypeScript transpiler.

Scans a Go package for struct declarations and converts them with the
``typescriptify`` library through a generated, throwaway Go program.
"""

from transpiler.builder import BuildParameters, Transpiler, transpile
from transpiler.config import Config
from transpiler.errors import (
    BuildError,
    ConfigurationError,
    DiscoveryError,
    TranspileError,
    WorkspaceError,
)
from transpiler.scanner import DeclarationScanner, ScanResult, scan_directory

__version__ = "0.1.0"

__all__ = [
    "BuildParameters",
    "Transpiler",
    "transpile",
    "Config",
    "DeclarationScanner",
    "ScanResult",
    "scan_directory",
    "TranspileError",
    "ConfigurationError",
    "DiscoveryError",
    "WorkspaceError",
    "BuildError",
]
