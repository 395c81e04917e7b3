"""Transpiler scanner module.

Finds struct declarations in a Go package directory so the build
orchestrator knows which types to hand to the conversion facility.

Key classes:
    DeclarationScanner - directory walk + tree-sitter parse
    StructVisitor      - identifier-then-struct binding over one syntax tree
    ScanResult         - ordered, immutable scan outcome
"""

from .declarations import DeclarationScanner, StructVisitor, scan_directory
from .models import DeclarationName, ScanResult

__all__ = [
    "DeclarationScanner",
    "StructVisitor",
    "scan_directory",
    "DeclarationName",
    "ScanResult",
]
