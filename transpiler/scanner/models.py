"""Result types produced by the declaration scanner."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class DeclarationName:
    """A struct name discovered in a Go source file.

    ``source`` is kept for diagnostics only; it never reaches the generated
    program.
    """

    name: str
    source: Path

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ScanResult:
    """Ordered, immutable outcome of scanning one directory tree.

    Order is directory-walk order, then declaration order within each file.
    Duplicates are kept.
    """

    root: Path
    declarations: tuple[DeclarationName, ...] = ()
    files_scanned: tuple[Path, ...] = field(default_factory=tuple)

    @property
    def names(self) -> list[str]:
        """Plain declaration names in emission order."""
        return [decl.name for decl in self.declarations]

    def by_file(self) -> dict[Path, list[str]]:
        """Group names by the file they were found in, preserving order."""
        grouped: dict[Path, list[str]] = {}
        for decl in self.declarations:
            grouped.setdefault(decl.source, []).append(decl.name)
        return grouped

    def __len__(self) -> int:
        return len(self.declarations)

    def __iter__(self) -> Iterator[DeclarationName]:
        return iter(self.declarations)
