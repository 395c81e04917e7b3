"""Struct declaration discovery for Go source trees.

Walks a directory the way Go's ``filepath.Walk`` does (lexical order,
depth-first, symlinks not followed), parses every ``.go`` file with the
tree-sitter Go grammar and collects the names bound to struct types.

Name binding is positional: the scanner remembers the most recent identifier
seen in pre-order and, when a ``struct_type`` node follows it directly, emits
that identifier.  This matches top-level ``type X struct {...}`` declarations
exactly, and also fires for a few other shapes::

    type Order struct{ ... }        -> "Order"
    type Outer struct{ In struct{} } -> "Outer", "In"
    var cfg struct{ Debug bool }    -> "cfg"
    type Pair[K any] struct{ ... }  -> "any"   (last constraint identifier)
    type List []struct{ ... }       -> nothing (slice node clears the slot)

Callers rely on the current output, so the extra matches are kept as they
are.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

import tree_sitter_go
from tree_sitter import Language, Node, Parser

from ..errors import DiscoveryError
from .models import DeclarationName, ScanResult

GO_LANGUAGE = Language(tree_sitter_go.language())

# Node kinds that go/ast models as *ast.Ident.
IDENTIFIER_KINDS = frozenset(
    {
        "identifier",
        "type_identifier",
        "field_identifier",
        "package_identifier",
        "blank_identifier",
        "label_name",
        "true",
        "false",
        "nil",
        "iota",
    }
)
STRUCT_KIND = "struct_type"
# Comments are not part of the walked tree.
TRANSPARENT_KINDS = frozenset({"comment"})

# The grammar accepts more at file level than the Go compiler does.
PACKAGE_KIND = "package_clause"
IMPORT_KIND = "import_declaration"
TOP_LEVEL_DECLARATION_KINDS = frozenset(
    {
        "function_declaration",
        "method_declaration",
        "type_declaration",
        "var_declaration",
        "const_declaration",
    }
)


# ---------------------------------------------------------------------------
# Syntax-tree traversal
# ---------------------------------------------------------------------------


class StructVisitor:
    """Collects struct names from one syntax tree.

    Holds a single candidate slot: identifiers overwrite it, a struct node
    consumes it, anything else clears it.
    """

    def __init__(self, source: bytes, path: Path):
        self.source = source
        self.path = path
        self.candidate = ""
        self.structs: list[DeclarationName] = []

    def visit(self, node: Node) -> None:
        kind = node.type
        if kind in IDENTIFIER_KINDS:
            self.candidate = _node_text(node, self.source)
        elif kind == STRUCT_KIND:
            if self.candidate:
                self.structs.append(DeclarationName(name=self.candidate, source=self.path))
                self.candidate = ""
        else:
            self.candidate = ""

    def walk(self, root: Node) -> list[DeclarationName]:
        for node in _preorder(root):
            self.visit(node)
        return self.structs


def _preorder(root: Node) -> Iterator[Node]:
    """Yield named, non-comment nodes in pre-order without recursion."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(
            child
            for child in reversed(node.named_children)
            if child.type not in TRANSPARENT_KINDS
        )


def _node_text(node: Node, source: bytes) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def _first_error(root: Node) -> Node | None:
    """Return the first ``ERROR`` or ``MISSING`` node in source order."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        if node.has_error:
            stack.extend(reversed(node.children))
    return None


def _misplaced_top_level(root: Node) -> tuple[tuple[int, int], str] | None:
    """Check the file layout: package clause, then imports, then declarations.

    Returns the ``(row, column)`` start point and a reason for the first node
    out of place, or ``None`` when the layout is valid.
    """
    children = [child for child in root.named_children if child.type not in TRANSPARENT_KINDS]
    if not children or children[0].type != PACKAGE_KIND:
        point = children[0].start_point if children else root.end_point
        return point, "expected 'package'"

    imports_allowed = True
    for child in children[1:]:
        if child.type == IMPORT_KIND:
            if not imports_allowed:
                return child.start_point, "imports must appear before other declarations"
        elif child.type in TOP_LEVEL_DECLARATION_KINDS:
            imports_allowed = False
        else:
            return child.start_point, "non-declaration statement outside function body"
    return None


def _parse_problem(root: Node) -> tuple[tuple[int, int], str] | None:
    """Return the position and reason of the first parse failure, if any."""
    error_node = _first_error(root)
    if error_node is not None:
        reason = "missing " + error_node.type if error_node.is_missing else "syntax error"
        return error_node.start_point, reason
    return _misplaced_top_level(root)


# ---------------------------------------------------------------------------
# Directory walk
# ---------------------------------------------------------------------------


def _walk_directory(directory: Path) -> Iterator[Path]:
    """Yield non-directory entries under *directory* in lexical, depth-first order.

    Raises DiscoveryError as soon as any directory cannot be listed.
    """
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as exc:
        raise DiscoveryError(f"Cannot read directory {directory}: {exc}", path=directory) from exc

    for entry in entries:
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError as exc:
            raise DiscoveryError(f"Cannot stat {entry.path}: {exc}", path=entry.path) from exc
        if is_dir:
            yield from _walk_directory(Path(entry.path))
        else:
            yield Path(entry.path)


# ---------------------------------------------------------------------------
# DeclarationScanner
# ---------------------------------------------------------------------------


class DeclarationScanner:
    """Finds struct declarations in Go files under a directory tree.

    Every file whose name ends in *suffix* is parsed.  A single unreadable
    directory or unparseable file aborts the whole scan, because the generated
    program needs the complete set of names.
    """

    def __init__(self, suffix: str = ".go") -> None:
        self.suffix = suffix
        self._parser = Parser(GO_LANGUAGE)

    def scan(self, root: str | Path) -> ScanResult:
        """Scan *root* and return every discovered struct name in walk order.

        Raises:
            DiscoveryError: If *root* is missing, a directory cannot be read,
                or a source file fails to parse.
        """
        root_path = Path(root)
        if not root_path.exists():
            raise DiscoveryError(f"Package directory not found: {root_path}", path=root_path)

        candidates = [root_path] if not root_path.is_dir() else _walk_directory(root_path)

        declarations: list[DeclarationName] = []
        scanned: list[Path] = []
        for path in candidates:
            if not path.name.endswith(self.suffix):
                continue
            declarations.extend(self.scan_file(path))
            scanned.append(path)

        return ScanResult(
            root=root_path,
            declarations=tuple(declarations),
            files_scanned=tuple(scanned),
        )

    def scan_file(self, path: str | Path) -> list[DeclarationName]:
        """Parse one Go file and return its struct names in declaration order.

        Raises:
            DiscoveryError: If the file cannot be read, is not valid UTF-8, or
                contains a syntax error or a misplaced top-level node.
        """
        file_path = Path(path)
        try:
            source = file_path.read_bytes()
            source.decode("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DiscoveryError(
                f"Error loading/parsing golang file {file_path}: {exc}", path=file_path
            ) from exc

        tree = self._parser.parse(source)
        problem = _parse_problem(tree.root_node)
        if problem is not None:
            (row, column), reason = problem
            raise DiscoveryError(
                f"Error loading/parsing golang file {file_path}: "
                f"{row + 1}:{column + 1}: {reason}",
                path=file_path,
            )

        return StructVisitor(source, file_path).walk(tree.root_node)


def scan_directory(root: str | Path, suffix: str = ".go") -> ScanResult:
    """Convenience wrapper: scan *root* with a fresh :class:`DeclarationScanner`."""
    return DeclarationScanner(suffix=suffix).scan(root)
