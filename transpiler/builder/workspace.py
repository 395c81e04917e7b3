"""Transient workspace for the generated program.

Each orchestration gets its own ``transpiler_<token>`` directory under the
working directory.  Removal is registered the moment the directory exists,
so leaving the ``with`` block tears it down whether the body returned or
raised.
"""

from __future__ import annotations

import shutil
import time
from contextlib import ExitStack
from datetime import datetime, timezone
from pathlib import Path

from rich.markup import escape

from ..errors import WorkspaceError
from ..utils import console, print_warning


def unique_workspace_path(parent: Path, prefix: str) -> Path:
    """Return a not-yet-existing ``<parent>/<prefix><token>`` path.

    The token is the current time in nanoseconds, bumped until the name is
    free.
    """
    token = time.time_ns()
    candidate = parent / f"{prefix}{token}"
    while candidate.exists():
        token += 1
        candidate = parent / f"{prefix}{token}"
    return candidate


def _remove_file(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        print_warning(f"Could not remove {escape(str(path))}: {escape(str(exc))}")


def _remove_tree(path: Path) -> None:
    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        pass
    except OSError as exc:
        print_warning(f"Could not remove workspace {escape(str(path))}: {escape(str(exc))}")


class TransientWorkspace:
    """A uniquely named directory that exists only inside a ``with`` block.

    Usage::

        with TransientWorkspace(Path.cwd()) as ws:
            program = ws.write("transpiler.go", source)
            ...
        # ws.path no longer exists here
    """

    def __init__(self, parent: str | Path, prefix: str = "transpiler_") -> None:
        self.parent = Path(parent)
        self.prefix = prefix
        self.path: Path | None = None
        self.created_at: str | None = None
        self._stack = ExitStack()

    def __enter__(self) -> "TransientWorkspace":
        path = unique_workspace_path(self.parent, self.prefix)
        try:
            path.mkdir(parents=True)
        except OSError as exc:
            raise WorkspaceError(f"Cannot create workspace {path}: {exc}", path=path) from exc

        self.path = path
        self.created_at = datetime.now(timezone.utc).isoformat()
        self._stack.callback(_remove_tree, path)
        console.print(f"[dim]{escape(str(path))}[/dim]")
        return self

    def __exit__(self, *exc_info: object) -> bool:
        return self._stack.__exit__(*exc_info)

    def write(self, filename: str, content: str) -> Path:
        """Write *content* to *filename* inside the workspace.

        The file gets its own removal callback, run before the directory is
        removed.

        Raises:
            WorkspaceError: If the workspace is not active or the write fails.
        """
        if self.path is None:
            raise WorkspaceError("Workspace is not active; use it as a context manager")

        target = self.path / filename
        try:
            target.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise WorkspaceError(f"Cannot write {target}: {exc}", path=target) from exc

        self._stack.callback(_remove_file, target)
        return target
