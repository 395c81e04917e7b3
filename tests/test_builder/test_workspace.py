"""Unit tests for the transient workspace (transpiler.builder.workspace).

Tests cover:
- Unique naming under the parent directory
- Removal on normal exit and on exceptions
- Program file writes and their removal callbacks
- WorkspaceError on mkdir / write failures
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from tests._fixtures.go_tree import workspaces_in
from transpiler.builder.workspace import TransientWorkspace, unique_workspace_path
from transpiler.errors import WorkspaceError


# ---------------------------------------------------------------------------
# unique_workspace_path
# ---------------------------------------------------------------------------


class TestUniqueWorkspacePath:
    @pytest.mark.unit
    def test_uses_prefix_and_time_token(self, tmp_path: Path):
        with patch("transpiler.builder.workspace.time.time_ns", return_value=1234):
            path = unique_workspace_path(tmp_path, "transpiler_")
        assert path == tmp_path / "transpiler_1234"

    @pytest.mark.unit
    def test_bumps_token_when_taken(self, tmp_path: Path):
        (tmp_path / "transpiler_1234").mkdir()
        (tmp_path / "transpiler_1235").mkdir()
        with patch("transpiler.builder.workspace.time.time_ns", return_value=1234):
            path = unique_workspace_path(tmp_path, "transpiler_")
        assert path == tmp_path / "transpiler_1236"
        assert not path.exists()


# ---------------------------------------------------------------------------
# TransientWorkspace
# ---------------------------------------------------------------------------


class TestTransientWorkspace:
    @pytest.mark.unit
    def test_exists_inside_and_removed_after(self, working_dir: Path):
        with TransientWorkspace(working_dir) as ws:
            assert ws.path is not None
            assert ws.path.is_dir()
            assert ws.path.parent == working_dir
            assert ws.path.name.startswith("transpiler_")
            assert ws.created_at is not None
            seen = ws.path
        assert not seen.exists()
        assert workspaces_in(working_dir) == []

    @pytest.mark.unit
    def test_removed_when_body_raises(self, working_dir: Path):
        with pytest.raises(RuntimeError, match="boom"):
            with TransientWorkspace(working_dir) as ws:
                ws.write("transpiler.go", "package main\n")
                raise RuntimeError("boom")
        assert workspaces_in(working_dir) == []

    @pytest.mark.unit
    def test_write_creates_program_file(self, working_dir: Path):
        with TransientWorkspace(working_dir) as ws:
            program = ws.write("transpiler.go", "package main\n")
            assert program == ws.path / "transpiler.go"
            assert program.read_text(encoding="utf-8") == "package main\n"
        assert not program.exists()

    @pytest.mark.unit
    def test_file_removed_before_directory(self, working_dir: Path):
        order: list[str] = []
        with patch(
            "transpiler.builder.workspace._remove_file",
            side_effect=lambda p: order.append(f"file:{p.name}"),
        ), patch(
            "transpiler.builder.workspace._remove_tree",
            side_effect=lambda p: order.append("tree"),
        ):
            with TransientWorkspace(working_dir) as ws:
                ws.write("transpiler.go", "package main\n")
        assert order == ["file:transpiler.go", "tree"]

    @pytest.mark.unit
    def test_custom_prefix(self, working_dir: Path):
        with TransientWorkspace(working_dir, prefix="tsgen_") as ws:
            assert ws.path.name.startswith("tsgen_")

    @pytest.mark.unit
    def test_two_workspaces_get_different_names(self, working_dir: Path):
        with TransientWorkspace(working_dir) as first, TransientWorkspace(working_dir) as second:
            assert first.path != second.path
        assert workspaces_in(working_dir) == []

    @pytest.mark.unit
    def test_creation_failure_raises_workspace_error(self, tmp_path: Path):
        not_a_dir = tmp_path / "file.txt"
        not_a_dir.write_text("x", encoding="utf-8")
        with pytest.raises(WorkspaceError) as exc_info:
            with TransientWorkspace(not_a_dir):
                pytest.fail("body must not run")
        assert exc_info.value.path is not None
        assert exc_info.value.path.parent == not_a_dir

    @pytest.mark.unit
    def test_write_failure_raises_and_still_cleans_up(self, working_dir: Path):
        with pytest.raises(WorkspaceError):
            with TransientWorkspace(working_dir) as ws:
                ws.write("missing-dir/transpiler.go", "package main\n")
        assert workspaces_in(working_dir) == []

    @pytest.mark.unit
    def test_write_outside_context_rejected(self, working_dir: Path):
        ws = TransientWorkspace(working_dir)
        with pytest.raises(WorkspaceError, match="not active"):
            ws.write("transpiler.go", "")

    @pytest.mark.unit
    def test_cleanup_tolerates_already_removed_directory(self, working_dir: Path):
        import shutil

        with TransientWorkspace(working_dir) as ws:
            ws.write("transpiler.go", "package main\n")
            shutil.rmtree(ws.path)
        assert workspaces_in(working_dir) == []
