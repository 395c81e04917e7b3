"""Shared pytest fixtures for the transpiler test suite.

Provides reusable fixtures for:
- Go source trees (models packages) built in temp directories
- A fake BuildRunner that records calls instead of spawning ``go``
- Fake ``go`` executables for end-to-end runs without a toolchain
"""

from __future__ import annotations

import stat
import sys
from pathlib import Path

import pytest

from tests._fixtures.go_tree import ORDER_CUSTOMER_SOURCE, FakeRunner, GoTreeBuilder
from transpiler.builder.models import RunResult


# ---------------------------------------------------------------------------
# Go sources & directories
# ---------------------------------------------------------------------------


@pytest.fixture
def go_tree(tmp_path: Path) -> GoTreeBuilder:
    """An empty models package directory with write/scan helpers."""
    return GoTreeBuilder(tmp_path)


@pytest.fixture
def models_dir(go_tree: GoTreeBuilder) -> Path:
    """A models package with ``Order`` and ``Customer`` in one file."""
    go_tree.write({"models.go": ORDER_CUSTOMER_SOURCE})
    return go_tree.root


@pytest.fixture
def working_dir(tmp_path: Path) -> Path:
    """Parent directory for transient workspaces."""
    work = tmp_path / "work"
    work.mkdir()
    return work


# ---------------------------------------------------------------------------
# Build runners
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_runner() -> FakeRunner:
    """A runner that succeeds and prints ``OK``."""
    return FakeRunner()


@pytest.fixture
def failing_runner() -> FakeRunner:
    """A runner whose program panics like a failed ConvertToFile."""
    return FakeRunner(
        result=RunResult(
            success=False,
            exit_code=2,
            output="panic: open /nope/models.ts: no such file or directory\n",
            command="go run transpiler.go",
        )
    )


def _write_script(path: Path, body: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("#!/bin/sh\n" + body, encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def fake_go(tmp_path: Path) -> Path:
    """An executable that acts like ``go run`` for a program that succeeds.

    Echoes the generated source and ``OK`` on stdout, and a note on stderr.
    """
    if sys.platform == "win32":
        pytest.skip("shell script stand-in for go needs a POSIX shell")
    return _write_script(
        tmp_path / "bin" / "fakego",
        'if [ "$1" != "run" ]; then echo "unexpected: $1" >&2; exit 64; fi\n'
        'cat "$2"\n'
        'echo "compiling $2" >&2\n'
        "echo OK\n",
    )


@pytest.fixture
def broken_go(tmp_path: Path) -> Path:
    """An executable that fails like ``go run`` on a conversion panic."""
    if sys.platform == "win32":
        pytest.skip("shell script stand-in for go needs a POSIX shell")
    return _write_script(
        tmp_path / "bin" / "brokengo",
        'echo "panic: converter exploded" >&2\n'
        "exit 2\n",
    )
