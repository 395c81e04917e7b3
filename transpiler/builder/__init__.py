"""Transpiler builder module.

Turns a scan result into a generated Go program, runs it in a transient
workspace and relays the outcome.

Key classes:
    Transpiler          - end-to-end orchestration
    ProgramRenderer     - Jinja2 rendering of the generated program
    TransientWorkspace  - uniquely named directory removed on exit
    GoRunner            - ``go run`` invocation (a BuildRunner)
"""

from .go_runner import BuildRunner, GoRunner
from .models import BuildParameters, RunResult, TranspileReport
from .orchestrator import Transpiler, transpile
from .templates import ProgramRenderer, go_literal
from .workspace import TransientWorkspace

__all__ = [
    # Orchestration
    "Transpiler",
    "transpile",
    # Rendering
    "ProgramRenderer",
    "go_literal",
    # Workspace
    "TransientWorkspace",
    # Toolchain
    "BuildRunner",
    "GoRunner",
    # Value objects
    "BuildParameters",
    "RunResult",
    "TranspileReport",
]
