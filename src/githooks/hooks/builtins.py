"""Built-in checks: format-check, lint-check, test-run.

Each built-in receives the matched files, the repository root and an
optional timeout. Files are None on triggers that select no files, in
which case the whole project is checked; an empty list means nothing
matched and there is nothing to check. It returns a HookResult on success and raises
HookExecutionFailure when the check fails.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path

from githooks.core.errors import HookExecutionFailure
from githooks.core.utils import combine_output, plural, run_process

from .models import HookResult

BuiltinCheck = Callable[..., HookResult]

BUILTINS: dict[str, BuiltinCheck] = {}

# pytest: "no tests were collected"
PYTEST_NO_TESTS = 5


def builtin(name: str) -> Callable[[BuiltinCheck], BuiltinCheck]:
    """Register a check under a reserved ``run`` name."""

    def register(fn: BuiltinCheck) -> BuiltinCheck:
        BUILTINS[name] = fn
        return fn

    return register


def _python_module(module: str, *args: str) -> list[str]:
    return [sys.executable, "-m", module, *args]


def _checked(files: list[str] | None) -> str:
    return f"{plural(len(files), 'file')} checked" if files else "project checked"


def _targets(files: list[str] | None) -> list[str]:
    # None: the trigger selects no files, check the whole project
    return ["."] if files is None else files


@builtin("format-check")
def format_check(files: list[str] | None, root: Path, timeout: float | None = None) -> HookResult:
    """Fail when ruff would reformat any of *files* (or the project when None)."""
    if files == []:
        return HookResult(success=True, message="no matching files")
    targets = _targets(files)
    code, stdout, stderr = run_process(
        _python_module("ruff", "format", "--check", *targets), cwd=root, timeout=timeout
    )
    if code != 0:
        raise HookExecutionFailure(combine_output(stdout, stderr) or "formatting check failed")
    return HookResult(success=True, message=_checked(files))


@builtin("lint-check")
def lint_check(files: list[str] | None, root: Path, timeout: float | None = None) -> HookResult:
    """Fail on any ruff lint violation in *files* (or the project when None)."""
    if files == []:
        return HookResult(success=True, message="no matching files")
    targets = _targets(files)
    code, stdout, stderr = run_process(
        _python_module("ruff", "check", *targets), cwd=root, timeout=timeout
    )
    if code != 0:
        raise HookExecutionFailure(combine_output(stdout, stderr) or "lint check failed")
    return HookResult(success=True, message=_checked(files))


@builtin("test-run")
def run_tests(files: list[str] | None, root: Path, timeout: float | None = None) -> HookResult:
    """Run the project's pytest suite. *files* is ignored."""
    code, stdout, stderr = run_process(_python_module("pytest", "-q"), cwd=root, timeout=timeout)
    if code == PYTEST_NO_TESTS:
        return HookResult(success=True, message="no tests collected")
    if code != 0:
        raise HookExecutionFailure(combine_output(stdout, stderr) or "tests failed")
    lines = [line for line in stdout.splitlines() if line.strip()]
    return HookResult(success=True, message=lines[-1].strip("= ") if lines else "")
