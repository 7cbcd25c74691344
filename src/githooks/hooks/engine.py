"""Hook execution engine: execute_hook, run_command_hook, build_command."""

from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path

from githooks.core.errors import HookExecutionFailure
from githooks.core.utils import combine_output, run_process

from .builtins import BUILTINS
from .models import BuiltIn, HookDefinition, HookResult

logger = logging.getLogger(__name__)


def build_command(hook: HookDefinition, files: list[str] | None) -> str:
    """The shell line for an external hook, with matched files appended if requested."""
    cmd = hook.run.command
    if hook.pass_filenames and files:
        cmd = " ".join([cmd, *(shlex.quote(f) for f in files)])
    return cmd


def run_command_hook(hook: HookDefinition, files: list[str] | None, root: Path) -> HookResult:
    """Execute an external command hook in *root*."""
    cmd = build_command(hook, files)
    logger.debug("running %s: %s", hook.id, cmd)
    code, stdout, stderr = run_process(cmd, cwd=root, timeout=hook.timeout, shell=True)
    output = combine_output(stdout, stderr)
    if code != 0:
        raise HookExecutionFailure(output or f"exited with status {code}")
    if output:
        logger.debug("%s output:\n%s", hook.id, output)
    return HookResult(success=True)


def run_builtin_hook(hook: HookDefinition, files: list[str] | None, root: Path) -> HookResult:
    check = BUILTINS.get(hook.run.name)
    if check is None:
        raise HookExecutionFailure(f"unknown built-in '{hook.run.name}'")
    if files is None:
        logger.debug("running built-in %s on the project", hook.run.name)
    else:
        logger.debug("running built-in %s on %d file(s)", hook.run.name, len(files))
    return check(files, root, hook.timeout)


def execute_hook(hook: HookDefinition, files: list[str] | None, root: Path) -> HookResult:
    """Run one hook against its matched files. Never raises.

    *files* is None when the trigger selects no files at all.
    """
    try:
        if isinstance(hook.run, BuiltIn):
            return run_builtin_hook(hook, files, root)
        return run_command_hook(hook, files, root)
    except HookExecutionFailure as e:
        return HookResult(success=False, message=str(e))
    except subprocess.TimeoutExpired:
        return HookResult(success=False, message=f"timed out after {hook.timeout:g}s")
    except Exception as e:
        logger.debug("hook %s raised", hook.id, exc_info=True)
        return HookResult(success=False, message=f"{type(e).__name__}: {e}")
