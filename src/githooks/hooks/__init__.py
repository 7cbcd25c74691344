"""Hooks: config model, glob filtering, built-ins and execution."""

from .builtins import BUILTINS, builtin
from .engine import build_command, execute_hook, run_command_hook
from .files import filter_files, is_file_trigger, select_files, should_skip
from .matcher import expand_braces, matches
from .models import (
    FILE_TRIGGERS,
    GIT_HOOKS,
    BuiltIn,
    ExternalCommand,
    HookDefinition,
    HookResult,
    HooksConfig,
    RunReport,
)
from .parser import parse_command, parse_hook_def, parse_hooks_config, resolve_run

__all__ = [
    "BUILTINS",
    "FILE_TRIGGERS",
    "GIT_HOOKS",
    "BuiltIn",
    "ExternalCommand",
    "HookDefinition",
    "HookResult",
    "HooksConfig",
    "RunReport",
    "build_command",
    "builtin",
    "execute_hook",
    "expand_braces",
    "filter_files",
    "is_file_trigger",
    "matches",
    "parse_command",
    "parse_hook_def",
    "parse_hooks_config",
    "resolve_run",
    "run_command_hook",
    "select_files",
    "should_skip",
]
