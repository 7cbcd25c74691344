"""Installer: render one trigger script per configured git hook and write it."""

from __future__ import annotations

import os
import shlex
import sys
from collections.abc import Callable
from pathlib import Path

from prompt_toolkit import prompt as pt_prompt
from rich.console import Console
from rich.markup import escape

from .core.config import CONFIG_FILES, load_hooks_config, write_default_config
from .core.errors import ConfigInvalid, ConfigNotFound
from .core.git import get_git_root, get_hooks_dir
from .core.utils import short_path
from .hooks import BuiltIn, HookDefinition, HooksConfig

console = Console()

SCRIPT_HEADER = """\
#!/bin/sh
# Generated by githooks - DO NOT EDIT
# To update, run: githooks install
"""


def confirm_create_default() -> bool:
    """Ask on the terminal whether to write the default githooks.yml."""
    console.print("\nNo configuration file found")
    console.print(f"\nWould you like to create a default {CONFIG_FILES[0]} with basic hooks?")
    console.print("  - pre-commit: ruff format --check, ruff check")
    console.print("  - pre-push: pytest")
    answer = pt_prompt("\nCreate default configuration? [Y/n] ").strip().lower()
    return answer in ("", "y", "yes")


def render_command_script(hooks: list[HookDefinition]) -> str:
    """Self-contained script: the commands run in order, stopping at the first failure."""
    lines = "\n".join(hook.run.command for hook in hooks)
    return f'{SCRIPT_HEADER}\nset -e\n\n{lines}\n\necho "✓ All hooks passed"\n'


def render_runner_script(trigger: str, python: str | None = None) -> str:
    """Script that hands the trigger to ``githooks run``."""
    python = shlex.quote(python or sys.executable)
    return f'{SCRIPT_HEADER}\nexec {python} -m githooks run {shlex.quote(trigger)} -- "$@"\n'


def render_script(config: HooksConfig, trigger: str) -> str:
    if config.version == 1:
        return render_command_script(config.get_hooks(trigger))
    return render_runner_script(trigger)


def _describe(hook: HookDefinition) -> str:
    if isinstance(hook.run, BuiltIn):
        what = f"built-in {hook.run.name}"
    else:
        what = hook.run.command
    if hook.id == what:
        return what
    return f"{hook.label}: {what}"


def _write_script(path: Path, script: str, verbose: bool) -> None:
    if verbose:
        console.print(f"    Writing to: {path}", style="dim")
    path.write_text(script, encoding="utf-8")
    # git for Windows runs hooks through its own sh
    if os.name != "nt":
        path.chmod(0o755)
        if verbose:
            console.print("    Set executable permissions (0755)", style="dim")


def install(
    cwd: Path | None = None,
    yes: bool = False,
    verbose: bool = False,
    confirm: Callable[[], bool] | None = None,
) -> list[Path]:
    """Install git hooks from the project configuration. Returns the written paths."""
    confirm = confirm or confirm_create_default
    console.print("Installing githooks...\n")

    root = get_git_root(cwd)
    console.print(f"Git root: {root}")

    try:
        config = load_hooks_config(root)
    except ConfigNotFound:
        if not (yes or confirm()):
            raise
        path = write_default_config(root)
        config = load_hooks_config(root)
        console.print(f"\nCreated {short_path(path, root)} with default configuration")

    if config.is_empty():
        source = short_path(config.source, root) if config.source else "configuration"
        raise ConfigInvalid(f"{source} declares no hooks, nothing to install", field="hooks")

    if verbose and config.source:
        console.print(f"Configuration: {config.source}", style="dim")

    triggers = config.trigger_names
    console.print(f"\nInstalling {len(triggers)} hook(s):\n")
    for trigger in triggers:
        console.print(f"{trigger}:")
        for hook in config.get_hooks(trigger):
            console.print(f"  - {escape(_describe(hook))}")

    # render everything before touching the hooks directory
    scripts = {trigger: render_script(config, trigger) for trigger in triggers}

    hooks_dir = get_hooks_dir(root)
    hooks_dir.mkdir(parents=True, exist_ok=True)
    if verbose:
        console.print(f"\nHooks directory: {hooks_dir}", style="dim")

    console.print()
    written: list[Path] = []
    for trigger, script in scripts.items():
        if verbose:
            console.print(f"  Installing {trigger}...", style="dim")
        path = hooks_dir / trigger
        _write_script(path, script, verbose)
        written.append(path)
        console.print(f"  Installed {trigger}")

    console.print("\nInstallation complete!", style="bold green")
    source = short_path(config.source, root) if config.source else CONFIG_FILES[0]
    console.print(f"Hooks will run automatically. To customize, edit {source}.")
    return written
