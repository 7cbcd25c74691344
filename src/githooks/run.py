"""Run orchestrator: execute the configured hooks for one git trigger."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from .core.config import load_hooks_config
from .core.errors import GitError, HooksError
from .core.git import get_git_root, stage_files
from .hooks import (
    HookDefinition,
    HookResult,
    RunReport,
    execute_hook,
    filter_files,
    is_file_trigger,
    select_files,
    should_skip,
)

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)


def _print_result(label: str, result: HookResult) -> None:
    if result.success:
        msg = f" [dim]({escape(result.message)})[/dim]" if result.message else ""
        console.print(f"  [green]✓[/green] {escape(label)}{msg}")
    else:
        msg = f"\n    {escape(result.message)}" if result.message else ""
        err_console.print(f"  [red]✗[/red] {escape(label)}{msg}")


def _restage(
    hook: HookDefinition, files: list[str] | None, root: Path, result: HookResult
) -> HookResult:
    if not (hook.restage and result.success and files):
        return result
    try:
        stage_files(root, files)
    except GitError as e:
        return HookResult(success=False, message=f"re-staging failed: {e}")
    logger.debug("re-staged %d file(s) for %s", len(files), hook.id)
    return result


def run_hooks(
    trigger: str,
    hooks: list[HookDefinition],
    files: list[str],
    root: Path,
) -> RunReport:
    """Execute *hooks* one after another, in order, and collect their results."""
    report = RunReport(trigger=trigger)
    for hook in hooks:
        matched = filter_files(files, hook) if is_file_trigger(trigger) else None

        if matched is not None and should_skip(trigger, matched, hook):
            console.print(f"  [dim]⊘ {escape(hook.label)} (no matching files)[/dim]")
            report.skipped.append(hook.label)
            continue

        result = execute_hook(hook, matched, root)
        result = _restage(hook, matched, root, result)
        report.add(hook.label, result)
        _print_result(hook.label, result)
    return report


def print_summary(report: RunReport) -> None:
    console.print()
    if report.success:
        console.print("All hooks passed!", style="bold green")
        return
    failed = report.failed
    err_console.print("Hooks failed!", style="bold red")
    err_console.print(f"\n{len(failed)} hook(s) failed:")
    for label in failed:
        err_console.print(f"  - {escape(label)}")
    err_console.print("\nFix the issues above and try again.", style="dim")


def run(trigger: str, cwd: Path | None = None, verbose: bool = False) -> int:
    """Run every hook configured for *trigger*. Returns the process exit code."""
    try:
        root = get_git_root(cwd)
        config = load_hooks_config(root)

        hooks = config.get_hooks(trigger)
        if not hooks:
            console.print(f"No hooks configured for {trigger}", style="dim")
            return 0

        console.print(f"\nRunning {trigger} hooks...\n", style="bold")

        files = select_files(trigger, root)
        if is_file_trigger(trigger) and not files:
            console.print("No staged files to check", style="dim")
            return 0
        if verbose:
            console.print(f"  {len(files)} candidate file(s)", style="dim")

        report = run_hooks(trigger, hooks, files, root)
        print_summary(report)
        return report.exit_code
    except HooksError as e:
        err_console.print(f"\nError: {escape(str(e))}", style="bold red")
        return 1
    except Exception as e:
        err_console.print(f"\nError: unexpected failure: {escape(str(e))}", style="bold red")
        if verbose:
            err_console.print_exception()
        return 1
