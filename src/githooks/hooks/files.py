"""Candidate file selection per trigger and per-hook glob filtering."""

from __future__ import annotations

from pathlib import Path

from githooks.core.git import get_staged_files

from .matcher import matches
from .models import FILE_TRIGGERS, HookDefinition


def is_file_trigger(trigger: str) -> bool:
    return trigger in FILE_TRIGGERS


def select_files(trigger: str, root: Path) -> list[str]:
    """Candidate paths for *trigger*: staged files for pre-commit, else none."""
    if not is_file_trigger(trigger):
        return []
    return get_staged_files(root)


def filter_files(files: list[str], hook: HookDefinition) -> list[str]:
    """Apply the hook's include glob, then its exclude glob."""
    matched = list(files)
    if hook.glob:
        matched = [f for f in matched if matches(f, hook.glob)]
    if hook.exclude:
        matched = [f for f in matched if not matches(f, hook.exclude)]
    return matched


def should_skip(trigger: str, files: list[str], hook: HookDefinition) -> bool:
    """A file-gated hook with nothing left to check is skipped, not run."""
    return is_file_trigger(trigger) and hook.pass_filenames and not files
