"""Process runner, output truncation, path display helpers."""

from __future__ import annotations

import subprocess
from pathlib import Path

MAX_OUTPUT_BYTES = 16 * 1024  # 16KB


def truncate(text: str, max_bytes: int = MAX_OUTPUT_BYTES) -> str:
    """Truncate text to max_bytes."""
    encoded = text.encode("utf-8", errors="replace")
    if len(encoded) <= max_bytes:
        return text
    truncated = encoded[:max_bytes].decode("utf-8", errors="ignore")
    return truncated + f"\n\n... [truncated, {len(encoded)} bytes total]"


def combine_output(stdout: str, stderr: str) -> str:
    """Join captured stdout/stderr into one trimmed, truncated message."""
    parts = [s.strip() for s in (stdout, stderr) if s and s.strip()]
    return truncate("\n".join(parts))


def run_process(
    args: list[str] | str,
    cwd: Path,
    timeout: float | None = None,
    shell: bool = False,
) -> tuple[int, str, str]:
    """Run a child process to completion. Returns (exit_code, stdout, stderr).

    OSError and TimeoutExpired propagate; callers decide how to report them.
    """
    result = subprocess.run(
        args,
        cwd=str(cwd),
        shell=shell,
        timeout=timeout,
        capture_output=True,
        text=True,
    )
    return result.returncode, result.stdout, result.stderr


def plural(count: int, noun: str) -> str:
    """'1 file', '3 files'."""
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def short_path(p: Path, base: Path | None = None) -> str:
    """Return path relative to *base* (default: cwd), or the absolute path."""
    base = base or Path.cwd()
    try:
        return str(p.relative_to(base))
    except ValueError:
        return str(p)
