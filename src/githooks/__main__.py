"""CLI entry point: `githooks install` and `githooks run <trigger>`."""

from __future__ import annotations

import logging
import sys

import click
from rich.console import Console
from rich.markup import escape

from .core.config import load_settings
from .core.errors import HooksError
from .install import install
from .run import run

console = Console(stderr=True)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
def cli():
    """githooks: declarative git hooks."""


@cli.command("install")
@click.option("--yes", "-y", is_flag=True, help="Skip interactive prompts (use defaults)")
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output during installation")
def install_cmd(yes: bool, verbose: bool):
    """Install git hooks from githooks.yml or pyproject.toml."""
    settings = load_settings(verbose=verbose, yes=yes)
    _setup_logging(settings.verbose)
    try:
        install(cwd=settings.cwd, yes=settings.yes, verbose=settings.verbose)
    except HooksError as e:
        console.print(f"\nInstallation failed: {escape(str(e))}", style="bold")
        sys.exit(1)
    except Exception as e:
        console.print(f"\nInstallation failed: unexpected error: {escape(str(e))}", style="bold")
        if settings.verbose:
            console.print_exception()
        sys.exit(1)


@cli.command("run")
@click.argument("trigger")
@click.argument("git_args", nargs=-1)
@click.option("--verbose", "-v", is_flag=True, help="Show hook output and diagnostics")
def run_cmd(trigger: str, git_args: tuple[str, ...], verbose: bool):
    """Run the hooks configured for TRIGGER (e.g. pre-commit).

    Extra arguments git passes to the hook script (such as the remote name
    for pre-push) are accepted and ignored.
    """
    settings = load_settings(verbose=verbose)
    _setup_logging(settings.verbose)
    if git_args:
        logging.getLogger(__name__).debug("git hook arguments: %s", git_args)
    sys.exit(run(trigger, cwd=settings.cwd, verbose=settings.verbose))


def main():
    cli()


if __name__ == "__main__":
    main()
