"""Configuration: hook config discovery (githooks.yml, pyproject.toml) and runtime settings."""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from githooks.hooks import HooksConfig, parse_hooks_config

from .errors import ConfigInvalid, ConfigNotFound

logger = logging.getLogger(__name__)

# Dedicated config files, in lookup order.
CONFIG_FILES = ("githooks.yml", "githooks.yaml")
MANIFEST_FILE = "pyproject.toml"
MANIFEST_KEY = "githooks"  # [tool.githooks]

DEFAULT_CONFIG = """\
# githooks configuration
# Install with: githooks install
#
# '*' never crosses '/', and '**' is not supported. The globs below list
# each directory depth explicitly (up to four levels deep); add another
# '*/' alternative for deeper files.

version: 2
hooks:
  pre-commit:
    - id: format
      name: ruff format
      run: format-check
      glob: "{*,*/*,*/*/*,*/*/*/*}.{py,pyi}"
      pass_filenames: true
    - id: lint
      name: ruff check
      run: lint-check
      glob: "{*,*/*,*/*/*,*/*/*/*}.py"
      pass_filenames: true

  pre-push:
    - id: test
      name: pytest
      run: test-run
"""

_TRUTHY = ("1", "true", "yes", "on")


@dataclass
class Settings:
    cwd: Path = field(default_factory=Path.cwd)
    verbose: bool = False
    yes: bool = False


def load_settings(
    cwd: Path | None = None,
    verbose: bool = False,
    yes: bool = False,
) -> Settings:
    """Load settings with priority: CLI flags > env > .env > defaults."""
    load_dotenv()

    settings = Settings()
    if cwd is not None:
        settings.cwd = cwd

    if os.getenv("GITHOOKS_VERBOSE", "").lower() in _TRUTHY:
        settings.verbose = True
    if os.getenv("GITHOOKS_YES", "").lower() in _TRUTHY:
        settings.yes = True

    if verbose:
        settings.verbose = True
    if yes:
        settings.yes = True
    return settings


def _read_yaml(path: Path) -> Any:
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        raise ConfigInvalid(f"Failed to parse {path}: {e}") from e


def _read_manifest_section(path: Path) -> Any | None:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        raise ConfigInvalid(f"Failed to parse {path}: {e}") from e
    tool = data.get("tool", {})
    if not isinstance(tool, dict):
        raise ConfigInvalid(f"{path.name}: 'tool' must be a table", field="tool")
    return tool.get(MANIFEST_KEY)


def _validate(data: Any, path: Path) -> HooksConfig:
    try:
        config = parse_hooks_config(data)
    except ConfigInvalid as e:
        raise ConfigInvalid(f"{path.name}: {e.detail}", trigger=e.trigger, field=e.field) from e
    config.source = path
    logger.debug("loaded %d trigger(s) from %s", len(config.triggers), path)
    return config


def load_hooks_config(root: Path) -> HooksConfig:
    """Load and validate the hook config, dedicated file first, then pyproject.toml."""
    for name in CONFIG_FILES:
        path = root / name
        if path.is_file():
            return _validate(_read_yaml(path), path)

    manifest = root / MANIFEST_FILE
    if manifest.is_file():
        section = _read_manifest_section(manifest)
        if section is not None:
            return _validate(section, manifest)

    raise ConfigNotFound()


def write_default_config(root: Path) -> Path:
    path = root / CONFIG_FILES[0]
    path.write_text(DEFAULT_CONFIG, encoding="utf-8")
    return path
