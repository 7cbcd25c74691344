"""Hook config parsing and validation: parse_hooks_config, parse_hook_def, parse_command."""

from __future__ import annotations

import logging
from typing import Any

from githooks.core.errors import ConfigInvalid

from .builtins import BUILTINS
from .models import (
    GIT_HOOKS,
    SCHEMA_VERSIONS,
    BuiltIn,
    ExternalCommand,
    HookDefinition,
    HooksConfig,
)

logger = logging.getLogger(__name__)

HOOK_KEYS = ("id", "name", "run", "glob", "exclude", "pass_filenames", "timeout", "restage")


def resolve_run(run: str) -> BuiltIn | ExternalCommand:
    """Resolve a ``run`` value once: reserved built-in name or shell command."""
    run = run.strip()
    if run in BUILTINS:
        return BuiltIn(run)
    return ExternalCommand(run)


def _optional_str(raw: dict, key: str, trigger: str, hook_id: str) -> str | None:
    value = raw.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigInvalid(
            f"Hook '{hook_id}' in {trigger}: '{key}' must be a string", trigger=trigger, field=key
        )
    return value or None


def _bool(raw: dict, key: str, trigger: str, hook_id: str) -> bool:
    value = raw.get(key, False)
    if not isinstance(value, bool):
        raise ConfigInvalid(
            f"Hook '{hook_id}' in {trigger}: '{key}' must be true or false",
            trigger=trigger,
            field=key,
        )
    return value


def _timeout(raw: dict, trigger: str, hook_id: str) -> float | None:
    value = raw.get("timeout")
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigInvalid(
            f"Hook '{hook_id}' in {trigger}: 'timeout' must be a positive number of seconds",
            trigger=trigger,
            field="timeout",
        )
    return float(value)


def parse_hook_def(raw: Any, trigger: str) -> HookDefinition:
    """Validate one version-2 hook entry."""
    if not isinstance(raw, dict):
        raise ConfigInvalid(
            f"Hook in {trigger} must be a mapping with 'id' and 'run' (got {type(raw).__name__})",
            trigger=trigger,
        )

    hook_id = raw.get("id")
    if not isinstance(hook_id, str) or not hook_id.strip():
        raise ConfigInvalid(f"Hook in {trigger} missing required 'id' field", trigger, "id")
    hook_id = hook_id.strip()

    run = raw.get("run")
    if not isinstance(run, str) or not run.strip():
        raise ConfigInvalid(f"Hook '{hook_id}' missing required 'run' field", trigger, "run")

    unknown = [k for k in raw if k not in HOOK_KEYS]
    if unknown:
        logger.warning("hook '%s' in %s: ignoring unknown keys %s", hook_id, trigger, unknown)

    glob = _optional_str(raw, "glob", trigger, hook_id)
    exclude = _optional_str(raw, "exclude", trigger, hook_id)
    for pattern in (glob, exclude):
        if pattern and "**" in pattern:
            logger.warning(
                "hook '%s' in %s: '**' is not supported, %r matches nothing",
                hook_id,
                trigger,
                pattern,
            )

    return HookDefinition(
        id=hook_id,
        run=resolve_run(run),
        name=_optional_str(raw, "name", trigger, hook_id) or "",
        glob=glob,
        exclude=exclude,
        pass_filenames=_bool(raw, "pass_filenames", trigger, hook_id),
        timeout=_timeout(raw, trigger, hook_id),
        restage=_bool(raw, "restage", trigger, hook_id),
    )


def parse_command(raw: Any, trigger: str) -> HookDefinition:
    """Validate one version-1 entry: a bare shell command."""
    if not isinstance(raw, str) or not raw.strip():
        raise ConfigInvalid(
            f"Entries in {trigger} must be non-empty command strings in version 1 configs",
            trigger=trigger,
        )
    command = raw.strip()
    return HookDefinition(id=command, run=ExternalCommand(command))


def _parse_version(data: dict) -> int:
    version = data.get("version", 2)
    if isinstance(version, bool) or version not in SCHEMA_VERSIONS:
        raise ConfigInvalid(
            f"Unsupported config version {version!r} (expected one of {list(SCHEMA_VERSIONS)})",
            field="version",
        )
    return version


def parse_hooks_config(data: Any) -> HooksConfig:
    """Validate a whole config mapping. Raises ConfigInvalid on any violation."""
    if not isinstance(data, dict):
        raise ConfigInvalid("Configuration must be a mapping")
    version = _parse_version(data)

    hooks = data.get("hooks")
    if not isinstance(hooks, dict):
        raise ConfigInvalid("Configuration must have a 'hooks' mapping", field="hooks")

    parse_entry = parse_command if version == 1 else parse_hook_def
    triggers: dict[str, list[HookDefinition]] = {}
    for trigger, entries in hooks.items():
        trigger = str(trigger)
        if trigger not in GIT_HOOKS:
            logger.warning("'%s' is not a known git hook name", trigger)
        if not isinstance(entries, list):
            raise ConfigInvalid(f"hooks.{trigger} must be a list", trigger=trigger)

        parsed: list[HookDefinition] = []
        seen: set[str] = set()
        for entry in entries:
            hook = parse_entry(entry, trigger)
            # version 1 commands carry no identity, repeats are allowed
            if version == 2 and hook.id in seen:
                raise ConfigInvalid(
                    f"Duplicate hook id '{hook.id}' in {trigger}", trigger=trigger, field="id"
                )
            seen.add(hook.id)
            parsed.append(hook)
        triggers[trigger] = parsed

    return HooksConfig(version=version, triggers=triggers)
