"""Hook data models: HookDefinition, HooksConfig, HookResult, RunReport."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

GIT_HOOKS = (
    "applypatch-msg",
    "pre-applypatch",
    "post-applypatch",
    "pre-commit",
    "pre-merge-commit",
    "prepare-commit-msg",
    "commit-msg",
    "post-commit",
    "pre-rebase",
    "post-checkout",
    "post-merge",
    "pre-push",
    "post-rewrite",
)

# Triggers with a changed-file concept; hooks on them see staged paths.
FILE_TRIGGERS = ("pre-commit",)

SCHEMA_VERSIONS = (1, 2)


@dataclass(frozen=True)
class BuiltIn:
    """A check shipped with githooks, selected by reserved name."""

    name: str


@dataclass(frozen=True)
class ExternalCommand:
    """An arbitrary shell command line."""

    command: str


@dataclass(frozen=True)
class HookDefinition:
    """One configured check bound to a trigger."""

    id: str
    run: BuiltIn | ExternalCommand
    name: str = ""
    glob: str | None = None
    exclude: str | None = None
    pass_filenames: bool = False
    timeout: float | None = None
    restage: bool = False

    @property
    def label(self) -> str:
        return self.name or self.id


@dataclass
class HooksConfig:
    """Trigger name -> ordered hook definitions."""

    version: int = 2
    triggers: dict[str, list[HookDefinition]] = field(default_factory=dict)
    source: Path | None = None

    def get_hooks(self, trigger: str) -> list[HookDefinition]:
        return list(self.triggers.get(trigger, []))

    @property
    def trigger_names(self) -> list[str]:
        return list(self.triggers)

    def is_empty(self) -> bool:
        return all(len(hooks) == 0 for hooks in self.triggers.values())


@dataclass(frozen=True)
class HookResult:
    """Outcome of one executed hook."""

    success: bool
    message: str = ""


@dataclass
class RunReport:
    """Results of one trigger invocation, in execution order."""

    trigger: str
    results: list[tuple[str, HookResult]] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    def add(self, label: str, result: HookResult) -> None:
        self.results.append((label, result))

    @property
    def success(self) -> bool:
        return all(r.success for _, r in self.results)

    @property
    def failed(self) -> list[str]:
        return [label for label, r in self.results if not r.success]

    @property
    def exit_code(self) -> int:
        return 0 if self.success else 1
