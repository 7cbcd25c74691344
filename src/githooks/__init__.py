"""githooks: declarative git hooks with glob-filtered, sequential execution."""

from .core.config import load_hooks_config
from .hooks import HookDefinition, HookResult, HooksConfig, RunReport
from .install import install
from .run import run

__all__ = [
    "HookDefinition",
    "HookResult",
    "HooksConfig",
    "RunReport",
    "install",
    "load_hooks_config",
    "run",
]
