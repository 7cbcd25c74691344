"""Error taxonomy: config, repository and hook execution failures."""

from __future__ import annotations


class HooksError(Exception):
    """Base class for all errors raised by githooks."""


class ConfigNotFound(HooksError):
    """No recognised configuration source exists in the repository root."""

    def __init__(self, message: str = ""):
        super().__init__(
            message
            or "No configuration found. Create githooks.yml or add a "
            "[tool.githooks] table to pyproject.toml"
        )


class ConfigInvalid(HooksError):
    """A configuration source exists but fails structural validation."""

    def __init__(self, detail: str, trigger: str | None = None, field: str | None = None):
        super().__init__(detail)
        self.detail = detail
        self.trigger = trigger
        self.field = field


class NotARepository(HooksError):
    """The git repository root cannot be determined."""


class GitError(HooksError):
    """A git plumbing command exited non-zero."""


class HookExecutionFailure(HooksError):
    """A single hook's check or command failed. Recovered into a HookResult."""
