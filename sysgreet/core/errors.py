"""
Error taxonomy for sysgreet.

Every error the bootstrap and config layers raise derives from
``SysgreetError`` so the CLI can catch one type and exit non-zero.

    Configuration errors   InvalidPolicyError, PolicyRequiredError, ConfigError
    Filesystem errors      BootstrapFilesystemError, ConfigPathIsDirectoryError
    Cancellation           UserCancelledError (clean exit), OperationCancelledError
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sysgreet.core.models.bootstrap import BootstrapResult


class SysgreetError(Exception):
    """Base class for all sysgreet errors."""


# ── Configuration errors ────────────────────────────────────────


class InvalidPolicyError(SysgreetError):
    """A policy string was provided but is not prompt, keep, or overwrite."""

    def __init__(self, raw: str, source: str = "") -> None:
        self.raw = raw
        self.source = source
        where = f" (from {source})" if source else ""
        super().__init__(
            f"invalid config policy value {raw!r}{where}; "
            "expected one of: prompt, keep, overwrite"
        )


class PolicyRequiredError(SysgreetError):
    """No policy was given and prompting is impossible (non-interactive run)."""

    def __init__(self, message: str = "") -> None:
        super().__init__(
            message
            or "config policy required when prompts are unavailable; "
            "pass --config-policy=keep|overwrite or set SYSGREET_CONFIG_POLICY"
        )


class ConfigError(SysgreetError):
    """Raised when the configuration file cannot be read or is invalid."""


# ── Filesystem errors ───────────────────────────────────────────


class BootstrapFilesystemError(SysgreetError):
    """A filesystem step failed. Carries the operation name and path."""

    def __init__(self, operation: str, path: Path | str, cause: BaseException) -> None:
        self.operation = operation
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"{operation} {self.path}: {cause}")


class ConfigPathIsDirectoryError(SysgreetError):
    """The config path points at a directory; bootstrap refuses to touch it."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"bootstrap: config path {self.path} is a directory")


# ── Cancellation ────────────────────────────────────────────────


class UserCancelledError(SysgreetError):
    """The user chose cancel at the overwrite prompt.

    Not a failure: callers should exit quietly with status 0.
    """

    def __init__(self, result: BootstrapResult | None = None) -> None:
        self.result = result
        super().__init__("sysgreet bootstrap cancelled by user")


class OperationCancelledError(SysgreetError):
    """The caller's cancellation token was set before a bootstrap step."""

    def __init__(self, step: str = "") -> None:
        self.step = step
        suffix = f" before {step}" if step else ""
        super().__init__(f"bootstrap cancelled{suffix}")


class PromptReadError(SysgreetError):
    """Reading the user's answer from the input stream failed."""
