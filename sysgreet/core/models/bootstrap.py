"""
Bootstrap models — the vocabulary of one config bootstrap run.

All values are created fresh per invocation. Nothing here is persisted;
the only durable state is the config file itself (and its backup).
"""

from __future__ import annotations

import io
import sys
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import TextIO


class PolicyValue(StrEnum):
    """What to do with an existing config file."""

    KEEP = "keep"
    OVERWRITE = "overwrite"
    PROMPT = "prompt"


class PolicySource(StrEnum):
    """Where the effective policy came from (diagnostics only)."""

    FLAG = "flag"
    ENV = "env"
    DEFAULT = "default"


class Action(StrEnum):
    """Terminal outcome of one bootstrap invocation."""

    SKIPPED = "skipped"
    CREATED = "created"
    OVERWRITTEN = "overwritten"
    KEPT = "kept"


class PromptDecision(StrEnum):
    """Answer produced by the interactive overwrite prompt."""

    KEEP = "keep"
    OVERWRITE = "overwrite"
    CANCEL = "cancel"


@dataclass(frozen=True)
class PolicyResolution:
    """The evaluated policy. Prompt is only ever resolved when interactive."""

    value: PolicyValue
    source: PolicySource
    interactive: bool

    def __post_init__(self) -> None:
        if self.value is PolicyValue.PROMPT and not self.interactive:
            raise ValueError("prompt policy requires an interactive terminal")


@dataclass(frozen=True)
class BootstrapOptions:
    """Raw policy inputs for a bootstrap run.

    ``flag_policy`` and ``env_policy`` are unparsed; empty means "not provided".
    """

    flag_policy: str = ""
    env_policy: str = ""
    interactive: bool = False


@dataclass
class BootstrapIO:
    """Streams used by bootstrap.

    ``stdin`` feeds the overwrite prompt; the prompt and the status line go to
    ``stderr`` so the banner on stdout stays clean.
    """

    stdin: TextIO = field(default_factory=io.StringIO)
    stderr: TextIO = field(default_factory=io.StringIO)

    @classmethod
    def from_process(cls) -> BootstrapIO:
        """Bind to the real process streams."""
        return cls(stdin=sys.stdin, stderr=sys.stderr)


@dataclass
class BootstrapResult:
    """Full observable outcome of a bootstrap run."""

    action: Action
    config_path: Path
    policy: PolicyValue
    backup_path: Path | None = None
    prompted: bool = False

    def to_dict(self) -> dict:
        return {
            "action": str(self.action),
            "config_path": str(self.config_path),
            "backup_path": str(self.backup_path) if self.backup_path else None,
            "policy": str(self.policy),
            "prompted": self.prompted,
        }
