"""
Config bootstrap use case — make sure the config file is in the state
the resolved policy asks for, before anything loads it.

    probe path        policy      →  action
    ────────────────  ──────────     ──────────────────────────────────
    directory         any            ConfigPathIsDirectoryError
    missing           keep           kept        (nothing written)
    missing           overwrite      created     (defaults written)
    missing           prompt         created     (no prompt: nothing to lose)
    other stat error  any            BootstrapFilesystemError
    regular file      keep           kept
    regular file      overwrite      overwritten (backup, then write)
    regular file      prompt         ask → kept / overwritten / skipped + UserCancelledError

The only content ever written is the rendered default config. The old
file is never read or merged, only moved aside as a backup.
"""

from __future__ import annotations

import logging
import os
import stat
import threading
from datetime import UTC, datetime
from pathlib import Path
from typing import TextIO

from sysgreet.core.config.defaults import render_default_config
from sysgreet.core.errors import (
    BootstrapFilesystemError,
    ConfigPathIsDirectoryError,
    OperationCancelledError,
    UserCancelledError,
)
from sysgreet.core.models.bootstrap import (
    Action,
    BootstrapIO,
    BootstrapOptions,
    BootstrapResult,
    PolicyValue,
    PromptDecision,
)
from sysgreet.core.observability.logging_config import ECHOED
from sysgreet.core.persistence.atomic_file import DEFAULT_FILE_MODE, write_atomic
from sysgreet.core.persistence.backup import create_backup
from sysgreet.core.services.policy import resolve_policy
from sysgreet.core.services.prompt import ask_overwrite

logger = logging.getLogger(__name__)

STATUS_PREFIX = "sysgreet bootstrap"


def bootstrap_config(
    path: Path,
    io: BootstrapIO | None = None,
    options: BootstrapOptions | None = None,
    cancel: threading.Event | None = None,
    now: datetime | None = None,
) -> BootstrapResult:
    """Bootstrap the config file at ``path`` according to policy.

    Args:
        path: Config file location.
        io: Streams for the prompt and the status line (default: in-memory).
        options: Raw flag/env policy and interactivity.
        cancel: Optional token; when set, the next checkpoint raises.
        now: Clock override for backup names and ``created_at``.

    Returns:
        BootstrapResult describing what happened.

    Raises:
        InvalidPolicyError / PolicyRequiredError: Policy could not be resolved.
        ConfigPathIsDirectoryError: ``path`` is a directory.
        BootstrapFilesystemError: stat, backup, or write failed.
        UserCancelledError: User chose cancel (``.result`` has action=skipped).
        OperationCancelledError: ``cancel`` was set at a checkpoint.
    """
    if not path:
        raise ValueError("bootstrap: config path required")
    path = Path(path)
    io = io or BootstrapIO()
    options = options or BootstrapOptions()
    now = now or datetime.now(UTC)

    _checkpoint(cancel, "policy resolution")
    resolution = resolve_policy(options.flag_policy, options.env_policy, options.interactive)
    logger.debug(
        "Bootstrap %s: policy=%s (source=%s, interactive=%s)",
        path, resolution.value, resolution.source, resolution.interactive,
    )

    result = BootstrapResult(action=Action.SKIPPED, config_path=path, policy=resolution.value)

    _checkpoint(cancel, "stat")
    exists = _probe(path)

    if not exists:
        return _bootstrap_missing(result, io, cancel, now)

    match resolution.value:
        case PolicyValue.KEEP:
            return _finish(result, Action.KEPT, io.stderr)
        case PolicyValue.OVERWRITE:
            return _overwrite(result, io, cancel, now)
        case PolicyValue.PROMPT:
            return _prompt(result, io, cancel, now)


# ── Branches ────────────────────────────────────────────────────


def _bootstrap_missing(
    result: BootstrapResult,
    io: BootstrapIO,
    cancel: threading.Event | None,
    now: datetime,
) -> BootstrapResult:
    # keep on an absent file is a no-op, not an error.
    if result.policy is PolicyValue.KEEP:
        return _finish(result, Action.KEPT, io.stderr)

    _checkpoint(cancel, "write")
    _write_defaults(result.config_path, now)
    return _finish(result, Action.CREATED, io.stderr)


def _overwrite(
    result: BootstrapResult,
    io: BootstrapIO,
    cancel: threading.Event | None,
    now: datetime,
) -> BootstrapResult:
    data = render_default_config(now)

    _checkpoint(cancel, "backup")
    result.backup_path = create_backup(result.config_path, now)

    _checkpoint(cancel, "write")
    _write_defaults(result.config_path, now, data)
    return _finish(result, Action.OVERWRITTEN, io.stderr)


def _prompt(
    result: BootstrapResult,
    io: BootstrapIO,
    cancel: threading.Event | None,
    now: datetime,
) -> BootstrapResult:
    _checkpoint(cancel, "prompt")
    decision = ask_overwrite(io.stdin, io.stderr, result.config_path)
    result.prompted = True
    logger.debug("Prompt decision for %s: %s", result.config_path, decision)

    match decision:
        case PromptDecision.KEEP:
            return _finish(result, Action.KEPT, io.stderr)
        case PromptDecision.OVERWRITE:
            return _overwrite(result, io, cancel, now)
        case PromptDecision.CANCEL:
            result.action = Action.SKIPPED
            raise UserCancelledError(result)


# ── Helpers ─────────────────────────────────────────────────────


def _checkpoint(cancel: threading.Event | None, step: str) -> None:
    if cancel is not None and cancel.is_set():
        raise OperationCancelledError(step)


def _probe(path: Path) -> bool:
    """True if ``path`` is an existing file; False if absent."""
    try:
        st = os.stat(path)
    except FileNotFoundError:
        return False
    except OSError as e:
        raise BootstrapFilesystemError("bootstrap: stat config", path, e) from e

    if stat.S_ISDIR(st.st_mode):
        raise ConfigPathIsDirectoryError(path)
    return True


def _write_defaults(path: Path, now: datetime, data: bytes | None = None) -> None:
    if data is None:
        data = render_default_config(now)
    write_atomic(path, data, DEFAULT_FILE_MODE)


def _finish(result: BootstrapResult, action: Action, err: TextIO) -> BootstrapResult:
    result.action = action
    line = status_line(result)
    err.write(line + "\n")
    err.flush()
    logger.info(line, extra=ECHOED)
    return result


def status_line(result: BootstrapResult) -> str:
    """Human-readable summary of a bootstrap result."""
    path = result.config_path
    match result.action:
        case Action.CREATED:
            return f"{STATUS_PREFIX}: created default config at {path}"
        case Action.KEPT:
            return f"{STATUS_PREFIX}: keeping existing config at {path}"
        case Action.OVERWRITTEN:
            return f"{STATUS_PREFIX}: overwrote config at {path} (backup: {result.backup_path})"
        case Action.SKIPPED:
            return f"{STATUS_PREFIX}: skipped bootstrap for {path}"
