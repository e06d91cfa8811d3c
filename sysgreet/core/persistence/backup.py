"""
Config backups — move the current file aside before it is overwritten.

Backups are siblings named ``<name>.bak-YYYYMMDD-HHMMSS`` (UTC). The
file is *renamed*, not copied: one OS call both preserves the old
contents and frees the original path. Only the newest backup is kept.

Known gap: two backups in the same second share a name. On POSIX the
second rename silently replaces the first backup; on Windows it fails.
"""

from __future__ import annotations

import logging
import os
from datetime import UTC, datetime
from pathlib import Path

from sysgreet.core.errors import BootstrapFilesystemError

logger = logging.getLogger(__name__)

BACKUP_MARKER = ".bak-"
BACKUP_TIME_FORMAT = "%Y%m%d-%H%M%S"


def backup_path_for(path: Path, now: datetime) -> Path:
    """Sibling backup path for ``path`` at time ``now`` (converted to UTC)."""
    path = Path(path)
    stamp = now.astimezone(UTC).strftime(BACKUP_TIME_FORMAT)
    return path.with_name(f"{path.name}{BACKUP_MARKER}{stamp}")


def create_backup(path: Path, now: datetime | None = None) -> Path:
    """Rename ``path`` to its timestamped backup, then prune older backups.

    Args:
        path: The existing config file.
        now: Timestamp for the backup name (defaults to the current time).

    Returns:
        Path of the backup just created.

    Raises:
        BootstrapFilesystemError: The rename or the prune failed. A rename
            failure (e.g. the file vanished since it was probed) leaves the
            filesystem untouched.
    """
    path = Path(path)
    backup = backup_path_for(path, now or datetime.now(UTC))

    try:
        os.rename(path, backup)
    except OSError as e:
        raise BootstrapFilesystemError("create backup", path, e) from e

    logger.debug("Moved %s → %s", path, backup)
    prune_backups(path, keep=backup)
    return backup


def prune_backups(path: Path, keep: Path) -> list[Path]:
    """Delete every ``<name>.bak-*`` sibling of ``path`` except ``keep``.

    Entries that disappear before we get to them are ignored. Any other
    removal failure propagates.

    Returns:
        The backups that were removed.
    """
    path = Path(path)
    prefix = f"{path.name}{BACKUP_MARKER}"
    parent = path.parent

    try:
        names = sorted(os.listdir(parent))
    except OSError as e:
        raise BootstrapFilesystemError("list backups in", parent, e) from e

    removed: list[Path] = []
    for name in names:
        if not name.startswith(prefix) or name == keep.name:
            continue
        stale = parent / name
        try:
            stale.unlink()
        except FileNotFoundError:
            continue
        except OSError as e:
            raise BootstrapFilesystemError("remove old backup", stale, e) from e
        removed.append(stale)
        logger.debug("Pruned old backup %s", stale)

    return removed
