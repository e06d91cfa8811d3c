"""
Atomic file writes — replace a file's contents without ever exposing
a partial write.

The data goes to a temp file in the *same directory* as the target
(rename is only atomic within one filesystem), is fsynced, given its
final permissions, and then renamed over the target. A crash at any
point leaves either the old complete file or the new complete file.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from sysgreet.core.errors import BootstrapFilesystemError

logger = logging.getLogger(__name__)

DEFAULT_FILE_MODE = 0o644
DEFAULT_DIR_MODE = 0o755

_TMP_PREFIX = ".sysgreet-"
_TMP_SUFFIX = ".tmp"


def write_atomic(path: Path, data: bytes, mode: int = DEFAULT_FILE_MODE) -> None:
    """Write ``data`` to ``path`` atomically.

    Args:
        path: Target file. Parent directories are created if missing.
        data: Exact bytes to write.
        mode: Permission bits applied to the file before it is renamed
            into place. ``0`` means the default (0o644).

    Raises:
        BootstrapFilesystemError: Any step failed. The temp file is removed
            and the original target is left untouched.
    """
    path = Path(path)
    if mode == 0:
        mode = DEFAULT_FILE_MODE

    parent = path.parent
    try:
        parent.mkdir(mode=DEFAULT_DIR_MODE, parents=True, exist_ok=True)
    except OSError as e:
        raise BootstrapFilesystemError("atomic write: mkdir", parent, e) from e

    try:
        fd, tmp_name = tempfile.mkstemp(dir=parent, prefix=_TMP_PREFIX, suffix=_TMP_SUFFIX)
    except OSError as e:
        raise BootstrapFilesystemError("atomic write: create temp in", parent, e) from e
    tmp = Path(tmp_name)

    step = "write temp"
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
            fh.flush()
            step = "sync temp"
            os.fsync(fh.fileno())
        step = "chmod temp"
        os.chmod(tmp, mode)
        step = "replace"
        _replace(tmp, path)
    except OSError as e:
        tmp.unlink(missing_ok=True)
        raise BootstrapFilesystemError(f"atomic write: {step}", path, e) from e

    logger.debug("Wrote %d bytes to %s", len(data), path)


def _replace(tmp: Path, target: Path) -> None:
    """Rename ``tmp`` over ``target``.

    ``os.replace`` overwrites atomically on POSIX and Windows. Some
    filesystems (network shares, certain Windows setups) still refuse to
    replace an existing file; for those we remove the target first and
    rename again. That fallback has a brief window with no target file,
    which bootstrap only accepts because a backup already exists or the
    target was absent to begin with.
    """
    try:
        os.replace(tmp, target)
        return
    except PermissionError:
        if not target.exists():
            raise
        logger.debug("Direct replace of %s refused — falling back to remove+rename", target)

    target.unlink(missing_ok=True)
    os.replace(tmp, target)
