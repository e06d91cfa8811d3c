"""
Interactivity detection — can we prompt the user?

    CI set            → False   (unless SYSGREET_ASSUME_TTY is also set)
    SYSGREET_ASSUME_TTY set → True
    otherwise         → stdin.isatty()
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import TextIO

ASSUME_TTY_ENV_VAR = "SYSGREET_ASSUME_TTY"
CI_ENV_VAR = "CI"


def detect_interactive(stdin: TextIO | None, environ: Mapping[str, str] | None = None) -> bool:
    """Return True when prompting on ``stdin`` is appropriate."""
    env = os.environ if environ is None else environ

    if env.get(ASSUME_TTY_ENV_VAR, ""):
        return True
    if env.get(CI_ENV_VAR, ""):
        return False
    return _is_tty(stdin)


def _is_tty(stream: TextIO | None) -> bool:
    if stream is None:
        return False
    try:
        return bool(stream.isatty())
    except (AttributeError, OSError, ValueError):
        return False
