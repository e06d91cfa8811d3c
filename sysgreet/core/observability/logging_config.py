"""
Logging for the sysgreet CLI.

The banner owns stdout and the bootstrap status line is already printed on
stderr, so the console handler stays quiet (WARNING, bare ``sysgreet:``
prefix) unless asked otherwise. Level precedence:

    --debug > --verbose > --quiet > SYSGREET_LOG_LEVEL > WARNING

SYSGREET_LOG_FILE adds a file handler (own level via SYSGREET_LOG_FILE_LEVEL)
that records everything, including lines already echoed to the terminal.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping

LOG_LEVEL_ENV = "SYSGREET_LOG_LEVEL"
LOG_FILE_ENV = "SYSGREET_LOG_FILE"
LOG_FILE_LEVEL_ENV = "SYSGREET_LOG_FILE_LEVEL"

# Set via ``extra=ECHOED`` on records whose text the caller already wrote
# to the terminal; the console handler drops them.
ECHOED = {"sysgreet_echoed": True}

_FMT_MINIMAL = "sysgreet: %(message)s"
_FMT_VERBOSE = "%(asctime)s [%(name)s] %(message)s"
_FMT_DETAILED = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"

_NOISY_LOGGERS = ("psutil", "pyfiglet")


class _SkipEchoed(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return not getattr(record, "sysgreet_echoed", False)


def resolve_level(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Console level name from CLI flags, falling back to SYSGREET_LOG_LEVEL."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    env = environ if environ is not None else {}
    return env.get(LOG_LEVEL_ENV, "") or "WARNING"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Install the console handler (and optional file handler) on the root logger."""
    numeric_level = _parse_level(level)

    if numeric_level <= logging.DEBUG:
        fmt, datefmt = _FMT_DETAILED, "%H:%M:%S"
    elif numeric_level <= logging.INFO:
        fmt, datefmt = _FMT_VERBOSE, "%H:%M:%S"
    else:
        fmt, datefmt = _FMT_MINIMAL, None

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    console.addFilter(_SkipEchoed())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)

    effective_level = numeric_level
    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else numeric_level
        effective_level = min(effective_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_DETAILED, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(fh)

    root.setLevel(effective_level)

    if numeric_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.raiseExceptions = False


def setup_from_environ(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Configure logging from CLI flags plus SYSGREET_LOG_* variables.

    Returns the console level name that was applied.
    """
    env = environ if environ is not None else {}
    level = resolve_level(debug, verbose, quiet, env)
    setup_logging(
        level=level,
        log_file=env.get(LOG_FILE_ENV) or None,
        log_file_level=env.get(LOG_FILE_LEVEL_ENV) or None,
    )
    return level


def _parse_level(level: str | None) -> int:
    """Level name to its numeric value; unknown or empty means WARNING."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
