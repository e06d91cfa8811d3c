"""
Config file locations.

Write path (where bootstrap puts config.yaml):
    SYSGREET_CONFIG  >  platform default

Read candidates (first existing regular file wins):
    SYSGREET_CONFIG, <config dir>/config.{yaml,yml,toml}, ~/.sysgreet.{yaml,yml,toml}
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from pathlib import Path

CONFIG_PATH_ENV_VAR = "SYSGREET_CONFIG"
APP_DIR_NAME = "sysgreet"
CONFIG_FILENAME = "config.yaml"

_CONFIG_EXTENSIONS = (".yaml", ".yml", ".toml")


def expand_path(raw: str) -> Path:
    """Expand ``~`` and ``$VARS`` in a user-supplied path."""
    return Path(os.path.expandvars(os.path.expanduser(raw)))


def config_dir(environ: Mapping[str, str] | None = None) -> Path:
    """Platform-appropriate directory holding sysgreet's config."""
    env = os.environ if environ is None else environ

    if sys.platform == "win32" and env.get("APPDATA"):
        return Path(env["APPDATA"]) / APP_DIR_NAME

    xdg = env.get("XDG_CONFIG_HOME", "")
    if xdg:
        return Path(xdg) / APP_DIR_NAME
    return Path.home() / ".config" / APP_DIR_NAME


def default_write_path(environ: Mapping[str, str] | None = None) -> Path:
    """Path bootstrap writes to."""
    env = os.environ if environ is None else environ
    override = env.get(CONFIG_PATH_ENV_VAR, "")
    if override:
        return expand_path(override)
    return config_dir(env) / CONFIG_FILENAME


def candidate_paths(environ: Mapping[str, str] | None = None) -> list[Path]:
    """Read candidates in precedence order."""
    env = os.environ if environ is None else environ
    paths: list[Path] = []

    override = env.get(CONFIG_PATH_ENV_VAR, "")
    if override:
        paths.append(expand_path(override))

    base = config_dir(env)
    paths.extend(base / f"config{ext}" for ext in _CONFIG_EXTENSIONS)
    paths.extend(Path.home() / f".{APP_DIR_NAME}{ext}" for ext in _CONFIG_EXTENSIONS)
    return paths
