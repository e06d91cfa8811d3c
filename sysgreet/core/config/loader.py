"""
Configuration loader — reads config.yaml / config.toml into SysgreetConfig.

Defaults are always applied: a missing file yields the defaults, and a
partial file only overrides the keys it sets. Environment variables are
applied last and win over the file.
"""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from sysgreet.core.config.defaults import rfc3339_utc
from sysgreet.core.config.paths import candidate_paths
from sysgreet.core.errors import ConfigError
from sysgreet.core.models.config import SysgreetConfig, default_config

logger = logging.getLogger(__name__)

ENV_PREFIX = "SYSGREET_"

_SECTIONS = ("display", "ascii", "layout", "network")

# Keys where an empty value means "keep the default", not "clear it".
_KEEP_DEFAULT_IF_EMPTY = {("ascii", "font"), ("ascii", "color"), ("layout", "sections")}

_TRUE_WORDS = {"1", "true", "yes", "on"}


@dataclass
class LoadedConfig:
    """Effective config plus the file it came from (None = defaults only)."""

    config: SysgreetConfig
    path: Path | None = None


def find_config_file(environ: Mapping[str, str] | None = None) -> Path | None:
    """Return the first candidate that is an existing regular file."""
    for candidate in candidate_paths(environ):
        if candidate.is_file():
            return candidate
    return None


def load_config(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
    missing_ok: bool = False,
) -> LoadedConfig:
    """Load the effective configuration.

    Args:
        path: Explicit config file. If None, the candidate paths are searched.
        environ: Environment for overrides (default: ``os.environ``).
        missing_ok: If True, an explicit ``path`` that does not exist yields
            the defaults instead of an error.

    Returns:
        LoadedConfig with the merged config and the path used.

    Raises:
        ConfigError: The file is unreadable, malformed, or fails validation.
    """
    env = os.environ if environ is None else environ

    if path is None:
        path = find_config_file(env)
    elif not path.is_file():
        if not (missing_ok and not path.exists()):
            raise ConfigError(f"Config file not found: {path}")
        path = None

    merged: dict[str, Any] = default_config().model_dump()
    if path is not None:
        logger.debug("Loading config from %s", path)
        _merge(merged, _read_raw(path))
    else:
        logger.debug("No config file found — using defaults")

    _apply_env_overrides(merged, env)

    try:
        cfg = SysgreetConfig.model_validate(merged)
    except ValidationError as e:
        where = path if path is not None else "environment"
        raise ConfigError(f"Invalid configuration in {where}: {e}") from e

    return LoadedConfig(config=cfg, path=path)


# ── File parsing ────────────────────────────────────────────────


def _read_raw(path: Path) -> dict[str, Any]:
    """Parse a config file by extension into a plain mapping."""
    suffix = path.suffix.lower()
    if suffix not in (".yaml", ".yml", ".toml"):
        raise ConfigError(f"unsupported config format: {path}")

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    if suffix == ".toml":
        try:
            data = tomllib.loads(raw)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    else:
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping in {path}, got {type(data).__name__}")
    return data


def _merge(base: dict[str, Any], override: dict[str, Any]) -> None:
    """Overlay known sections of ``override`` onto ``base`` in place."""
    for section in _SECTIONS:
        values = override.get(section)
        if values is None:
            continue
        if not isinstance(values, dict):
            raise ConfigError(f"'{section}' must be a mapping, got {type(values).__name__}")
        for key, value in values.items():
            if key not in base[section]:
                logger.debug("Ignoring unknown config key %s.%s", section, key)
                continue
            # An empty key (`hostname:`) loads as None and keeps its default.
            if value is None:
                continue
            if (section, key) in _KEEP_DEFAULT_IF_EMPTY and not value:
                continue
            base[section][key] = value

    for key in ("version", "created_at"):
        value = override.get(key)
        if value is None:
            continue
        # Unquoted timestamps come back as datetime objects from YAML and TOML.
        if isinstance(value, datetime):
            value = rfc3339_utc(value)
        elif isinstance(value, date):
            value = value.isoformat()
        base[key] = str(value)


# ── Environment overrides ───────────────────────────────────────


def _apply_env_overrides(cfg: dict[str, Any], env: Mapping[str, str]) -> None:
    """Apply SYSGREET_<SECTION>_<KEY> variables on top of ``cfg``."""
    for key in cfg["display"]:
        flag = _lookup_bool(env, f"{ENV_PREFIX}DISPLAY_{key.upper()}")
        if flag is not None:
            cfg["display"][key] = flag

    font = env.get(f"{ENV_PREFIX}ASCII_FONT", "")
    if font:
        cfg["ascii"]["font"] = font
    color = env.get(f"{ENV_PREFIX}ASCII_COLOR", "")
    if color:
        cfg["ascii"]["color"] = color
    mono = _lookup_bool(env, f"{ENV_PREFIX}ASCII_MONOCHROME")
    if mono is not None:
        cfg["ascii"]["monochrome"] = mono

    compact = _lookup_bool(env, f"{ENV_PREFIX}LAYOUT_COMPACT")
    if compact is not None:
        cfg["layout"]["compact"] = compact
    sections = [s.strip() for s in env.get(f"{ENV_PREFIX}LAYOUT_SECTIONS", "").split(",")]
    sections = [s for s in sections if s]
    if sections:
        cfg["layout"]["sections"] = sections

    names = _lookup_bool(env, f"{ENV_PREFIX}NETWORK_SHOW_INTERFACE_NAMES")
    if names is not None:
        cfg["network"]["show_interface_names"] = names
    max_ifaces = env.get(f"{ENV_PREFIX}NETWORK_MAX_INTERFACES", "").strip()
    if max_ifaces:
        try:
            cfg["network"]["max_interfaces"] = int(max_ifaces)
        except ValueError:
            logger.warning("Ignoring non-integer %sNETWORK_MAX_INTERFACES=%r", ENV_PREFIX, max_ifaces)


def _lookup_bool(env: Mapping[str, str], key: str) -> bool | None:
    """Boolean env var: None if unset, True for 1/true/yes/on, else False."""
    if key not in env:
        return None
    return env[key].strip().lower() in _TRUE_WORDS
