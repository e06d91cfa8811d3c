"""
Config check use case — load the config file and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from sysgreet.core.config.loader import load_config
from sysgreet.core.errors import ConfigError
from sysgreet.core.models.config import SCHEMA_VERSION, SysgreetConfig
from sysgreet.core.services.banner import KNOWN_SECTIONS


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config: SysgreetConfig | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "version": self.config.version if self.config else None,
            "created_at": self.config.created_at if self.config else None,
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate the effective configuration and report issues.

    Args:
        config_path: Optional explicit config file.

    Returns:
        ConfigCheckResult with validation status and any issues.
    """
    result = ConfigCheckResult()

    try:
        loaded = load_config(config_path)
    except ConfigError as e:
        result.config_path = config_path
        result.errors.append(str(e))
        return result

    cfg = loaded.config
    result.config = cfg
    result.config_path = loaded.path

    if loaded.path is None:
        result.warnings.append("No config file found. Defaults are in effect; run 'sysgreet config init'.")

    if cfg.version != SCHEMA_VERSION:
        result.warnings.append(
            f"Config version {cfg.version!r} differs from current schema {SCHEMA_VERSION!r}."
        )

    unknown = [s for s in cfg.layout.sections if s not in KNOWN_SECTIONS]
    if unknown:
        result.warnings.append(f"Unknown layout sections will be skipped: {', '.join(unknown)}")

    names = cfg.layout.sections
    dupes = sorted({n for n in names if names.count(n) > 1})
    if dupes:
        result.warnings.append(f"Duplicate layout sections: {', '.join(dupes)}")

    if not any(cfg.display.model_dump().values()):
        result.warnings.append("All display fields are disabled. The banner will be empty.")

    result.valid = len(result.errors) == 0
    return result
