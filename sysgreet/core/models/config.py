"""
Config model — the shape of ``config.yaml`` / ``config.toml``.

Every field has a default so that a partial file merges cleanly over
``default_config()``. ``version`` and ``created_at`` are stamped by the
bootstrap when it writes a fresh file.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

SCHEMA_VERSION = "v1"

DEFAULT_SECTIONS = ["header", "system", "network", "resources"]


class DisplayConfig(BaseModel):
    """Which facts are shown in the banner."""

    hostname: bool = True
    os: bool = True
    ip_addresses: bool = True
    remote_ip: bool = True
    uptime: bool = True
    user: bool = True
    memory: bool = True
    disk: bool = True
    load: bool = True
    datetime: bool = True
    last_login: bool = True


class AsciiConfig(BaseModel):
    """Hostname ASCII-art rendering."""

    font: str = "slant"
    color: str = "random"
    monochrome: bool = False


class LayoutConfig(BaseModel):
    """Banner layout."""

    compact: bool = False
    sections: list[str] = Field(default_factory=lambda: list(DEFAULT_SECTIONS))


class NetworkConfig(BaseModel):
    """Network address display."""

    show_interface_names: bool = True
    max_interfaces: int = Field(default=3, ge=0)


class SysgreetConfig(BaseModel):
    """Root configuration."""

    display: DisplayConfig = Field(default_factory=DisplayConfig)
    ascii: AsciiConfig = Field(default_factory=AsciiConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    version: str = SCHEMA_VERSION
    created_at: str = ""


def default_config() -> SysgreetConfig:
    """Fresh default configuration (used when no config file exists)."""
    return SysgreetConfig()
