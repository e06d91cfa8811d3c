"""
Banner composition — turn a HostSnapshot into titled sections.

Section order follows ``layout.sections``; fields are filtered by the
``display`` flags. Rendering to terminal text lives in ``render.py``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import timedelta

from sysgreet.adapters.figlet import render_ascii
from sysgreet.adapters.host_facts import Address, HostSnapshot, Usage
from sysgreet.core.models.config import SysgreetConfig

logger = logging.getLogger(__name__)

KNOWN_SECTIONS = ("header", "system", "network", "resources")

_TIME_FORMAT = "%a, %d %b %Y %H:%M:%S %Z"


@dataclass
class Section:
    """One titled block of ``Label: value`` lines."""

    key: str
    title: str
    lines: list[str] = field(default_factory=list)


@dataclass
class BannerOutput:
    """Composed banner, ready for the renderer."""

    title: str = ""
    art: str = ""
    header_lines: list[str] = field(default_factory=list)
    sections: list[Section] = field(default_factory=list)
    resource_usage: dict[str, float] = field(default_factory=dict)


def build_banner(
    snap: HostSnapshot,
    cfg: SysgreetConfig,
    art_renderer: Callable[[str, str], str] = render_ascii,
) -> BannerOutput:
    """Compose the banner sections for ``snap`` according to ``cfg``."""
    out = BannerOutput()
    seen: set[str] = set()

    for key in cfg.layout.sections:
        if key in seen:
            continue
        seen.add(key)

        if key == "header":
            _build_header(out, snap, cfg, art_renderer)
            continue

        builder = _BUILDERS.get(key)
        if builder is None:
            logger.warning("Unknown layout section %r — skipped", key)
            continue
        section = builder(out, snap, cfg)
        if section.lines:
            out.sections.append(section)

    return out


def _build_header(
    out: BannerOutput,
    snap: HostSnapshot,
    cfg: SysgreetConfig,
    art_renderer: Callable[[str, str], str],
) -> None:
    if cfg.display.hostname and snap.hostname:
        out.title = snap.hostname
        out.art = art_renderer(snap.hostname, cfg.ascii.font)
    if cfg.display.os and snap.os_name:
        os_line = snap.os_name
        if snap.kernel:
            os_line += f" ({snap.kernel})"
        out.header_lines.append(os_line)


def _build_system(out: BannerOutput, snap: HostSnapshot, cfg: SysgreetConfig) -> Section:
    section = Section(key="system", title="System")
    d = cfg.display
    if d.uptime and snap.uptime:
        section.lines.append(f"Uptime: {human_duration(snap.uptime)}")
    if d.user:
        line = f"User: {snap.user or 'unknown'}"
        if snap.home_dir:
            line += f" {snap.home_dir}"
        section.lines.append(line)
    if d.datetime:
        section.lines.append(f"Time: {snap.now.strftime(_TIME_FORMAT).strip()}")
    if d.last_login and snap.last_login is not None:
        line = f"Last login: {snap.last_login.strftime(_TIME_FORMAT).strip()}"
        if snap.last_login_source:
            line += f" ({snap.last_login_source})"
        section.lines.append(line)
    return section


def _build_network(out: BannerOutput, snap: HostSnapshot, cfg: SysgreetConfig) -> Section:
    section = Section(key="network", title="Network")
    if cfg.display.ip_addresses and snap.addresses:
        show_names = cfg.network.show_interface_names
        primary, *rest = snap.addresses
        section.lines.append(f"Primary: {format_address(primary, show_names)}")
        for addr in rest:
            section.lines.append(f"Secondary: {format_address(addr, show_names)}")
    if cfg.display.remote_ip and snap.remote_ip:
        section.lines.append(f"Remote: {snap.remote_ip}")
    return section


def _build_resources(out: BannerOutput, snap: HostSnapshot, cfg: SysgreetConfig) -> Section:
    section = Section(key="resources", title="Resources")
    d = cfg.display
    if d.memory and snap.memory and snap.memory.total:
        section.lines.append(f"Memory: {format_usage(snap.memory)}")
        out.resource_usage["Memory"] = snap.memory.percent
    if d.disk and snap.disk and snap.disk.total:
        section.lines.append(f"Disk: {format_usage(snap.disk)}")
        out.resource_usage["Disk"] = snap.disk.percent
    if d.load and snap.load is not None:
        one, five, fifteen = snap.load
        section.lines.append(f"Load: {one:.2f} {five:.2f} {fifteen:.2f}")
    return section


_BUILDERS: dict[str, Callable[[BannerOutput, HostSnapshot, SysgreetConfig], Section]] = {
    "system": _build_system,
    "network": _build_network,
    "resources": _build_resources,
}


# ── Formatting helpers ──────────────────────────────────────────


def human_duration(d: timedelta) -> str:
    """``3d 4h 12m`` style; zero or negative is ``unknown``."""
    if d.total_seconds() <= 0:
        return "unknown"
    total_minutes = int(d.total_seconds() // 60)
    days, rem = divmod(total_minutes, 60 * 24)
    hours, mins = divmod(rem, 60)
    parts = []
    if days:
        parts.append(f"{days}d")
    if hours:
        parts.append(f"{hours}h")
    if mins or not parts:
        parts.append(f"{mins}m")
    return " ".join(parts)


def human_bytes(n: int) -> str:
    if n < 1024:
        return f"{n} B"
    value = float(n)
    for unit in ("KiB", "MiB", "GiB", "TiB"):
        value /= 1024
        if value < 1024:
            break
    return f"{value:.1f} {unit}"


def format_usage(usage: Usage) -> str:
    return f"{human_bytes(usage.used)} / {human_bytes(usage.total)} ({usage.percent:.0f}%)"


def format_address(addr: Address, with_interface: bool) -> str:
    if not with_interface or not addr.interface.strip():
        return addr.ip
    return f"{addr.ip} ({addr.interface})"
