"""
Host facts — a snapshot of what the banner shows.

Thin fan-out over ``psutil``, ``platform`` and ``socket``. Every fact is
best-effort: a failing probe is logged at DEBUG and leaves its field
empty so one broken source never blanks the whole banner.
"""

from __future__ import annotations

import getpass
import ipaddress
import logging
import os
import platform
import socket
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import TypeVar

import psutil

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class Address:
    """An IP address and the interface it is bound to."""

    ip: str
    interface: str = ""


@dataclass
class Usage:
    """Used / total bytes for memory or a filesystem."""

    used: int = 0
    total: int = 0

    @property
    def percent(self) -> float:
        return (self.used / self.total * 100.0) if self.total else 0.0


@dataclass
class HostSnapshot:
    """Everything the banner might display, collected once per run."""

    hostname: str = ""
    os_name: str = ""
    kernel: str = ""
    uptime: timedelta | None = None
    user: str = ""
    home_dir: str = ""
    addresses: list[Address] = field(default_factory=list)
    remote_ip: str = ""
    memory: Usage | None = None
    disk: Usage | None = None
    load: tuple[float, float, float] | None = None
    now: datetime = field(default_factory=lambda: datetime.now().astimezone())
    last_login: datetime | None = None
    last_login_source: str = ""


def collect_snapshot(
    max_interfaces: int = 3,
    environ: Mapping[str, str] | None = None,
) -> HostSnapshot:
    """Collect a live snapshot of this host."""
    env = os.environ if environ is None else environ
    snap = HostSnapshot()

    snap.hostname = _safe("hostname", socket.gethostname, "")
    snap.os_name = _safe("os", _os_name, "")
    snap.kernel = _safe("kernel", platform.release, "")
    snap.uptime = _safe("uptime", _uptime, None)
    snap.user = _safe("user", getpass.getuser, "")
    snap.home_dir = _safe("home", lambda: os.path.expanduser("~"), "")
    snap.addresses = _safe("addresses", lambda: list_addresses(max_interfaces), [])
    snap.remote_ip = remote_ip_from_env(env)
    snap.memory = _safe("memory", _memory, None)
    snap.disk = _safe("disk", _disk, None)
    snap.load = _safe("load", psutil.getloadavg, None)
    session = _safe("last login", _latest_session, None)
    if session is not None:
        snap.last_login = datetime.fromtimestamp(session.started).astimezone()
        snap.last_login_source = session.host or ""
    return snap


def demo_snapshot() -> HostSnapshot:
    """Fixed fake data for ``--demo``."""
    return HostSnapshot(
        hostname="SYSGREET",
        os_name="Ubuntu 24.04 LTS",
        kernel="6.8.0-45-generic",
        uptime=timedelta(days=12, hours=4, minutes=37),
        user="demo",
        home_dir="/home/demo",
        addresses=[Address("192.168.1.42", "eth0"), Address("10.8.0.2", "wg0")],
        remote_ip="203.0.113.7",
        memory=Usage(used=6_442_450_944, total=17_179_869_184),
        disk=Usage(used=128_849_018_880, total=512_110_190_592),
        load=(0.42, 0.37, 0.31),
        now=datetime(2025, 1, 1, 9, 30).astimezone(),
        last_login=datetime(2024, 12, 31, 18, 5).astimezone(),
        last_login_source="203.0.113.7",
    )


# ── Network ─────────────────────────────────────────────────────


def list_addresses(max_interfaces: int) -> list[Address]:
    """Routable IPv4/IPv6 addresses, loopback and link-local filtered out."""
    found: list[Address] = []
    for iface, addrs in sorted(psutil.net_if_addrs().items()):
        for addr in addrs:
            if addr.family not in (socket.AF_INET, socket.AF_INET6):
                continue
            ip = addr.address.split("%", 1)[0]
            if not is_displayable_ip(ip):
                continue
            found.append(Address(ip=ip, interface=iface))

    # IPv4 first; psutil order is per-interface.
    found.sort(key=lambda a: ":" in a.ip)
    if max_interfaces > 0:
        found = found[:max_interfaces]
    return found


def is_displayable_ip(ip: str) -> bool:
    try:
        parsed = ipaddress.ip_address(ip)
    except ValueError:
        return False
    return not (parsed.is_loopback or parsed.is_link_local or parsed.is_unspecified)


def remote_ip_from_env(environ: Mapping[str, str]) -> str:
    """Client address of the current SSH session, if any."""
    for key in ("SSH_CLIENT", "SSH_CONNECTION"):
        value = environ.get(key, "").strip()
        if value:
            return value.split()[0]
    return ""


# ── System ──────────────────────────────────────────────────────


def _os_name() -> str:
    try:
        release = platform.freedesktop_os_release()
    except OSError:
        release = {}
    pretty = release.get("PRETTY_NAME", "")
    if pretty:
        return pretty
    return f"{platform.system()} {platform.version()}".strip()


def _uptime() -> timedelta:
    return timedelta(seconds=int(time.time() - psutil.boot_time()))


def _memory() -> Usage:
    vm = psutil.virtual_memory()
    return Usage(used=vm.total - vm.available, total=vm.total)


def _disk() -> Usage:
    du = psutil.disk_usage(os.path.abspath(os.sep))
    return Usage(used=du.used, total=du.total)


def _latest_session():
    """The current user's most recently started session (from utmp), or None."""
    me = getpass.getuser()
    sessions = [u for u in psutil.users() if u.name == me]
    if not sessions:
        return None
    return max(sessions, key=lambda u: u.started)


def _safe(label: str, fn: Callable[[], T], fallback: T) -> T:
    try:
        return fn()
    except Exception as e:
        logger.debug("Collecting %s failed: %s", label, e)
        return fallback
