"""
Terminal rendering — colour and layout for a composed banner.
"""

from __future__ import annotations

import hashlib

import click

from sysgreet.core.models.config import SysgreetConfig
from sysgreet.core.services.banner import BannerOutput

RANDOM_COLOR = "random"

PALETTE = ("red", "green", "yellow", "blue", "magenta", "cyan",
           "bright_red", "bright_green", "bright_yellow", "bright_blue",
           "bright_magenta", "bright_cyan")

_CLICK_COLORS = set(PALETTE) | {"black", "white", "bright_black", "bright_white"}

_WARN_PERCENT = 75.0
_CRIT_PERCENT = 90.0


def pick_color(color: str, seed: str = "") -> str | None:
    """Resolve a configured colour name; ``random`` is stable per ``seed``."""
    name = (color or "").strip().lower()
    if name == RANDOM_COLOR:
        digest = hashlib.sha256(seed.encode("utf-8")).digest()
        return PALETTE[digest[0] % len(PALETTE)]
    if name in _CLICK_COLORS:
        return name
    return None


def colorize(text: str, color: str, monochrome: bool = False, seed: str = "") -> str:
    """Wrap ``text`` in ANSI colour codes unless monochrome."""
    if monochrome:
        return text
    fg = pick_color(color, seed)
    if fg is None:
        return text
    return click.style(text, fg=fg)


def usage_color(percent: float) -> str:
    if percent >= _CRIT_PERCENT:
        return "red"
    if percent >= _WARN_PERCENT:
        return "yellow"
    return "green"


def render_banner(out: BannerOutput, cfg: SysgreetConfig, seed: str = "") -> str:
    """Render the banner as terminal text."""
    if cfg.layout.compact:
        return _render_compact(out)

    mono = cfg.ascii.monochrome
    lines: list[str] = []
    if out.art:
        lines.append(colorize(out.art, cfg.ascii.color, mono, seed))
    lines.extend(out.header_lines)

    for section in out.sections:
        lines.append("")
        lines.append(section.title if mono else click.style(section.title, bold=True))
        for line in section.lines:
            if section.key == "resources" and not mono:
                line = _highlight_usage(line, out.resource_usage)
            lines.append(f"  {line}")

    return "\n".join(lines).rstrip("\n")


def _render_compact(out: BannerOutput) -> str:
    parts: list[str] = []
    if out.title:
        parts.append(out.title)
    parts.extend(out.header_lines)
    for section in out.sections:
        parts.append(section.title)
        parts.extend(section.lines)
    return " | ".join(parts)


def _highlight_usage(line: str, usage: dict[str, float]) -> str:
    label, sep, value = line.partition(": ")
    if not sep or label not in usage:
        return line
    return f"{label}: {click.style(value, fg=usage_color(usage[label]))}"
