"""
Default config rendering — the only content bootstrap ever writes.
"""

from __future__ import annotations

from datetime import UTC, datetime

import yaml

from sysgreet.core.models.config import SCHEMA_VERSION, default_config

_HEADER = (
    "# sysgreet configuration\n"
    "# Generated by `sysgreet` bootstrap. Edit freely; unknown keys are ignored.\n"
)


def rfc3339_utc(now: datetime) -> str:
    """Format ``now`` as RFC-3339 UTC with a ``Z`` suffix, second precision."""
    return now.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


def render_default_config(now: datetime | None = None) -> bytes:
    """Serialize the default config as UTF-8 YAML, stamped with version and time."""
    cfg = default_config()
    cfg.version = SCHEMA_VERSION
    cfg.created_at = rfc3339_utc(now or datetime.now(UTC))

    body = yaml.safe_dump(
        cfg.model_dump(mode="json"),
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )
    return (_HEADER + body).encode("utf-8")
