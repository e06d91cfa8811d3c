"""
Domain models for sysgreet.

    from sysgreet.core.models import Action, PolicyValue, SysgreetConfig
"""

from sysgreet.core.models.bootstrap import (
    Action,
    BootstrapIO,
    BootstrapOptions,
    BootstrapResult,
    PolicyResolution,
    PolicySource,
    PolicyValue,
    PromptDecision,
)
from sysgreet.core.models.config import (
    SCHEMA_VERSION,
    AsciiConfig,
    DisplayConfig,
    LayoutConfig,
    NetworkConfig,
    SysgreetConfig,
    default_config,
)

__all__ = [
    # bootstrap.py
    "Action",
    "BootstrapIO",
    "BootstrapOptions",
    "BootstrapResult",
    "PolicyResolution",
    "PolicySource",
    "PolicyValue",
    "PromptDecision",
    # config.py
    "SCHEMA_VERSION",
    "AsciiConfig",
    "DisplayConfig",
    "LayoutConfig",
    "NetworkConfig",
    "SysgreetConfig",
    "default_config",
]
