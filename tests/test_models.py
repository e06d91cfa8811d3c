"""
Tests for domain models — bootstrap vocabulary and config schema.
"""

import dataclasses
import sys
from pathlib import Path

import pytest

from sysgreet.core.models import (
    SCHEMA_VERSION,
    Action,
    BootstrapIO,
    BootstrapResult,
    PolicyResolution,
    PolicySource,
    PolicyValue,
    PromptDecision,
    SysgreetConfig,
    default_config,
)


class TestEnums:
    """Tests for the bootstrap enums."""

    def test_policy_values(self):
        """Policy values have their wire names."""
        assert {p.value for p in PolicyValue} == {"keep", "overwrite", "prompt"}

    def test_policy_sources(self):
        """Policy sources have their wire names."""
        assert {s.value for s in PolicySource} == {"flag", "env", "default"}

    def test_actions(self):
        """Actions have their wire names."""
        assert {a.value for a in Action} == {"skipped", "created", "overwritten", "kept"}

    def test_prompt_decisions(self):
        """Prompt decisions have their wire names."""
        assert {d.value for d in PromptDecision} == {"keep", "overwrite", "cancel"}

    def test_str_enum_compares_to_string(self):
        """Enum members compare equal to plain strings."""
        assert PolicyValue.KEEP == "keep"
        assert f"{Action.CREATED}" == "created"


class TestPolicyResolution:
    """Tests for the resolved policy record."""

    def test_frozen(self):
        """Resolutions are immutable."""
        res = PolicyResolution(PolicyValue.KEEP, PolicySource.FLAG, False)
        with pytest.raises(AttributeError):
            res.value = PolicyValue.OVERWRITE  # type: ignore[misc]

    def test_prompt_requires_interactive(self):
        """Prompt without a terminal cannot be constructed."""
        with pytest.raises(ValueError):
            PolicyResolution(PolicyValue.PROMPT, PolicySource.DEFAULT, False)

    def test_prompt_interactive_ok(self):
        """Prompt on a terminal is valid."""
        res = PolicyResolution(PolicyValue.PROMPT, PolicySource.DEFAULT, True)
        assert res.interactive is True


class TestBootstrapIO:
    """Tests for the bootstrap stream bundle."""

    def test_only_input_and_error_streams(self):
        """Bootstrap reads stdin and writes stderr; stdout is left to the banner."""
        assert [f.name for f in dataclasses.fields(BootstrapIO)] == ["stdin", "stderr"]

    def test_from_process(self):
        """from_process binds the real process streams."""
        streams = BootstrapIO.from_process()
        assert streams.stdin is sys.stdin
        assert streams.stderr is sys.stderr


class TestBootstrapResult:
    """Tests for bootstrap result serialisation."""

    def test_to_dict_without_backup(self):
        """to_dict reports no backup as None."""
        r = BootstrapResult(action=Action.CREATED, config_path=Path("/x/config.yaml"),
                            policy=PolicyValue.OVERWRITE)
        d = r.to_dict()
        assert d == {
            "action": "created",
            "config_path": "/x/config.yaml",
            "backup_path": None,
            "policy": "overwrite",
            "prompted": False,
        }

    def test_to_dict_with_backup(self):
        """to_dict reports the backup path."""
        r = BootstrapResult(
            action=Action.OVERWRITTEN,
            config_path=Path("/x/config.yaml"),
            policy=PolicyValue.PROMPT,
            backup_path=Path("/x/config.yaml.bak-20250101-000000"),
            prompted=True,
        )
        d = r.to_dict()
        assert d["backup_path"] == "/x/config.yaml.bak-20250101-000000"
        assert d["prompted"] is True


class TestConfigModel:
    """Tests for the config schema."""

    def test_defaults(self):
        """Defaults match the shipped config."""
        cfg = default_config()
        assert cfg.version == SCHEMA_VERSION == "v1"
        assert cfg.created_at == ""
        assert cfg.ascii.font == "slant"
        assert cfg.ascii.color == "random"
        assert cfg.layout.sections == ["header", "system", "network", "resources"]
        assert cfg.network.max_interfaces == 3
        assert all(cfg.display.model_dump().values())

    def test_defaults_are_independent(self):
        """Each default config is a fresh object."""
        a = default_config()
        b = default_config()
        a.layout.sections.append("extra")
        assert "extra" not in b.layout.sections

    def test_negative_max_interfaces_rejected(self):
        """max_interfaces cannot be negative."""
        with pytest.raises(Exception):
            SysgreetConfig.model_validate({"network": {"max_interfaces": -1}})
