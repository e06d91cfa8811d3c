"""
Shared test fixtures and configuration.
"""

import os
from datetime import UTC, datetime
from pathlib import Path

import pytest

SEED_CONFIG = "ascii:\n  font: standard\n"


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep the host's env and home directory out of every test."""
    for key in list(os.environ):
        if key.startswith("SYSGREET_") or key in ("CI", "SSH_CLIENT", "SSH_CONNECTION"):
            monkeypatch.delenv(key, raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    return home


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    """Config file location inside a not-yet-created directory."""
    return tmp_path / "cfg" / "config.yaml"


@pytest.fixture
def existing_config(config_path: Path) -> Path:
    """A user-edited config file already on disk."""
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(SEED_CONFIG)
    return config_path


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 3, 4, 5, 6, 7, tzinfo=UTC)
