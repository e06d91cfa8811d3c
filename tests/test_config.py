"""
Tests for configuration — paths, default rendering, and loading.
"""

import textwrap
from datetime import UTC, datetime, timedelta, timezone
from pathlib import Path

import pytest
import yaml

from sysgreet.core.config.defaults import render_default_config, rfc3339_utc
from sysgreet.core.config.loader import find_config_file, load_config
from sysgreet.core.config.paths import candidate_paths, config_dir, default_write_path
from sysgreet.core.errors import ConfigError
from sysgreet.core.models.config import SCHEMA_VERSION


@pytest.fixture
def yaml_config(tmp_path: Path) -> Path:
    content = textwrap.dedent("""\
        display:
          memory: false
          last_login: false
        ascii:
          font: standard
          color: cyan
        layout:
          compact: true
          sections: [header, resources]
        network:
          max_interfaces: 1
        version: v1
        created_at: "2025-01-01T00:00:00Z"
    """)
    path = tmp_path / "config.yaml"
    path.write_text(content)
    return path


@pytest.fixture
def toml_config(tmp_path: Path) -> Path:
    content = textwrap.dedent("""\
        version = "v1"

        [display]
        disk = false

        [ascii]
        monochrome = true

        [network]
        show_interface_names = false
    """)
    path = tmp_path / "config.toml"
    path.write_text(content)
    return path


class TestPaths:
    """Tests for config path resolution."""

    def test_xdg_config_home(self, tmp_path: Path):
        """XDG_CONFIG_HOME decides the config directory."""
        env = {"XDG_CONFIG_HOME": str(tmp_path / "xdg")}
        assert config_dir(env) == tmp_path / "xdg" / "sysgreet"
        assert default_write_path(env) == tmp_path / "xdg" / "sysgreet" / "config.yaml"

    def test_home_fallback(self, isolated_env: Path):
        """Without XDG the directory is under ~/.config."""
        assert config_dir({}) == isolated_env / ".config" / "sysgreet"

    def test_override_wins(self, tmp_path: Path):
        """SYSGREET_CONFIG overrides the default path."""
        env = {"SYSGREET_CONFIG": str(tmp_path / "custom.yml"), "XDG_CONFIG_HOME": "/elsewhere"}
        assert default_write_path(env) == tmp_path / "custom.yml"

    def test_override_expands_user(self, isolated_env: Path):
        """A leading ~ in the override is expanded."""
        assert default_write_path({"SYSGREET_CONFIG": "~/my.yaml"}) == isolated_env / "my.yaml"

    def test_candidates_order(self, tmp_path: Path, isolated_env: Path):
        """Search order is override, config dir, then home dotfiles."""
        env = {"SYSGREET_CONFIG": "/o.yaml", "XDG_CONFIG_HOME": str(tmp_path / "x")}
        names = [str(p) for p in candidate_paths(env)]
        assert names[0] == "/o.yaml"
        assert names[1:4] == [
            str(tmp_path / "x" / "sysgreet" / f"config.{ext}") for ext in ("yaml", "yml", "toml")
        ]
        assert names[4:] == [str(isolated_env / f".sysgreet.{ext}") for ext in ("yaml", "yml", "toml")]


class TestRenderDefaults:
    """Tests for the rendered default config."""

    def test_stamped(self):
        """Defaults carry the schema version and creation time."""
        now = datetime(2025, 6, 1, 12, 0, 0, tzinfo=UTC)
        data = yaml.safe_load(render_default_config(now).decode("utf-8"))
        assert data["version"] == SCHEMA_VERSION
        assert data["created_at"] == "2025-06-01T12:00:00Z"
        assert data["ascii"]["font"] == "slant"
        assert data["layout"]["sections"] == ["header", "system", "network", "resources"]

    def test_fresh_timestamp_by_default(self):
        """Without a clock the current time is used."""
        data = yaml.safe_load(render_default_config())
        stamped = datetime.strptime(data["created_at"], "%Y-%m-%dT%H:%M:%SZ").replace(tzinfo=UTC)
        assert abs(datetime.now(UTC) - stamped) < timedelta(minutes=1)

    def test_rfc3339_converts_to_utc(self):
        """Timestamps are written in UTC."""
        now = datetime(2025, 6, 1, 14, 0, 0, tzinfo=timezone(timedelta(hours=2)))
        assert rfc3339_utc(now) == "2025-06-01T12:00:00Z"

    def test_output_loads_back(self, tmp_path: Path):
        """Rendered defaults load as the default config."""
        path = tmp_path / "config.yaml"
        path.write_bytes(render_default_config(datetime(2025, 1, 2, tzinfo=UTC)))
        cfg = load_config(path, environ={}).config
        assert cfg.created_at == "2025-01-02T00:00:00Z"
        assert cfg.version == "v1"


class TestLoadConfig:
    """Tests for loading config files."""

    def test_yaml(self, yaml_config: Path):
        """YAML values override defaults."""
        loaded = load_config(yaml_config, environ={})
        cfg = loaded.config
        assert loaded.path == yaml_config
        assert cfg.display.memory is False
        assert cfg.display.hostname is True
        assert cfg.ascii.font == "standard"
        assert cfg.ascii.color == "cyan"
        assert cfg.layout.compact is True
        assert cfg.layout.sections == ["header", "resources"]
        assert cfg.network.max_interfaces == 1
        assert cfg.created_at == "2025-01-01T00:00:00Z"

    def test_toml(self, toml_config: Path):
        """TOML files are supported."""
        cfg = load_config(toml_config, environ={}).config
        assert cfg.display.disk is False
        assert cfg.ascii.monochrome is True
        assert cfg.ascii.font == "slant"
        assert cfg.network.show_interface_names is False

    def test_empty_values_keep_defaults(self, tmp_path: Path):
        """Empty font, colour and sections keep their defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("ascii:\n  font: ''\n  color: ''\nlayout:\n  sections: []\n")
        cfg = load_config(path, environ={}).config
        assert cfg.ascii.font == "slant"
        assert cfg.ascii.color == "random"
        assert cfg.layout.sections == ["header", "system", "network", "resources"]

    def test_null_values_keep_defaults(self, tmp_path: Path):
        """Keys left blank keep their defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("display:\n  hostname:\nascii:\n  font:\nnetwork:\n  max_interfaces:\n")
        cfg = load_config(path, environ={}).config
        assert cfg.display.hostname is True
        assert cfg.ascii.font == "slant"
        assert cfg.network.max_interfaces == 3

    def test_empty_file_is_defaults(self, tmp_path: Path):
        """An empty file is the default config."""
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(path, environ={}).config.ascii.font == "slant"

    def test_unquoted_timestamp(self, tmp_path: Path):
        """An unquoted created_at is normalised to RFC 3339."""
        path = tmp_path / "config.yaml"
        path.write_text("created_at: 2025-01-01T10:00:00Z\n")
        assert load_config(path, environ={}).config.created_at == "2025-01-01T10:00:00Z"

    def test_unknown_keys_ignored(self, tmp_path: Path):
        """Unknown keys do not fail the load."""
        path = tmp_path / "config.yaml"
        path.write_text("display:\n  shoe_size: true\nextra: 1\n")
        assert load_config(path, environ={}).config.display.hostname is True

    def test_no_file_uses_defaults(self):
        """No file anywhere means defaults."""
        loaded = load_config(environ={})
        assert loaded.path is None
        assert loaded.config.ascii.font == "slant"

    def test_search_finds_xdg_file(self, tmp_path: Path):
        """The search finds a file in the config directory."""
        env = {"XDG_CONFIG_HOME": str(tmp_path / "x")}
        target = tmp_path / "x" / "sysgreet" / "config.toml"
        target.parent.mkdir(parents=True)
        target.write_text('[ascii]\nfont = "banner"\n')
        assert find_config_file(env) == target
        assert load_config(environ=env).config.ascii.font == "banner"

    def test_directory_candidate_skipped(self, tmp_path: Path):
        """Directories are not taken as config files."""
        env = {"XDG_CONFIG_HOME": str(tmp_path / "x")}
        (tmp_path / "x" / "sysgreet" / "config.yaml").mkdir(parents=True)
        assert find_config_file(env) is None

    def test_missing_explicit_raises(self, tmp_path: Path):
        """A missing explicit path is an error."""
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.yaml", environ={})

    def test_missing_explicit_ok(self, tmp_path: Path):
        """missing_ok turns a missing explicit path into defaults."""
        loaded = load_config(tmp_path / "nope.yaml", environ={}, missing_ok=True)
        assert loaded.path is None

    def test_unsupported_extension(self, tmp_path: Path):
        """Unknown extensions are rejected."""
        path = tmp_path / "config.ini"
        path.write_text("[x]\n")
        with pytest.raises(ConfigError, match="unsupported config format"):
            load_config(path, environ={})

    def test_invalid_yaml(self, tmp_path: Path):
        """Malformed YAML raises ConfigError."""
        path = tmp_path / "config.yaml"
        path.write_text(":: invalid: yaml: [")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path, environ={})

    def test_invalid_toml(self, tmp_path: Path):
        """Malformed TOML raises ConfigError."""
        path = tmp_path / "config.toml"
        path.write_text("[ascii\n")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(path, environ={})

    def test_non_mapping(self, tmp_path: Path):
        """A top-level list is rejected."""
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="Expected a mapping"):
            load_config(path, environ={})

    def test_section_not_mapping(self, tmp_path: Path):
        """A scalar section is rejected."""
        path = tmp_path / "config.yaml"
        path.write_text("display: yes\n")
        with pytest.raises(ConfigError, match="'display' must be a mapping"):
            load_config(path, environ={})

    def test_wrong_type(self, tmp_path: Path):
        """Wrongly typed values are rejected."""
        path = tmp_path / "config.yaml"
        path.write_text("network:\n  max_interfaces: lots\n")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(path, environ={})


class TestEnvOverrides:
    """Tests for SYSGREET_* environment overrides."""

    def test_display_flags(self, yaml_config: Path):
        """Display flags can be toggled from the environment."""
        env = {"SYSGREET_DISPLAY_MEMORY": "yes", "SYSGREET_DISPLAY_HOSTNAME": "off"}
        cfg = load_config(yaml_config, environ=env).config
        assert cfg.display.memory is True
        assert cfg.display.hostname is False

    def test_unrecognised_bool_is_false(self):
        """Any other value of a bool variable means false."""
        cfg = load_config(environ={"SYSGREET_DISPLAY_UPTIME": "perhaps"}).config
        assert cfg.display.uptime is False

    def test_ascii_and_layout(self):
        """ASCII and layout settings can be overridden."""
        env = {
            "SYSGREET_ASCII_FONT": "banner",
            "SYSGREET_ASCII_COLOR": "red",
            "SYSGREET_ASCII_MONOCHROME": "1",
            "SYSGREET_LAYOUT_COMPACT": "true",
            "SYSGREET_LAYOUT_SECTIONS": " system, ,network ",
        }
        cfg = load_config(environ=env).config
        assert cfg.ascii.font == "banner"
        assert cfg.ascii.color == "red"
        assert cfg.ascii.monochrome is True
        assert cfg.layout.compact is True
        assert cfg.layout.sections == ["system", "network"]

    def test_network(self):
        """Network settings can be overridden."""
        env = {"SYSGREET_NETWORK_SHOW_INTERFACE_NAMES": "0", "SYSGREET_NETWORK_MAX_INTERFACES": "7"}
        cfg = load_config(environ=env).config
        assert cfg.network.show_interface_names is False
        assert cfg.network.max_interfaces == 7

    def test_bad_int_ignored(self, yaml_config: Path):
        """A non-integer max_interfaces is ignored."""
        cfg = load_config(yaml_config, environ={"SYSGREET_NETWORK_MAX_INTERFACES": "many"}).config
        assert cfg.network.max_interfaces == 1

    def test_env_beats_file(self, yaml_config: Path):
        """Environment values win over the file."""
        cfg = load_config(yaml_config, environ={"SYSGREET_ASCII_FONT": "big"}).config
        assert cfg.ascii.font == "big"
