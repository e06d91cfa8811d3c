"""
CLI commands for the sysgreet config file.

Thin wrappers over ``sysgreet.core.use_cases``.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path

import click
import yaml

from sysgreet.core.config.paths import default_write_path
from sysgreet.core.errors import SysgreetError, UserCancelledError
from sysgreet.core.models.bootstrap import BootstrapIO, BootstrapOptions, BootstrapResult
from sysgreet.core.services.interactivity import detect_interactive
from sysgreet.core.services.policy import POLICY_ENV_VAR

logger = logging.getLogger(__name__)


def run_bootstrap(config_policy: str, path: Path) -> BootstrapResult | None:
    """Run the bootstrap for ``path`` with CLI exit semantics.

    Returns the result, or None when the user cancelled (caller should
    exit quietly). Other errors print ``sysgreet: <msg>`` and exit 1.
    """
    from sysgreet.core.use_cases.bootstrap import bootstrap_config

    options = BootstrapOptions(
        flag_policy=config_policy or "",
        env_policy=os.environ.get(POLICY_ENV_VAR, ""),
        interactive=detect_interactive(sys.stdin),
    )
    try:
        return bootstrap_config(path, io=BootstrapIO.from_process(), options=options)
    except UserCancelledError:
        logger.debug("Bootstrap cancelled by user")
        return None
    except SysgreetError as e:
        click.echo(f"sysgreet: {e}", err=True)
        sys.exit(1)


def needs_bootstrap(config_policy: str, path: Path) -> bool:
    """Whether the default banner run should bootstrap first.

    True when a policy was given, the file is missing, or the path is a
    directory (so the bootstrap reports it). Other stat errors exit 1.
    """
    if config_policy or os.environ.get(POLICY_ENV_VAR, ""):
        return True
    try:
        os.stat(path)
    except FileNotFoundError:
        return True
    except OSError as e:
        click.echo(f"sysgreet: stat config: {e}", err=True)
        sys.exit(1)
    return path.is_dir()


@click.group()
def config() -> None:
    """Config file commands — init, path, check, show."""


@config.command("init")
@click.option(
    "--config-policy",
    "config_policy",
    default=None,
    metavar="[prompt|keep|overwrite]",
    help="What to do if the config already exists.",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_init(ctx: click.Context, config_policy: str | None, as_json: bool) -> None:
    """Create the config file (or keep / overwrite an existing one)."""
    if config_policy is None:
        config_policy = ctx.obj.get("config_policy", "")
    path = ctx.obj.get("config_path") or default_write_path()

    result = run_bootstrap(config_policy, path)
    if result is None:
        return

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))


@config.command("path")
@click.pass_context
def config_path(ctx: click.Context) -> None:
    """Print the config path bootstrap writes to."""
    click.echo(str(ctx.obj.get("config_path") or default_write_path()))


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate the config file."""
    from sysgreet.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   File: {result.config_path or '(defaults)'}")
        assert result.config is not None  # guaranteed when valid
        click.echo(f"   Version: {result.config.version}")
        if result.config.created_at:
            click.echo(f"   Created: {result.config.created_at}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        sys.exit(1)


@config.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Print the effective (merged) configuration as YAML."""
    from sysgreet.core.config.loader import load_config

    try:
        loaded = load_config(ctx.obj.get("config_path"))
    except SysgreetError as e:
        click.echo(f"sysgreet: {e}", err=True)
        sys.exit(1)

    click.echo(f"# source: {loaded.path or 'defaults'}")
    click.echo(yaml.safe_dump(loaded.config.model_dump(mode="json"), sort_keys=False), nl=False)
