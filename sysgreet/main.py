"""
sysgreet — CLI entrypoint.

Usage:
    sysgreet                       # bootstrap config if needed, print banner
    sysgreet --config-policy=keep
    sysgreet --demo
    sysgreet --text "Tea Pot"
    sysgreet config check
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import click

from sysgreet import __version__
from sysgreet.core.observability.logging_config import setup_from_environ

_EPILOG = """\b
Environment variables:
  SYSGREET_CONFIG          Config file path override
  SYSGREET_CONFIG_POLICY   Config bootstrap policy (prompt|keep|overwrite)
  SYSGREET_ASSUME_TTY      Force interactive prompts (testing/support)
  CI                       When set, disables interactive prompts by default
  SYSGREET_LOG_LEVEL       Log level when no -v/-q/--debug flag is given

\b
Bootstrap:
  First run writes default config with version and created_at metadata.
  Existing configs prompt to keep or overwrite unless a policy is supplied.
"""


@click.group(invoke_without_command=True, epilog=_EPILOG)
@click.version_option(version=__version__, prog_name="sysgreet")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config-policy",
    "config_policy",
    default="",
    metavar="[prompt|keep|overwrite]",
    help="Config bootstrap policy for an existing config file.",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to config file (default: auto-detect).",
)
@click.option("--disable", is_flag=True, help="Disable sysgreet output.")
@click.option("--demo", is_flag=True, help="Demo mode with 'SYSGREET' banner and fake data.")
@click.option("--text", default="", help='Render custom text as ASCII art (e.g. --text "Tea Pot").')
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_policy: str,
    config_path: str | None,
    disable: bool,
    demo: bool,
    text: str,
) -> None:
    """sysgreet — host facts and ASCII-art hostname for login sessions."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_policy"] = config_policy
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_from_environ(debug, verbose, quiet, os.environ)

    if ctx.invoked_subcommand is not None or disable:
        return

    if text:
        _print_text(text)
    elif demo:
        _print_demo()
    else:
        _print_banner(ctx)


def _print_text(text: str) -> None:
    from sysgreet.adapters.figlet import render_ascii
    from sysgreet.core.models.config import default_config
    from sysgreet.core.services.render import colorize

    cfg = default_config()
    art = render_ascii(text, cfg.ascii.font)
    click.echo(f"\n{colorize(art, cfg.ascii.color, cfg.ascii.monochrome, seed=text)}\n")


def _print_demo() -> None:
    from sysgreet.adapters.host_facts import demo_snapshot
    from sysgreet.core.models.config import default_config
    from sysgreet.core.services.banner import build_banner
    from sysgreet.core.services.render import render_banner

    cfg = default_config()
    snap = demo_snapshot()
    click.echo(render_banner(build_banner(snap, cfg), cfg, seed=snap.hostname))


def _print_banner(ctx: click.Context) -> None:
    from sysgreet.adapters.host_facts import collect_snapshot
    from sysgreet.core.config.loader import load_config
    from sysgreet.core.config.paths import default_write_path
    from sysgreet.core.errors import SysgreetError
    from sysgreet.core.services.banner import build_banner
    from sysgreet.core.services.render import render_banner
    from sysgreet.ui.cli.config import needs_bootstrap, run_bootstrap

    explicit: Path | None = ctx.obj.get("config_path")
    write_path = explicit or default_write_path()
    policy = ctx.obj.get("config_policy", "")

    if needs_bootstrap(policy, write_path):
        if run_bootstrap(policy, write_path) is None:
            return

    try:
        loaded = load_config(explicit, missing_ok=True)
    except SysgreetError as e:
        click.echo(f"sysgreet: {e}", err=True)
        sys.exit(1)

    cfg = loaded.config
    snap = collect_snapshot(max_interfaces=cfg.network.max_interfaces)
    click.echo(render_banner(build_banner(snap, cfg), cfg, seed=snap.hostname))


# ── Register command groups ────────────────────────────────────

from sysgreet.ui.cli.config import config  # noqa: E402

cli.add_command(config)


if __name__ == "__main__":
    cli()
