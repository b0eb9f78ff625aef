"""CLI commands: fwpolicy config show | init."""

from __future__ import annotations

import json
import sys

import click
from rich.console import Console
from rich.markup import escape

from fwpolicy.core.constants import ExitCode

console = Console()


@click.group("config")
def config_group() -> None:
    """View and initialise fwpolicy configuration."""


@config_group.command("show")
@click.option("--json", "as_json", is_flag=True, default=False, help="Output as JSON")
@click.pass_context
def config_show(ctx, as_json):
    """Display the effective configuration (file + environment + defaults)."""
    from fwpolicy.core.config import _config_file_path, load_config
    from fwpolicy.core.exceptions import ConfigError

    cfg_path = (ctx.obj or {}).get("config_path") or _config_file_path()
    try:
        cfg = load_config((ctx.obj or {}).get("config_path"))
    except ConfigError as exc:
        console.print(f"[red]Config error:[/red] {exc}")
        sys.exit(ExitCode.CONFIG_ERROR)

    data = cfg.model_dump()
    data["_config_path"] = str(cfg_path)

    if as_json:
        click.echo(json.dumps(data, indent=2))
        return

    console.print(f"[bold]fwpolicy config[/bold]  [dim]{cfg_path}[/dim]")
    for section in ("policy", "logging"):
        console.print(f"\n[cyan]{escape(f'[{section}]')}[/cyan]")
        for key, value in data[section].items():
            console.print(f"  {key} = {value!r}")


@config_group.command("init")
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing file")
@click.pass_context
def config_init(ctx, force):
    """Write a config file populated with the defaults."""
    from fwpolicy.core.config import FrameworkPolicyConfig, _config_file_path, save_config
    from fwpolicy.core.exceptions import ConfigError

    cfg_path = (ctx.obj or {}).get("config_path") or _config_file_path()
    if cfg_path.exists() and not force:
        console.print(f"[red]Config already exists:[/red] {cfg_path} (use --force)")
        sys.exit(ExitCode.ERROR)

    try:
        save_config(FrameworkPolicyConfig().model_dump(), cfg_path)
    except ConfigError as exc:
        console.print(f"[red]Config error:[/red] {exc}")
        sys.exit(ExitCode.CONFIG_ERROR)
    console.print(f"[green]Wrote[/green] {cfg_path}")
