"""
fwpolicy CLI entry point.

Commands:
  fwpolicy install <package> <install-path>  — copy policy files into the shared tree
  fwpolicy remove <package> <install-path>   — delete the package's copies again
  fwpolicy plan <package> <install-path>     — list source -> target pairs, no changes
  fwpolicy config show                       — show the effective configuration
  fwpolicy config init                       — write a default config file
"""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console

from fwpolicy import __version__
from fwpolicy.cli._config_cmd import config_group

console = Console()
err_console = Console(stderr=True)

_PATH = click.Path(file_okay=False, path_type=Path)


def _absolute_secbase(
    ctx: click.Context, param: click.Parameter, value: Path | None
) -> Path | None:
    # Same rule as PolicyConfig.secbase for the file and env sources.
    if value is not None and not value.is_absolute():
        raise click.BadParameter(f"must be an absolute path, got {str(value)!r}")
    return value


_secbase_option = click.option(
    "--secbase",
    type=_PATH,
    default=None,
    callback=_absolute_secbase,
    help="Shared policy root (overrides config)",
)


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, "--version", "-V", message="fwpolicy %(version)s")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: /etc/fwpolicy/config.toml or $FWPOLICY_CONFIG)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Override the configured log level",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, log_level: str | None) -> None:
    """fwpolicy — keep framework security policy files in sync."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["log_level"] = log_level


# ---------------------------------------------------------------------------
# install / remove
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("package")
@click.argument("install_path", type=_PATH)
@_secbase_option
@click.pass_context
def install(ctx: click.Context, package: str, install_path: Path, secbase: Path | None) -> None:
    """Install the policy files shipped by PACKAGE at INSTALL_PATH."""
    from fwpolicy.cli._apply import cmd_apply

    cmd_apply(
        ctx, "install", package, install_path, secbase, console=console, err_console=err_console
    )


@cli.command()
@click.argument("package")
@click.argument("install_path", type=_PATH)
@_secbase_option
@click.pass_context
def remove(ctx: click.Context, package: str, install_path: Path, secbase: Path | None) -> None:
    """Remove the policy files previously installed for PACKAGE."""
    from fwpolicy.cli._apply import cmd_apply

    cmd_apply(
        ctx, "remove", package, install_path, secbase, console=console, err_console=err_console
    )


# ---------------------------------------------------------------------------
# plan
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("package")
@click.argument("install_path", type=_PATH)
@_secbase_option
@click.option("--json", "as_json", is_flag=True, default=False)
@click.pass_context
def plan(
    ctx: click.Context, package: str, install_path: Path, secbase: Path | None, as_json: bool
) -> None:
    """Show the files install or remove would touch, without changing anything."""
    from fwpolicy.cli._apply import cmd_plan

    cmd_plan(
        ctx,
        package,
        install_path,
        secbase,
        as_json=as_json,
        console=console,
        err_console=err_console,
    )


# ---------------------------------------------------------------------------
# config
# ---------------------------------------------------------------------------

cli.add_command(config_group)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
