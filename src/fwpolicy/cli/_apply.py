"""fwpolicy install / remove / plan — command handlers."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click
from rich.console import Console

from fwpolicy.core.config import FrameworkPolicyConfig, load_config
from fwpolicy.core.constants import ExitCode
from fwpolicy.core.exceptions import ConfigError, PolicyOpError
from fwpolicy.core.logging import configure_logging


def _load(ctx: click.Context, err_console: Console) -> FrameworkPolicyConfig:
    try:
        cfg = load_config(ctx.obj.get("config_path"))
    except ConfigError as exc:
        err_console.print(f"[red]Config error:[/red] {exc}")
        sys.exit(ExitCode.CONFIG_ERROR)
    level = ctx.obj.get("log_level") or cfg.logging.level
    configure_logging(level, cfg.logging.format)
    return cfg


def _fail(exc: PolicyOpError, err_console: Console) -> None:
    # Printed verbatim; the caller must not assume any cleanup happened.
    err_console.print(str(exc), markup=False, highlight=False, soft_wrap=True)
    sys.exit(ExitCode.PERMISSION_ERROR if exc.permission_denied else ExitCode.ERROR)


def cmd_apply(
    ctx: click.Context,
    op: str,
    package: str,
    install_path: Path,
    secbase: Path | None,
    console: Console,
    err_console: Console,
) -> None:
    from fwpolicy.core.policy import framework_op

    cfg = _load(ctx, err_console)
    root = secbase or cfg.secbase

    try:
        framework_op(op, package, install_path, secbase=root)
    except PolicyOpError as exc:
        _fail(exc, err_console)

    verb = "Installed" if op == "install" else "Removed"
    console.print(f"[green]{verb}[/green] policy for {package} under {root}", soft_wrap=True)


def cmd_plan(
    ctx: click.Context,
    package: str,
    install_path: Path,
    secbase: Path | None,
    as_json: bool,
    console: Console,
    err_console: Console,
) -> None:
    from fwpolicy.core.policy import plan

    cfg = _load(ctx, err_console)
    root = secbase or cfg.secbase

    try:
        entries = plan(package, install_path, secbase=root)
    except PolicyOpError as exc:
        _fail(exc, err_console)

    if as_json:
        payload = [{"source": str(s), "target": str(t)} for s, t in entries]
        click.echo(json.dumps(payload, indent=2))
        return

    if not entries:
        console.print(f"No policy files found for {package} in {install_path}", soft_wrap=True)
        return
    for source, target in entries:
        console.print(f"  {source} -> {target}", markup=False, highlight=False, soft_wrap=True)
