#!/usr/bin/env python3
from __future__ import annotations

import typer

from ..core.common import _ctx_value, _run_cli
from ..core.types import PackArgs
from ..flows.pack import run_select_command


def register(app: typer.Typer) -> None:
    app.command(name="select", help="List the archives that would be taken offsite.")(
        select_archives
    )


def select_archives(
    ctx: typer.Context,
    backup_dir: str | None = typer.Option(
        None,
        "--backup-dir",
        help="Directory holding the dump archives.",
        rich_help_panel="Paths",
    ),
) -> None:
    debug = bool(_ctx_value(ctx, "debug"))
    args = PackArgs(
        config=_ctx_value(ctx, "config"),
        backup_dir=backup_dir,
        debug=debug,
        quiet=bool(_ctx_value(ctx, "quiet")),
        syslog=_ctx_value(ctx, "syslog"),
        facility=_ctx_value(ctx, "facility"),
    )
    _run_cli(lambda: run_select_command(args), debug=debug)
