#!/usr/bin/env python3
# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

from __future__ import annotations

from pathlib import Path

import typer

from ..core.common import _ctx_value, _run_cli
from ..core.types import PackArgs
from ..flows.pack import run_plan_command

_PLAN_HELP = (
    "Show how archives would be split across volumes without writing anything.\n\n"
    "Examples:\n"
    "  offsite plan --backup-dir /backup\n"
    "  offsite plan --max-volume-size 700000000 big.0.20260101.tar.bz2\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_PLAN_HELP)(plan)


def plan(
    ctx: typer.Context,
    files: list[Path] | None = typer.Argument(
        None,
        help="Archives to plan instead of selecting from the backup directory.",
        show_default=False,
    ),
    backup_dir: str | None = typer.Option(
        None,
        "--backup-dir",
        help="Directory holding the dump archives.",
        rich_help_panel="Paths",
    ),
    cipher: str | None = typer.Option(
        None,
        "--cipher",
        help="Encryption backend used to name the parts: gpg or age.",
        rich_help_panel="Encryption",
    ),
    block_size: int | None = typer.Option(
        None, "--block-size", min=1, help="Copy granularity in bytes.", rich_help_panel="Limits"
    ),
    max_file_size: int | None = typer.Option(
        None,
        "--max-file-size",
        min=1,
        help="Largest part written to a volume, in bytes.",
        rich_help_panel="Limits",
    ),
    max_volume_size: int | None = typer.Option(
        None,
        "--max-volume-size",
        min=1,
        help="Capacity of one volume, in bytes.",
        rich_help_panel="Limits",
    ),
) -> None:
    debug = bool(_ctx_value(ctx, "debug"))
    args = PackArgs(
        config=_ctx_value(ctx, "config"),
        files=[str(path) for path in (files or [])],
        backup_dir=backup_dir,
        block_size=block_size,
        max_file_size=max_file_size,
        max_volume_size=max_volume_size,
        cipher=cipher,
        dry_run=True,
        debug=debug,
        quiet=bool(_ctx_value(ctx, "quiet")),
        syslog=_ctx_value(ctx, "syslog"),
        facility=_ctx_value(ctx, "facility"),
    )
    _run_cli(lambda: run_plan_command(args), debug=debug)
