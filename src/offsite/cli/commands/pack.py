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

from ..core.common import _ctx_value, _jobs_callback, _run_cli
from ..core.types import PackArgs
from ..flows.pack import run_pack_command

_PACK_HELP = (
    "Split and encrypt archives into one directory per volume.\n\n"
    "Without FILES the newest level 0 and level 1 archives of every filesystem\n"
    "in the backup directory are packed.\n\n"
    "Examples:\n"
    "  offsite pack --backup-dir /backup --work-dir /spool --pwfile ~/.offsite-pw\n"
    "  offsite pack --dry-run --work-dir /spool home.0.20260101.tar.bz2\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_PACK_HELP)(pack)


def pack(
    ctx: typer.Context,
    files: list[Path] | None = typer.Argument(
        None,
        help="Archives to pack instead of selecting from the backup directory.",
        show_default=False,
    ),
    backup_dir: str | None = typer.Option(
        None,
        "--backup-dir",
        help="Directory holding the dump archives.",
        rich_help_panel="Paths",
    ),
    work_dir: str | None = typer.Option(
        None,
        "--work-dir",
        help="Directory that receives the numbered volume directories.",
        rich_help_panel="Paths",
    ),
    pwfile: str | None = typer.Option(
        None,
        "--pwfile",
        help="File whose first line is the encryption passphrase.",
        rich_help_panel="Encryption",
    ),
    cipher: str | None = typer.Option(
        None,
        "--cipher",
        help=(
            "Encryption backend: gpg or age. age holds each part in memory and "
            "needs --max-file-size of at most 512 MiB."
        ),
        rich_help_panel="Encryption",
    ),
    block_size: int | None = typer.Option(
        None,
        "--block-size",
        min=1,
        help="Copy granularity in bytes.",
        rich_help_panel="Limits",
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
    jobs: str | None = typer.Option(
        None,
        "--jobs",
        "-j",
        help="Parallel encryption workers (a positive integer or 'auto').",
        callback=_jobs_callback,
        rich_help_panel="Behavior",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would be created without writing anything.",
        rich_help_panel="Behavior",
    ),
) -> None:
    debug = bool(_ctx_value(ctx, "debug"))
    args = PackArgs(
        config=_ctx_value(ctx, "config"),
        files=[str(path) for path in (files or [])],
        backup_dir=backup_dir,
        work_dir=work_dir,
        pwfile=pwfile,
        block_size=block_size,
        max_file_size=max_file_size,
        max_volume_size=max_volume_size,
        cipher=cipher,
        jobs=jobs,
        dry_run=dry_run,
        debug=debug,
        quiet=bool(_ctx_value(ctx, "quiet")),
        syslog=_ctx_value(ctx, "syslog"),
        facility=_ctx_value(ctx, "facility"),
    )
    _run_cli(lambda: run_pack_command(args), debug=debug)
