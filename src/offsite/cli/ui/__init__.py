#!/usr/bin/env python3
from __future__ import annotations

import sys
from collections.abc import Sequence
from contextlib import contextmanager

from rich import box
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.tree import Tree

from ...core.models import Part, PartResult
from .state import OFFSITE_THEME, UIContext, get_context, stream_is_tty

console = get_context().console
console_err = get_context().console_err


def configure_ui(*, no_color: bool, context: UIContext | None = None) -> None:
    context = context or get_context()
    context.console.no_color = no_color
    context.console_err.no_color = no_color


@contextmanager
def progress(*, quiet: bool, context: UIContext | None = None):
    context = context or get_context()
    if quiet:
        yield None
        return
    progress_bar = Progress(
        SpinnerColumn(style="volume"),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=context.console,
        transient=True,
        disable=not stream_is_tty(sys.__stdout__),
    )
    with progress_bar:
        yield progress_bar


def build_kv_table(rows: Sequence[tuple[str, str]], *, title: str | None = None) -> Table:
    table = Table(title=title, show_header=False, box=box.SIMPLE, show_lines=False)
    table.add_column("Field", style="bold", no_wrap=True)
    table.add_column("Value")
    for key, value in rows:
        table.add_row(str(key), str(value))
    return table


def build_list_table(title: str, items: Sequence[str]) -> Table:
    table = Table(title=title, show_header=False, box=box.ASCII)
    table.add_column("Value")
    for item in items:
        table.add_row(str(item))
    return table


def build_plan_table(parts: Sequence[Part], *, title: str | None = None) -> Table:
    table = Table(title=title, box=box.SIMPLE_HEAD, show_lines=False)
    table.add_column("Volume", justify="right", style="volume", no_wrap=True)
    table.add_column("Part", no_wrap=True)
    table.add_column("Offset (blocks)", justify="right")
    table.add_column("Length (blocks)", justify="right")
    table.add_column("Bytes", justify="right")
    table.add_column("Destination")
    for part in parts:
        length = "to EOF" if part.length is None else str(part.copy_blocks)
        table.add_row(
            str(part.volume),
            f"{part.index}/{part.total}",
            str(part.offset_blocks),
            length,
            str(part.byte_count),
            f"{part.volume}/{part.dest_name}",
        )
    return table


def build_volumes_tree(root: str, results: Sequence[PartResult]) -> Tree:
    tree = Tree(root, guide_style="muted")
    volumes: dict[int, Tree] = {}
    for outcome in results:
        part = outcome.part
        branch = volumes.get(part.volume)
        if branch is None:
            branch = tree.add(f"[volume]{part.volume}/[/volume]")
            volumes[part.volume] = branch
        if outcome.ok:
            branch.add(part.dest_name)
        else:
            branch.add(f"[failed]{part.dest_name}[/failed] [muted]({outcome.error})[/muted]")
    return tree


def panel(title: str, renderable, *, style: str = "panel") -> Panel:
    return Panel(
        renderable,
        title=title,
        title_align="left",
        border_style=style,
        box=box.ROUNDED,
        padding=(1, 2),
    )


__all__ = [
    "OFFSITE_THEME",
    "build_kv_table",
    "build_list_table",
    "build_plan_table",
    "build_volumes_tree",
    "configure_ui",
    "console",
    "console_err",
    "panel",
    "progress",
]
