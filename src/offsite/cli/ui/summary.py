#!/usr/bin/env python3
from __future__ import annotations

from pathlib import Path

from ...core.models import PackPlan, PackResult
from . import (
    build_kv_table,
    build_list_table,
    build_plan_table,
    build_volumes_tree,
    console,
    console_err,
    panel,
)


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def print_pack_summary(
    result: PackResult,
    work_dir: Path,
    *,
    dry_run: bool,
    quiet: bool,
) -> None:
    if quiet:
        return
    written = len(result.parts) - len(result.failures)
    rows = [
        ("Work directory", str(work_dir)),
        ("Volumes", str(result.volumes)),
        ("Parts planned" if dry_run else "Parts written", str(written)),
    ]
    if result.failures:
        rows.append(("Failed", _plural(len(result.failures), "part")))
    if result.skipped:
        rows.append(("Skipped", _plural(len(result.skipped), "file")))
    if result.cancelled:
        rows.append(("Status", "cancelled"))
    title = "Dry run" if dry_run else "Pack summary"
    style = "success" if result.ok else "warning"
    console.print()
    console.print(panel(title, build_kv_table(rows), style=style))
    if result.parts:
        console.print(panel("Volumes", build_volumes_tree(str(work_dir), result.parts)))
    if result.skipped:
        items = [f"{entry.path}: {entry.reason}" for entry in result.skipped]
        console_err.print(build_list_table("Skipped files", items))


def print_plan(plan: PackPlan, *, quiet: bool) -> None:
    if quiet:
        return
    title = f"{_plural(plan.volumes, 'volume')}, {_plural(len(plan.parts), 'part')}"
    console.print(build_plan_table(plan.parts, title=title))
    if plan.skipped:
        items = [f"{entry.path}: {entry.reason}" for entry in plan.skipped]
        console_err.print(build_list_table("Skipped files", items))


def print_selection(paths: list[Path], *, quiet: bool) -> None:
    if quiet:
        for path in paths:
            console.print(str(path), highlight=False, soft_wrap=True)
        return
    console.print(build_list_table(f"Selected archives ({len(paths)})", [str(p) for p in paths]))
