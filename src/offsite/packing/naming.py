#!/usr/bin/env python3
from __future__ import annotations


def part_label(index: int, total: int) -> str:
    return f"{index:02d}of{total:02d}"


def part_dest_name(basename: str, index: int, total: int, suffix: str) -> str:
    """Name of a part inside its volume directory.

    Split files carry a ``.NNofMM`` marker; a file placed in one piece keeps
    its basename.
    """
    if index < 1 or index > total:
        raise ValueError(f"part index {index} out of range 1..{total}")
    if total > 1:
        return f"{basename}.{part_label(index, total)}{suffix}"
    return f"{basename}{suffix}"
