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

"""Pick the archives that go offsite.

Archives are named ``<filesystem>.<level>.<timestamp>.tar.bz2``. For every
filesystem the newest level 0 archive is taken, followed by the newest level 1
archive when one was written after that level 0.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

ARCHIVE_SUFFIX = ".bz2"


@dataclass(frozen=True)
class ArchiveName:
    filesystem: str
    level: int | None
    timestamp: str | None


def parse_archive_name(name: str) -> ArchiveName:
    fields = name.split(".")
    filesystem = fields[0]
    level: int | None = None
    if len(fields) > 1 and fields[1].isdigit():
        level = int(fields[1])
    timestamp = fields[2] if len(fields) > 3 else None
    return ArchiveName(filesystem=filesystem, level=level, timestamp=timestamp)


def list_archives(backup_dir: str | Path) -> list[Path]:
    directory = Path(backup_dir)
    if not directory.is_dir():
        raise ValueError(f"backup directory not found: {directory}")
    return sorted(
        entry
        for entry in directory.iterdir()
        if entry.name.endswith(ARCHIVE_SUFFIX) and entry.is_file()
    )


def _latest(candidates: list[Path]) -> Path | None:
    if not candidates:
        return None
    return max(candidates, key=lambda path: path.name)


def select_backup_files(backup_dir: str | Path) -> list[Path]:
    archives = list_archives(backup_dir)
    by_filesystem: dict[str, list[tuple[ArchiveName, Path]]] = {}
    for path in archives:
        parsed = parse_archive_name(path.name)
        by_filesystem.setdefault(parsed.filesystem, []).append((parsed, path))

    selected: list[Path] = []
    for filesystem in sorted(by_filesystem):
        entries = by_filesystem[filesystem]
        level0 = _latest([path for parsed, path in entries if parsed.level == 0])
        if level0 is None:
            logger.error("no level 0 backup found for %s", filesystem)
            continue
        selected.append(level0)
        level0_mtime = level0.stat().st_mtime
        level1 = _latest(
            [
                path
                for parsed, path in entries
                if parsed.level == 1 and path.stat().st_mtime > level0_mtime
            ]
        )
        if level1 is not None:
            selected.append(level1)
    return selected
