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

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class PackArgs:
    """Typed container for pack, plan and select command arguments."""

    config: str | None = None
    files: list[str] = field(default_factory=list)
    backup_dir: str | None = None
    work_dir: str | None = None
    pwfile: str | None = None
    block_size: int | None = None
    max_file_size: int | None = None
    max_volume_size: int | None = None
    cipher: str | None = None
    jobs: str | None = None
    dry_run: bool = False
    debug: bool = False
    quiet: bool = False
    syslog: bool | None = None
    facility: str | None = None


@dataclass(frozen=True)
class PackSettings:
    """Command line values merged over the config file."""

    files: tuple[Path, ...]
    backup_dir: Path | None
    work_dir: Path | None
    password_file: Path | None
    block_size: int
    max_file_size: int
    max_volume_size: int
    cipher: str
    gpg_path: str | None
    jobs: int | str
    dry_run: bool
