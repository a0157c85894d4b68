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

import os
from pathlib import Path

from ..core.errors import WorkDirectoryError


def check_work_directory(path: str | Path) -> Path:
    directory = Path(path)
    if not directory.exists():
        try:
            directory.mkdir(parents=True)
        except OSError as exc:
            raise WorkDirectoryError(
                f"can't create work directory {directory}: {exc.strerror or exc}"
            ) from exc
        return directory
    if not directory.is_dir():
        raise WorkDirectoryError(f"work directory {directory} is not a directory")
    if not os.access(directory, os.W_OK | os.X_OK):
        raise WorkDirectoryError(f"work directory {directory} is not writeable")
    return directory
