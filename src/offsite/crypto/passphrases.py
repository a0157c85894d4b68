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

from ..core.errors import PassphraseError


def read_passphrase(source: str | Path) -> str:
    """Return the first line of ``source`` without its line ending."""
    path = Path(source)
    try:
        with path.open("r", encoding="utf-8") as handle:
            line = handle.readline()
    except (OSError, UnicodeDecodeError) as exc:
        raise PassphraseError(f"can't read passphrase file {path}: {exc}") from exc
    passphrase = line.rstrip("\r\n")
    if not passphrase:
        raise PassphraseError(f"passphrase file {path} is empty")
    return passphrase
