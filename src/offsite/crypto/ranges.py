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

from collections.abc import Iterator
from pathlib import Path

from ..core.bounds import STREAM_CHUNK_BYTES


def iter_byte_range(
    path: str | Path,
    offset: int,
    length: int | None,
    *,
    chunk_size: int = STREAM_CHUNK_BYTES,
) -> Iterator[bytes]:
    """Yield bytes ``[offset, offset + length)`` of ``path`` (to EOF when ``length`` is None)."""
    if offset < 0:
        raise ValueError("offset must be non-negative")
    if length is not None and length < 0:
        raise ValueError("length must be non-negative")
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    with open(path, "rb") as handle:
        handle.seek(offset)
        left = length
        while left is None or left > 0:
            size = chunk_size if left is None else min(chunk_size, left)
            chunk = handle.read(size)
            if not chunk:
                break
            if left is not None:
                left -= len(chunk)
            yield chunk


def read_byte_range(path: str | Path, offset: int, length: int | None) -> bytes:
    return b"".join(iter_byte_range(path, offset, length))
