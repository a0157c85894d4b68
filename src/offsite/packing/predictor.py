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

from .stepping import step_once


def predict_parts(
    file_size: int,
    volume_capacity: int,
    max_file_size: int,
    bytes_available_now: int,
    *,
    block_size: int = 1,
) -> int:
    """Return how many parts a file of ``file_size`` bytes will be cut into.

    ``bytes_available_now`` is the space left on the current volume; zero (or
    anything below ``block_size``) means the first part opens a fresh volume.
    No allocator state is touched.
    """
    if block_size <= 0 or max_file_size < block_size or volume_capacity < block_size:
        raise ValueError("block_size must be positive and fit in both size limits")
    remaining = bytes_available_now
    parts = 0
    while file_size > 0:
        step = step_once(
            remaining,
            file_size,
            volume_capacity=volume_capacity,
            max_file_size=max_file_size,
            block_size=block_size,
        )
        file_size -= step.consumed
        remaining = step.remaining
        parts += 1
    return parts
