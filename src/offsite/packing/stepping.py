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

"""The single placement rule shared by prediction and allocation.

Both :func:`offsite.packing.predictor.predict_parts` and
:class:`offsite.packing.allocator.VolumeAllocator` go through these functions,
so the number of predicted parts always equals the number of parts the
allocator later cuts.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Carve:
    copy_bytes: int
    remaining: int
    to_eof: bool


@dataclass(frozen=True)
class Step:
    consumed: int
    remaining: int
    rolled_over: bool
    to_eof: bool


def needs_rollover(remaining: int, block_size: int) -> bool:
    return remaining < block_size


def carve(remaining: int, file_size: int, max_file_size: int, block_size: int) -> Carve:
    """Cut the next part of a file out of ``remaining`` bytes of volume space.

    ``file_size`` is the part of the file not yet written. When it is at least
    the space this step may use, the part is capped at whole blocks of both the
    remaining volume space and ``max_file_size``; otherwise the rest of the
    file fits and the part runs to end of file.
    """
    if file_size >= min(remaining, max_file_size):
        copy_blocks = min(remaining // block_size, max_file_size // block_size)
        copy_bytes = copy_blocks * block_size
        return Carve(copy_bytes=copy_bytes, remaining=remaining - copy_bytes, to_eof=False)
    return Carve(copy_bytes=file_size, remaining=remaining - file_size, to_eof=True)


def step_once(
    remaining: int,
    file_size: int,
    *,
    volume_capacity: int,
    max_file_size: int,
    block_size: int,
) -> Step:
    rolled_over = needs_rollover(remaining, block_size)
    if rolled_over:
        remaining = volume_capacity
    cut = carve(remaining, file_size, max_file_size, block_size)
    return Step(
        consumed=cut.copy_bytes,
        remaining=cut.remaining,
        rolled_over=rolled_over,
        to_eof=cut.to_eof,
    )
