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
from dataclasses import dataclass, field
from pathlib import Path

from .bounds import DEFAULT_BLOCK_SIZE, DEFAULT_MAX_FILE_SIZE, DEFAULT_MAX_VOLUME_SIZE
from .errors import SizeProbeError


@dataclass(frozen=True)
class PackLimits:
    volume_capacity: int = DEFAULT_MAX_VOLUME_SIZE
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    block_size: int = DEFAULT_BLOCK_SIZE

    def __post_init__(self) -> None:
        for name in ("volume_capacity", "max_file_size", "block_size"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"{name} must be a positive integer")
        if self.block_size > self.max_file_size:
            raise ValueError("block_size cannot exceed max_file_size")
        if self.block_size > self.volume_capacity:
            raise ValueError("block_size cannot exceed volume_capacity")


@dataclass(frozen=True)
class InputFile:
    path: Path
    size: int

    @property
    def basename(self) -> str:
        return self.path.name

    @classmethod
    def probe(cls, path: str | os.PathLike[str]) -> InputFile:
        resolved = Path(path).absolute()
        try:
            size = resolved.stat().st_size
        except OSError as exc:
            raise SizeProbeError(resolved, exc.strerror or str(exc)) from exc
        return cls(path=resolved, size=size)


@dataclass(frozen=True)
class Part:
    """One contiguous byte range of a source file, placed on one volume.

    ``length`` is ``None`` for a part that runs to end of file.
    """

    source: InputFile
    index: int
    total: int
    volume: int
    offset: int
    length: int | None
    dest_name: str
    block_size: int

    @property
    def is_split(self) -> bool:
        return self.total > 1

    @property
    def offset_blocks(self) -> int:
        return self.offset // self.block_size

    @property
    def copy_blocks(self) -> int:
        if self.length is None:
            return 0
        return self.length // self.block_size

    @property
    def byte_count(self) -> int:
        if self.length is None:
            return self.source.size - self.offset
        return self.length

    def destination(self, work_dir: Path) -> Path:
        return work_dir / str(self.volume) / self.dest_name


@dataclass
class PackingState:
    current_volume: int = 0
    remaining_bytes: int = 0


@dataclass(frozen=True)
class Reservation:
    copy_bytes: int
    to_eof: bool


@dataclass(frozen=True)
class PartResult:
    part: Part
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class SkippedFile:
    path: Path
    reason: str


@dataclass(frozen=True)
class PackPlan:
    volumes: int
    parts: tuple[Part, ...]
    skipped: tuple[SkippedFile, ...] = ()


@dataclass
class PackResult:
    volumes: int = 0
    parts: list[PartResult] = field(default_factory=list)
    skipped: list[SkippedFile] = field(default_factory=list)
    cancelled: bool = False

    @property
    def failures(self) -> list[PartResult]:
        return [result for result in self.parts if not result.ok]

    @property
    def ok(self) -> bool:
        return not self.failures and not self.skipped and not self.cancelled


__all__ = [
    "InputFile",
    "PackLimits",
    "PackPlan",
    "PackResult",
    "PackingState",
    "Part",
    "PartResult",
    "Reservation",
    "SkippedFile",
]
