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

import logging
from pathlib import Path

from ..core.errors import VolumeCreateError
from ..core.models import PackingState, PackLimits, Reservation
from .stepping import carve, needs_rollover

logger = logging.getLogger(__name__)


class VolumeAllocator:
    """Tracks the current volume and the bytes left on it for one packing run.

    The allocator starts with no open volume, so the first ``ensure_capacity``
    call opens volume 1. An existing volume directory is reused rather than
    treated as an error; overwriting is prevented per file by the extractor.
    """

    def __init__(
        self,
        limits: PackLimits,
        work_dir: str | Path | None = None,
        *,
        create_dirs: bool = True,
    ) -> None:
        if create_dirs and work_dir is None:
            raise ValueError("work_dir is required when volume directories are created")
        self.limits = limits
        self.work_dir = Path(work_dir) if work_dir is not None else None
        self.create_dirs = create_dirs
        self.state = PackingState()

    @property
    def current_volume(self) -> int:
        return self.state.current_volume

    @property
    def remaining_bytes(self) -> int:
        return self.state.remaining_bytes

    def bytes_available(self) -> int:
        return self.state.remaining_bytes

    def volume_dir(self, volume: int) -> Path:
        if self.work_dir is None:
            raise ValueError("allocator has no work directory")
        return self.work_dir / str(volume)

    def ensure_capacity(self, block_size: int) -> bool:
        if not needs_rollover(self.state.remaining_bytes, block_size):
            return False
        self.state.current_volume += 1
        logger.debug("--- starting volume %d", self.state.current_volume)
        if self.create_dirs:
            self._make_volume_dir(self.state.current_volume)
        self.state.remaining_bytes = self.limits.volume_capacity
        return True

    def reserve(self, file_size: int, max_file_size: int, block_size: int) -> Reservation:
        cut = carve(self.state.remaining_bytes, file_size, max_file_size, block_size)
        self.state.remaining_bytes = cut.remaining
        return Reservation(copy_bytes=cut.copy_bytes, to_eof=cut.to_eof)

    def _make_volume_dir(self, volume: int) -> Path:
        path = self.volume_dir(volume)
        try:
            path.mkdir(parents=False, exist_ok=True)
        except OSError as exc:
            raise VolumeCreateError(path, exc.strerror or str(exc)) from exc
        return path
