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
"""Split dump archives into encrypted, volume-sized parts for offsite media."""

from __future__ import annotations

from .core.errors import (
    ExtractionOrEncryptionError,
    NameCollisionError,
    OffsiteError,
    PackCancelled,
    SizeProbeError,
    VolumeCreateError,
)
from .core.models import PackLimits, PackPlan, PackResult, Part, PartResult
from .packing import pack_files, plan_files, predict_parts
from .selection import select_backup_files

__all__ = [
    "ExtractionOrEncryptionError",
    "NameCollisionError",
    "OffsiteError",
    "PackCancelled",
    "PackLimits",
    "PackPlan",
    "PackResult",
    "Part",
    "PartResult",
    "SizeProbeError",
    "VolumeCreateError",
    "pack_files",
    "plan_files",
    "predict_parts",
    "select_backup_files",
]
