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

"""Volume packing: prediction, allocation, naming and the packing driver."""

from .allocator import VolumeAllocator
from .driver import pack_files, place_file, plan_files, resolve_jobs
from .extract import encrypt_part, encrypt_range
from .naming import part_dest_name, part_label
from .predictor import predict_parts
from .stepping import Carve, Step, carve, needs_rollover, step_once
from .workdir import check_work_directory

__all__ = [
    "Carve",
    "Step",
    "VolumeAllocator",
    "carve",
    "check_work_directory",
    "encrypt_part",
    "encrypt_range",
    "needs_rollover",
    "pack_files",
    "part_dest_name",
    "part_label",
    "place_file",
    "plan_files",
    "predict_parts",
    "resolve_jobs",
    "step_once",
]
