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

# dd-style copy granularity; unused tail of each full volume is below this.
DEFAULT_BLOCK_SIZE = 4_096

# Slightly under 2 GiB, the largest file mkisofs accepts in an ISO-9660 image.
DEFAULT_MAX_FILE_SIZE = 2_000_000_000

# 99.9% of a single-layer DVD.
DEFAULT_MAX_VOLUME_SIZE = 4_698_112_000

# Read size when streaming a byte range into the cipher.
STREAM_CHUNK_BYTES = 1_048_576

# Upper bound for runtime.jobs = "auto".
MAX_AUTO_JOBS = 4

# age (pyrage) encrypts whole in-memory buffers; larger parts are refused.
AGE_MAX_PART_BYTES = 536_870_912

# How often a parallel run rechecks the cancel flag while parts are encrypting.
CANCEL_POLL_SECONDS = 0.1


__all__ = [
    "AGE_MAX_PART_BYTES",
    "CANCEL_POLL_SECONDS",
    "DEFAULT_BLOCK_SIZE",
    "DEFAULT_MAX_FILE_SIZE",
    "DEFAULT_MAX_VOLUME_SIZE",
    "MAX_AUTO_JOBS",
    "STREAM_CHUNK_BYTES",
]
