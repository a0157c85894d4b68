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

from ..core.errors import ExtractionOrEncryptionError, NameCollisionError
from ..core.models import Part, PartResult
from ..crypto import PartCipher, read_passphrase

logger = logging.getLogger(__name__)


def encrypt_range(
    source: Path,
    destination: Path,
    block_size: int,
    offset_blocks: int,
    copy_blocks: int,
    passphrase_source: Path | None,
    *,
    cipher: PartCipher,
    dry_run: bool = False,
) -> None:
    """Encrypt ``copy_blocks`` blocks of ``source`` starting ``offset_blocks`` in.

    ``copy_blocks == 0`` copies to end of file. The passphrase is read once per
    call. A dry run returns before anything is read or written.
    """
    if dry_run:
        return
    if block_size <= 0:
        raise ValueError("block_size must be positive")
    if offset_blocks < 0 or copy_blocks < 0:
        raise ValueError("block offsets must be non-negative")
    if passphrase_source is None:
        raise ExtractionOrEncryptionError("no passphrase file configured")
    if destination.exists():
        raise NameCollisionError(destination)
    passphrase = read_passphrase(passphrase_source)
    length = copy_blocks * block_size if copy_blocks else None
    cipher.encrypt_range(source, destination, offset_blocks * block_size, length, passphrase)


def encrypt_part(
    part: Part,
    *,
    work_dir: Path,
    cipher: PartCipher,
    passphrase_source: Path | None,
    dry_run: bool = False,
) -> PartResult:
    destination = part.destination(work_dir)
    try:
        encrypt_range(
            part.source.path,
            destination,
            part.block_size,
            part.offset_blocks,
            part.copy_blocks,
            passphrase_source,
            cipher=cipher,
            dry_run=dry_run,
        )
    except (ExtractionOrEncryptionError, OSError) as exc:
        logger.error(
            "encrypt of %s (%d blocks @ offset %d blocks) failed: %s",
            part.source.path,
            part.copy_blocks,
            part.offset_blocks,
            exc,
        )
        return PartResult(part=part, error=str(exc))
    return PartResult(part=part)
