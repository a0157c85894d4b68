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

"""Greedy left-to-right packing of archives into numbered volume directories.

Placement is strictly sequential: each file's parts depend on how much space
the files before it left on the current volume. Once a part's volume, offset
and length are fixed, its encryption touches no shared state, so with
``jobs > 1`` the encryption step alone is fanned out to a thread pool.
"""

from __future__ import annotations

import concurrent.futures
import functools
import logging
import os
import threading
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path

from ..core.bounds import CANCEL_POLL_SECONDS, MAX_AUTO_JOBS
from ..core.errors import NameCollisionError, PackCancelled, SizeProbeError
from ..core.models import (
    InputFile,
    PackLimits,
    PackPlan,
    PackResult,
    Part,
    PartResult,
    SkippedFile,
)
from ..crypto import PartCipher
from .allocator import VolumeAllocator
from .extract import encrypt_part
from .naming import part_dest_name
from .predictor import predict_parts

logger = logging.getLogger(__name__)

PartCallback = Callable[[PartResult], None]


def resolve_jobs(jobs: int | str | None) -> int:
    if jobs is None:
        return 1
    if isinstance(jobs, str):
        normalized = jobs.strip().lower()
        if normalized == "auto":
            cpu = os.cpu_count() or 1
            return max(1, min(cpu, MAX_AUTO_JOBS))
        try:
            jobs = int(normalized)
        except ValueError:
            raise ValueError("jobs must be 'auto' or a positive integer") from None
    if jobs <= 0:
        raise ValueError("jobs must be 'auto' or a positive integer")
    return jobs


def place_file(
    source: InputFile,
    allocator: VolumeAllocator,
    *,
    suffix: str,
    cancel: threading.Event | None = None,
) -> Iterator[Part]:
    """Cut ``source`` into parts, advancing ``allocator`` as each part is placed.

    Parts are yielded in offset order. Raises ``PackCancelled`` when ``cancel``
    is set between two parts.
    """
    limits = allocator.limits
    total = predict_parts(
        source.size,
        limits.volume_capacity,
        limits.max_file_size,
        allocator.bytes_available(),
        block_size=limits.block_size,
    )
    if total == 0:
        logger.warning("%s is empty; nothing to pack", source.path)
        return
    left = source.size
    offset = 0
    for index in range(1, total + 1):
        if cancel is not None and cancel.is_set():
            raise PackCancelled
        allocator.ensure_capacity(limits.block_size)
        reservation = allocator.reserve(left, limits.max_file_size, limits.block_size)
        left -= reservation.copy_bytes
        part = Part(
            source=source,
            index=index,
            total=total,
            volume=allocator.current_volume,
            offset=offset,
            length=None if reservation.to_eof else reservation.copy_bytes,
            dest_name=part_dest_name(source.basename, index, total, suffix),
            block_size=limits.block_size,
        )
        logger.debug(
            "%d/%s: %d @ %d", part.volume, part.dest_name, part.copy_blocks, part.offset_blocks
        )
        offset += reservation.copy_bytes
        yield part


def _probe(path: str | os.PathLike[str]) -> InputFile | SkippedFile:
    try:
        return InputFile.probe(path)
    except SizeProbeError as exc:
        logger.error("%s; skipping", exc)
        return SkippedFile(path=exc.path, reason=exc.reason)


def plan_files(
    files: Iterable[str | os.PathLike[str]],
    limits: PackLimits,
    *,
    suffix: str = ".gpg",
) -> PackPlan:
    """Compute the full volume/part layout without creating anything."""
    allocator = VolumeAllocator(limits, create_dirs=False)
    parts: list[Part] = []
    skipped: list[SkippedFile] = []
    for path in files:
        probed = _probe(path)
        if isinstance(probed, SkippedFile):
            skipped.append(probed)
            continue
        parts.extend(place_file(probed, allocator, suffix=suffix))
    return PackPlan(
        volumes=allocator.current_volume,
        parts=tuple(parts),
        skipped=tuple(skipped),
    )


def _drain(
    futures: list[concurrent.futures.Future[PartResult]],
    *,
    cancel: threading.Event | None,
    on_done: PartCallback,
) -> bool:
    """Report futures as they finish; return True if ``cancel`` cut the run short."""
    waiting = set(futures)
    while waiting:
        if cancel is not None and cancel.is_set():
            for future in waiting:
                future.cancel()
            return True
        done, waiting = concurrent.futures.wait(
            waiting,
            timeout=CANCEL_POLL_SECONDS,
            return_when=concurrent.futures.FIRST_COMPLETED,
        )
        for future in done:
            on_done(future.result())
    return False


def pack_files(
    files: Iterable[str | os.PathLike[str]],
    limits: PackLimits,
    *,
    work_dir: str | Path,
    cipher: PartCipher,
    passphrase_source: Path | None,
    dry_run: bool = False,
    jobs: int | str | None = 1,
    cancel: threading.Event | None = None,
    on_part: PartCallback | None = None,
) -> PackResult:
    """Split and encrypt ``files`` into ``<work_dir>/<volume>/`` directories.

    Per-part failures are logged and recorded in the result; only a volume
    directory that cannot be created (``VolumeCreateError``) aborts the run.
    A dry run places and names every part but creates no directories or files.

    With ``jobs > 1``, ``on_part`` fires as each part finishes while
    ``PackResult.parts`` stays in placement order. Setting ``cancel`` drops
    parts still queued; encryptions already running are allowed to finish.
    """
    work_dir = Path(work_dir)
    workers = resolve_jobs(jobs)
    allocator = VolumeAllocator(limits, work_dir, create_dirs=not dry_run)
    result = PackResult()
    taken: dict[int, set[str]] = {}
    encrypt = functools.partial(
        encrypt_part,
        work_dir=work_dir,
        cipher=cipher,
        passphrase_source=passphrase_source,
        dry_run=dry_run,
    )
    executor = concurrent.futures.ThreadPoolExecutor(max_workers=workers) if workers > 1 else None
    ordered: list[concurrent.futures.Future[PartResult] | PartResult] = []
    futures: list[concurrent.futures.Future[PartResult]] = []

    def _report(outcome: PartResult) -> None:
        if on_part is not None:
            on_part(outcome)

    def _dispatch(part: Part) -> None:
        names = taken.setdefault(part.volume, set())
        if part.dest_name in names:
            error = NameCollisionError(
                part.destination(work_dir), detail="two sources share a name in one volume"
            )
            logger.error("%s; part not written", error)
            outcome = PartResult(part=part, error=str(error))
        elif executor is None:
            names.add(part.dest_name)
            outcome = encrypt(part)
        else:
            names.add(part.dest_name)
            future = executor.submit(encrypt, part)
            futures.append(future)
            ordered.append(future)
            return
        ordered.append(outcome)
        _report(outcome)

    try:
        for path in files:
            if cancel is not None and cancel.is_set():
                raise PackCancelled
            probed = _probe(path)
            if isinstance(probed, SkippedFile):
                result.skipped.append(probed)
                continue
            for part in place_file(probed, allocator, suffix=cipher.suffix, cancel=cancel):
                _dispatch(part)
        if executor is not None and _drain(futures, cancel=cancel, on_done=_report):
            raise PackCancelled
    except PackCancelled:
        logger.warning("packing cancelled; remaining parts were not written")
        result.cancelled = True
    finally:
        if executor is not None:
            executor.shutdown(wait=True, cancel_futures=True)

    for item in ordered:
        if isinstance(item, PartResult):
            result.parts.append(item)
        elif not item.cancelled():
            result.parts.append(item.result())
    result.volumes = allocator.current_volume
    return result


__all__ = [
    "PackCancelled",
    "pack_files",
    "place_file",
    "plan_files",
    "resolve_jobs",
]
