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

from dataclasses import dataclass
from pathlib import Path

from pyrage import passphrase as pyrage_passphrase

from ..core.errors import ExtractionOrEncryptionError, NameCollisionError
from .ranges import read_byte_range


@dataclass
class AgeError(ExtractionOrEncryptionError):
    backend: str
    detail: str

    def __str__(self) -> str:
        message = self.detail.strip() or "unknown error"
        return f"age ({self.backend}) failed: {message}"


def _wrap_pyrage_error(exc: Exception) -> AgeError:
    detail = str(exc).strip() or exc.__class__.__name__
    return AgeError(backend="pyrage", detail=detail)


def _encrypt_with_pyrage(data: bytes, passphrase: str) -> bytes:
    try:
        return pyrage_passphrase.encrypt(data, passphrase)
    except (ValueError, TypeError, RuntimeError, OSError) as exc:
        # pyrage can raise various exceptions for invalid input/state
        raise _wrap_pyrage_error(exc) from exc


class AgeCipher:
    """In-process age passphrase (scrypt) encryption.

    pyrage only encrypts in-memory buffers, so each part is read whole.
    """

    suffix = ".age"

    def encrypt_range(
        self,
        source: Path,
        destination: Path,
        offset: int,
        length: int | None,
        passphrase: str,
    ) -> None:
        try:
            data = read_byte_range(source, offset, length)
        except OSError as exc:
            raise ExtractionOrEncryptionError(f"can't read {source}: {exc}") from exc
        ciphertext = _encrypt_with_pyrage(data, passphrase)
        try:
            with open(destination, "xb") as handle:
                handle.write(ciphertext)
        except FileExistsError as exc:
            raise NameCollisionError(destination) from exc
