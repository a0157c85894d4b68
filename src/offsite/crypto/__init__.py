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

"""Part ciphers: byte-range readers and passphrase encryption backends."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from .age_runtime import AgeCipher, AgeError
from .gpg_cli import GpgCipher, GpgCliError, check_gpg, get_gpg_path
from .passphrases import read_passphrase
from .ranges import iter_byte_range, read_byte_range

CIPHER_BACKENDS = ("gpg", "age")
DEFAULT_CIPHER_BACKEND = "gpg"


class PartCipher(Protocol):
    suffix: str

    def encrypt_range(
        self,
        source: Path,
        destination: Path,
        offset: int,
        length: int | None,
        passphrase: str,
    ) -> None: ...


def build_cipher(
    backend: str = DEFAULT_CIPHER_BACKEND, *, gpg_path: str | None = None
) -> PartCipher:
    normalized = backend.strip().lower()
    if normalized == "gpg":
        return GpgCipher(gpg_path)
    if normalized == "age":
        return AgeCipher()
    allowed = ", ".join(CIPHER_BACKENDS)
    raise ValueError(f"cipher backend must be one of {allowed}")


__all__ = [
    "AgeCipher",
    "AgeError",
    "CIPHER_BACKENDS",
    "DEFAULT_CIPHER_BACKEND",
    "GpgCipher",
    "GpgCliError",
    "PartCipher",
    "build_cipher",
    "check_gpg",
    "get_gpg_path",
    "iter_byte_range",
    "read_byte_range",
    "read_passphrase",
]
