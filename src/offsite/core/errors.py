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

from pathlib import Path


class OffsiteError(RuntimeError):
    """Base class for packing failures."""


class VolumeCreateError(OffsiteError):
    """A volume directory could not be created; the run cannot continue."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"can't create volume directory {path}: {reason}")
        self.path = path
        self.reason = reason


class WorkDirectoryError(OffsiteError):
    pass


class SizeProbeError(OffsiteError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"can't stat {path}: {reason}")
        self.path = path
        self.reason = reason


class ExtractionOrEncryptionError(OffsiteError):
    """Extracting or encrypting one part failed."""


class NameCollisionError(ExtractionOrEncryptionError):
    def __init__(self, destination: Path, detail: str = "destination already exists") -> None:
        super().__init__(f"{detail}: {destination}")
        self.destination = destination


class PassphraseError(ExtractionOrEncryptionError):
    pass


class PackCancelled(OffsiteError):
    """Raised between two parts when a packing run is asked to stop."""


__all__ = [
    "ExtractionOrEncryptionError",
    "NameCollisionError",
    "OffsiteError",
    "PackCancelled",
    "PassphraseError",
    "SizeProbeError",
    "VolumeCreateError",
    "WorkDirectoryError",
]
