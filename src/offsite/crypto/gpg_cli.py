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
import os
import shutil
import subprocess
import tempfile
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from ..core.errors import ExtractionOrEncryptionError
from .ranges import iter_byte_range

logger = logging.getLogger(__name__)

_GPG_PATH_ENV = "OFFSITE_GPG_PATH"


@dataclass
class GpgCliError(ExtractionOrEncryptionError):
    cmd: Sequence[str]
    returncode: int
    stderr: str

    def __str__(self) -> str:
        detail = self.stderr.strip() or "unknown error"
        return f"gpg failed (exit {self.returncode}): {detail}"


def get_gpg_path(configured: str | None = None) -> str:
    env_path = os.environ.get(_GPG_PATH_ENV)
    if env_path:
        return env_path
    return configured or "gpg"


def check_gpg(gpg_path: str) -> bool:
    return shutil.which(gpg_path) is not None


def _gpg_cmd(gpg_path: str, destination: str, passphrase_fd: int) -> list[str]:
    return [
        gpg_path,
        "--batch",
        "--no-tty",
        "--quiet",
        "--pinentry-mode",
        "loopback",
        "--passphrase-fd",
        str(passphrase_fd),
        "--symmetric",
        "--compress-algo",
        "none",
        "--output",
        destination,
    ]


class GpgCipher:
    """Conventional (passphrase-only) encryption through the gpg binary.

    The byte range is streamed into gpg's stdin; the passphrase is handed over
    on a separate pipe so it never shows up in argv or the environment.
    """

    suffix = ".gpg"

    def __init__(self, gpg_path: str | None = None) -> None:
        self.gpg_path = get_gpg_path(gpg_path)

    def encrypt_range(
        self,
        source: Path,
        destination: Path,
        offset: int,
        length: int | None,
        passphrase: str,
    ) -> None:
        existed = destination.exists()
        read_fd, write_fd = os.pipe()
        cmd = _gpg_cmd(self.gpg_path, str(destination), read_fd)
        logger.debug("running: %s < %s[%d:%s]", " ".join(cmd), source, offset, length or "EOF")
        with tempfile.TemporaryFile() as stderr_sink:
            try:
                proc = subprocess.Popen(
                    cmd,
                    stdin=subprocess.PIPE,
                    stdout=subprocess.DEVNULL,
                    stderr=stderr_sink,
                    pass_fds=(read_fd,),
                )
            except OSError as exc:
                os.close(write_fd)
                raise GpgCliError(cmd=cmd, returncode=-1, stderr=str(exc)) from exc
            finally:
                os.close(read_fd)
            _send_passphrase(write_fd, passphrase)
            try:
                _feed(proc, iter_byte_range(source, offset, length))
            except OSError as exc:
                proc.kill()
                proc.wait()
                if not existed:
                    _discard(destination)
                raise ExtractionOrEncryptionError(f"can't read {source}: {exc}") from exc
            returncode = proc.wait()
            if returncode != 0:
                stderr_sink.seek(0)
                stderr = stderr_sink.read().decode("utf-8", errors="replace")
                if not existed:
                    _discard(destination)
                raise GpgCliError(cmd=cmd, returncode=returncode, stderr=stderr)


def _send_passphrase(fd: int, passphrase: str) -> None:
    try:
        with os.fdopen(fd, "wb") as secret:
            secret.write(passphrase.encode("utf-8") + b"\n")
    except BrokenPipeError:
        pass


def _feed(proc: subprocess.Popen[bytes], chunks) -> None:
    stdin = proc.stdin
    if stdin is None:
        raise RuntimeError("gpg stdin is not available")
    try:
        for chunk in chunks:
            stdin.write(chunk)
    except BrokenPipeError:
        # gpg exited early; its exit status carries the reason
        pass
    finally:
        try:
            stdin.close()
        except BrokenPipeError:
            pass


def _discard(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass
