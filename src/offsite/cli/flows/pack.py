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
import signal
import threading
from contextlib import contextmanager
from pathlib import Path

from ...config import AppConfig, load_app_config
from ...core.bounds import AGE_MAX_PART_BYTES
from ...core.models import PackLimits, PackResult, PartResult
from ...crypto import AgeCipher, GpgCipher, build_cipher, check_gpg, read_passphrase
from ...packing import check_work_directory, pack_files, plan_files, resolve_jobs
from ...selection import select_backup_files
from ..core.log import configure_logging
from ..core.types import PackArgs, PackSettings
from ..ui import progress
from ..ui.summary import print_pack_summary, print_plan, print_selection

logger = logging.getLogger(__name__)

_CANCEL_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def _mandatory(value: object, name: str) -> None:
    if value is None or value == "":
        raise ValueError(f"mandatory option <{name}> not defined")


def _required_path(value: Path | None, name: str) -> Path:
    if value is None:
        raise ValueError(f"mandatory option <{name}> not defined")
    return value


def _optional_path(value: str | None) -> Path | None:
    return Path(value).expanduser() if value else None


def _pick(cli_value, config_value):
    return config_value if cli_value is None else cli_value


def resolve_pack_settings(
    args: PackArgs,
    config: AppConfig,
    *,
    require_work_dir: bool = True,
) -> PackSettings:
    """Merge command line values over ``config`` and check mandatory options.

    The backup directory is only needed when no explicit files are given, and
    the password file only when something will actually be encrypted.
    """
    files = tuple(Path(item) for item in args.files)
    backup_dir = args.backup_dir or config.paths.backup_dir
    work_dir = args.work_dir or config.paths.work_dir
    password_file = args.pwfile or config.paths.password_file
    if not files:
        _mandatory(backup_dir, "backup_dir")
    if require_work_dir:
        _mandatory(work_dir, "work_dir")
    if require_work_dir and not args.dry_run:
        _mandatory(password_file, "password_file")
    return PackSettings(
        files=files,
        backup_dir=_optional_path(backup_dir),
        work_dir=_optional_path(work_dir),
        password_file=_optional_path(password_file),
        block_size=_pick(args.block_size, config.limits.block_size),
        max_file_size=_pick(args.max_file_size, config.limits.max_file_size),
        max_volume_size=_pick(args.max_volume_size, config.limits.max_volume_size),
        cipher=args.cipher or config.cipher.backend,
        gpg_path=config.cipher.gpg_path,
        jobs=_pick(args.jobs, config.runtime.jobs),
        dry_run=args.dry_run,
    )


def settings_limits(settings: PackSettings) -> PackLimits:
    return PackLimits(
        volume_capacity=settings.max_volume_size,
        max_file_size=settings.max_file_size,
        block_size=settings.block_size,
    )


def _load(args: PackArgs) -> AppConfig:
    config = load_app_config(args.config)
    configure_logging(
        level=config.logging.level,
        debug=args.debug,
        quiet=args.quiet,
        syslog=_pick(args.syslog, config.logging.syslog),
        facility=args.facility or config.logging.facility,
    )
    if config.source is not None:
        logger.debug("using config %s", config.source)
    return config


def _input_files(settings: PackSettings) -> list[Path]:
    if settings.files:
        return list(settings.files)
    backup_dir = _required_path(settings.backup_dir, "backup_dir")
    files = select_backup_files(backup_dir)
    if not files:
        logger.warning("no backups found in %s", backup_dir)
    return files


@contextmanager
def _cancel_on_signals(cancel: threading.Event):
    if threading.current_thread() is not threading.main_thread():
        yield cancel
        return

    def _handler(signum, _frame) -> None:
        logger.warning("caught %s; stopping after the current part", signal.Signals(signum).name)
        cancel.set()

    previous = {signum: signal.getsignal(signum) for signum in _CANCEL_SIGNALS}
    for signum in _CANCEL_SIGNALS:
        signal.signal(signum, _handler)
    try:
        yield cancel
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)


def run_pack(
    settings: PackSettings,
    *,
    quiet: bool = False,
    cancel: threading.Event | None = None,
) -> PackResult:
    limits = settings_limits(settings)
    jobs = resolve_jobs(settings.jobs)
    cipher = build_cipher(settings.cipher, gpg_path=settings.gpg_path)
    work_dir = _required_path(settings.work_dir, "work_dir")
    if not settings.dry_run:
        check_work_directory(work_dir)
        read_passphrase(_required_path(settings.password_file, "password_file"))
        if isinstance(cipher, GpgCipher) and not check_gpg(cipher.gpg_path):
            raise RuntimeError(f"gpg not found: {cipher.gpg_path}")
        if isinstance(cipher, AgeCipher) and limits.max_file_size > AGE_MAX_PART_BYTES:
            raise ValueError(
                f"age keeps each part in memory; max_file_size must be at most "
                f"{AGE_MAX_PART_BYTES} bytes (got {limits.max_file_size})"
            )
    files = _input_files(settings)
    cancel = cancel or threading.Event()
    with progress(quiet=quiet) as progress_bar:
        task_id = None
        if progress_bar is not None:
            label = "Planning parts..." if settings.dry_run else "Encrypting parts..."
            task_id = progress_bar.add_task(label, total=None)

        def _on_part(outcome: PartResult) -> None:
            if progress_bar is not None and task_id is not None:
                progress_bar.advance(task_id)

        with _cancel_on_signals(cancel):
            result = pack_files(
                files,
                limits,
                work_dir=work_dir,
                cipher=cipher,
                passphrase_source=settings.password_file,
                dry_run=settings.dry_run,
                jobs=jobs,
                cancel=cancel,
                on_part=_on_part,
            )
    logger.info("created %d sets of files", result.volumes)
    return result


def run_pack_command(args: PackArgs) -> int:
    config = _load(args)
    settings = resolve_pack_settings(args, config)
    work_dir = _required_path(settings.work_dir, "work_dir")
    result = run_pack(settings, quiet=args.quiet or args.debug)
    print_pack_summary(result, work_dir, dry_run=settings.dry_run, quiet=args.quiet)
    return 0 if result.ok else 1


def run_plan_command(args: PackArgs) -> int:
    config = _load(args)
    settings = resolve_pack_settings(args, config, require_work_dir=False)
    cipher = build_cipher(settings.cipher, gpg_path=settings.gpg_path)
    plan = plan_files(_input_files(settings), settings_limits(settings), suffix=cipher.suffix)
    print_plan(plan, quiet=args.quiet)
    return 1 if plan.skipped else 0


def run_select_command(args: PackArgs) -> int:
    config = _load(args)
    backup_dir = args.backup_dir or config.paths.backup_dir
    _mandatory(backup_dir, "backup_dir")
    files = select_backup_files(Path(backup_dir).expanduser())
    print_selection(files, quiet=args.quiet)
    return 0
