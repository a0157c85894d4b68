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

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from ..core.bounds import DEFAULT_BLOCK_SIZE, DEFAULT_MAX_FILE_SIZE, DEFAULT_MAX_VOLUME_SIZE
from ..crypto import CIPHER_BACKENDS, DEFAULT_CIPHER_BACKEND
from .installer import resolve_config_path

LOG_LEVELS = ("debug", "info", "warning", "error")
SYSLOG_FACILITIES = (
    "auth",
    "authpriv",
    "cron",
    "daemon",
    "kern",
    "local0",
    "local1",
    "local2",
    "local3",
    "local4",
    "local5",
    "local6",
    "local7",
    "lpr",
    "mail",
    "news",
    "syslog",
    "user",
    "uucp",
)


@dataclass(frozen=True)
class PathsConfig:
    backup_dir: str | None = None
    work_dir: str | None = None
    password_file: str | None = None


@dataclass(frozen=True)
class LimitsConfig:
    block_size: int = DEFAULT_BLOCK_SIZE
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    max_volume_size: int = DEFAULT_MAX_VOLUME_SIZE


@dataclass(frozen=True)
class CipherConfig:
    backend: str = DEFAULT_CIPHER_BACKEND
    gpg_path: str | None = None


@dataclass(frozen=True)
class LoggingConfig:
    syslog: bool = False
    facility: str = "user"
    level: str = "info"


@dataclass(frozen=True)
class RuntimeConfig:
    jobs: int | Literal["auto"] = 1


@dataclass(frozen=True)
class AppConfig:
    source: Path | None = None
    paths: PathsConfig = field(default_factory=PathsConfig)
    limits: LimitsConfig = field(default_factory=LimitsConfig)
    cipher: CipherConfig = field(default_factory=CipherConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)


def load_app_config(path: str | Path | None = None) -> AppConfig:
    config_path = resolve_config_path(path)
    try:
        data = _load_toml(config_path)
    except FileNotFoundError as exc:
        raise ValueError(f"config file not found: {config_path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"invalid config file {config_path}: {exc}") from exc
    return parse_app_config(data, source=config_path)


def parse_app_config(data: dict[str, object], *, source: Path | None = None) -> AppConfig:
    return AppConfig(
        source=source,
        paths=_parse_paths(_get_dict(data, "paths")),
        limits=_parse_limits(_get_dict(data, "limits")),
        cipher=_parse_cipher(_get_dict(data, "cipher")),
        logging=_parse_logging(_get_dict(data, "logging")),
        runtime=_parse_runtime(_get_dict(data, "runtime")),
    )


def _parse_paths(cfg: dict[str, object]) -> PathsConfig:
    return PathsConfig(
        backup_dir=_parse_optional_unset_str(cfg.get("backup_dir"), field="paths.backup_dir"),
        work_dir=_parse_optional_unset_str(cfg.get("work_dir"), field="paths.work_dir"),
        password_file=_parse_optional_unset_str(
            cfg.get("password_file"), field="paths.password_file"
        ),
    )


def _parse_limits(cfg: dict[str, object]) -> LimitsConfig:
    return LimitsConfig(
        block_size=_parse_positive_int(
            cfg.get("block_size"), field="limits.block_size", default=DEFAULT_BLOCK_SIZE
        ),
        max_file_size=_parse_positive_int(
            cfg.get("max_file_size"), field="limits.max_file_size", default=DEFAULT_MAX_FILE_SIZE
        ),
        max_volume_size=_parse_positive_int(
            cfg.get("max_volume_size"),
            field="limits.max_volume_size",
            default=DEFAULT_MAX_VOLUME_SIZE,
        ),
    )


def _parse_cipher(cfg: dict[str, object]) -> CipherConfig:
    backend = _parse_choice(
        cfg.get("backend"),
        field="cipher.backend",
        choices=CIPHER_BACKENDS,
        default=DEFAULT_CIPHER_BACKEND,
    )
    return CipherConfig(
        backend=backend,
        gpg_path=_parse_optional_unset_str(cfg.get("gpg_path"), field="cipher.gpg_path"),
    )


def _parse_logging(cfg: dict[str, object]) -> LoggingConfig:
    return LoggingConfig(
        syslog=_parse_bool(cfg.get("syslog"), field="logging.syslog", default=False),
        facility=_parse_choice(
            cfg.get("facility"),
            field="logging.facility",
            choices=SYSLOG_FACILITIES,
            default="user",
        ),
        level=_parse_choice(
            cfg.get("level"), field="logging.level", choices=LOG_LEVELS, default="info"
        ),
    )


def _parse_runtime(cfg: dict[str, object]) -> RuntimeConfig:
    return RuntimeConfig(jobs=_parse_jobs(cfg.get("jobs"), field="runtime.jobs"))


def _load_toml(path: Path) -> dict[str, object]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _get_dict(data: dict[str, object], key: str) -> dict[str, object]:
    value = data.get(key)
    if isinstance(value, dict):
        return value
    return {}


def _parse_optional_unset_str(value: object, *, field: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string")
    normalized = value.strip()
    return normalized or None


def _parse_choice(value: object, *, field: str, choices: tuple[str, ...], default: str) -> str:
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValueError(f"{field} must be one of {', '.join(choices)}")
    normalized = value.strip().lower()
    if not normalized:
        return default
    if normalized not in choices:
        raise ValueError(f"{field} must be one of {', '.join(choices)}")
    return normalized


def _parse_bool(value: object, *, field: str, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        if value in (0, 1):
            return bool(value)
        raise ValueError(f"{field} must be a boolean")
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
        raise ValueError(f"{field} must be a boolean")
    raise ValueError(f"{field} must be a boolean")


def _parse_jobs(value: object, *, field: str) -> int | Literal["auto"]:
    if value is None:
        return 1
    if isinstance(value, str):
        normalized = value.strip().lower()
        if not normalized:
            return 1
        if normalized == "auto":
            return "auto"
        parsed = _parse_int_strict(normalized, field=field)
    else:
        parsed = _parse_int_strict(value, field=field)
    if parsed <= 0:
        raise ValueError(f"{field} must be 'auto' or a positive integer")
    return parsed


def _parse_positive_int(value: object, *, field: str, default: int) -> int:
    if value is None:
        return default
    parsed = _parse_int_strict(value, field=field)
    if parsed <= 0:
        raise ValueError(f"{field} must be a positive integer")
    return parsed


def _parse_int_strict(value: object, *, field: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{field} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{field} must be an integer")
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError(f"{field} must be an integer")
        try:
            return int(text)
        except ValueError as exc:
            raise ValueError(f"{field} must be an integer") from exc
    raise ValueError(f"{field} must be an integer")
