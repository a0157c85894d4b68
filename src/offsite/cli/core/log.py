#!/usr/bin/env python3
from __future__ import annotations

import logging
import logging.handlers
import os

from rich.console import Console
from rich.logging import RichHandler

from ..ui import console_err

ROOT_LOGGER = "offsite"
_SYSLOG_SOCKETS = ("/dev/log", "/var/run/syslog")


def resolve_log_level(level: str, *, debug: bool, quiet: bool) -> int:
    if debug:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"unknown log level: {level}")
    return resolved


def _syslog_address() -> str | tuple[str, int]:
    for candidate in _SYSLOG_SOCKETS:
        if os.path.exists(candidate):
            return candidate
    return ("localhost", logging.handlers.SYSLOG_UDP_PORT)


def _build_syslog_handler(facility: str) -> logging.Handler:
    code = logging.handlers.SysLogHandler.facility_names.get(facility)
    if code is None:
        raise ValueError(f"unknown syslog facility: {facility}")
    handler = logging.handlers.SysLogHandler(address=_syslog_address(), facility=code)
    handler.setFormatter(logging.Formatter("offsite[%(process)d]: %(message)s"))
    return handler


def _build_console_handler(console: Console, *, debug: bool) -> logging.Handler:
    handler = RichHandler(
        console=console,
        show_time=debug,
        show_path=debug,
        markup=False,
        rich_tracebacks=debug,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def configure_logging(
    *,
    level: str = "info",
    debug: bool = False,
    quiet: bool = False,
    syslog: bool = False,
    facility: str = "user",
    console: Console | None = None,
) -> logging.Logger:
    """Route the ``offsite`` logger tree to the terminal or to syslog.

    Safe to call more than once; earlier handlers are replaced.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    if syslog:
        handler = _build_syslog_handler(facility)
    else:
        handler = _build_console_handler(console or console_err, debug=debug)
    logger.addHandler(handler)
    logger.setLevel(resolve_log_level(level, debug=debug, quiet=quiet))
    logger.propagate = False
    return logger
