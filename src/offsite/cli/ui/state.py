#!/usr/bin/env python3
from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import TextIO

from rich.console import Console
from rich.theme import Theme

OFFSITE_THEME = Theme(
    {
        "volume": "bold cyan",
        "failed": "red",
        "muted": "dim",
        "panel": "cyan",
        "success": "green",
        "warning": "yellow",
    }
)


def stream_is_tty(stream: TextIO | None) -> bool:
    """True when ``stream`` is an interactive terminal."""
    if stream is None:
        return False
    try:
        return bool(stream.isatty())
    except (OSError, ValueError, AttributeError):
        return False


@dataclass
class UIContext:
    console: Console
    console_err: Console


def _console_for(stream: TextIO | None, *, stderr: bool) -> Console:
    return Console(stderr=stderr, theme=OFFSITE_THEME, force_terminal=stream_is_tty(stream))


_CONTEXT = UIContext(
    console=_console_for(sys.__stdout__, stderr=False),
    console_err=_console_for(sys.__stderr__, stderr=True),
)


def get_context() -> UIContext:
    return _CONTEXT
