#!/usr/bin/env python3
from __future__ import annotations

import typer

from .commands import (
    pack as pack_command,
    plan as plan_command,
    select as select_command,
)


def register(app: typer.Typer) -> None:
    pack_command.register(app)
    plan_command.register(app)
    select_command.register(app)
