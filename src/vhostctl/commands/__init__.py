"""CLI sub-commands."""

from __future__ import annotations

from typing import NoReturn

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from vhostctl.errors import InputError, VhostctlError

err_console = Console(stderr=True)


def abort(exc: VhostctlError) -> NoReturn:
    """Report *exc* to the operator and exit with its exit code."""
    err_console.print(f"[red]Error:[/red] {escape(str(exc))}", highlight=False, soft_wrap=True)
    raise typer.Exit(exc.exit_code)


def input_error(exc: ValidationError) -> InputError:
    """Turn a pydantic validation failure into a one-line InputError."""
    messages = []
    for err in exc.errors():
        msg = err["msg"].removeprefix("Value error, ")
        messages.append(msg)
    return InputError("; ".join(messages))
