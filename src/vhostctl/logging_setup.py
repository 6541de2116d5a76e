"""Diagnostic logging setup (operator progress goes through rich consoles)."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(verbose: bool = False) -> None:
    """Route stdlib logging to stderr through rich.

    WARNING and above by default; ``--verbose`` adds the DEBUG trail of
    every external command run.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
