"""Logging setup for mac-blueprint."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_logging_configured = False


def setup_logging(level: str = "WARNING") -> None:
    """Install a single rich handler on the root logger (stderr)."""

    global _logging_configured
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    if _logging_configured:
        return

    root_logger.handlers.clear()
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s - %(message)s"))
    root_logger.addHandler(handler)

    _logging_configured = True
