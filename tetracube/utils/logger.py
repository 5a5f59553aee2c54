"""Logging setup for the tetracube packer.

Modules log under the ``tetracube`` namespace. Placement attempts, reverts
and stall removals go to DEBUG; run start, progress, finish and stall
counter resets go to INFO; an exhausted step budget goes to WARNING.
"""

from __future__ import annotations

import logging
from typing import Optional


def configure_logging(level: int = logging.INFO) -> None:
    """Route packer logs to stderr with a timestamped, logger-tagged line.

    ``main.py`` calls this with the ``--log-level`` value. A 6x6x6 run makes
    tens of thousands of placement attempts, so use DEBUG only for short
    runs or small cubes.
    """

    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger for a packer module, ``tetracube`` when no name is given.

    Library use without :func:`configure_logging` still gets INFO output.
    """

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name or "tetracube")
