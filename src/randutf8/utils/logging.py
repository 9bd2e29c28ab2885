"""Logging utilities.

Loggers live under the ``randutf8`` namespace.  The package root logger only
carries a :class:`logging.NullHandler` so that library use stays silent until
an application (or the CLI ``--verbose`` flag) calls :func:`configure`.
Configuration is idempotent: repeated calls adjust the level but never stack
handlers.
"""

from __future__ import annotations

import logging
import sys

__all__ = ["ROOT_LOGGER", "configure", "get_logger"]

ROOT_LOGGER = "randutf8"
_FORMAT = "%(levelname)s %(name)s: %(message)s"

logging.getLogger(ROOT_LOGGER).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the package namespace."""

    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def configure(verbose: bool = False) -> logging.Logger:
    """Attach a single stderr handler to the package logger."""

    root = logging.getLogger(ROOT_LOGGER)
    handler = next((h for h in root.handlers if getattr(h, "_randutf8", False)), None)
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._randutf8 = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return root
