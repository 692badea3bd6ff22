from __future__ import annotations

import logging
import sys
from typing import TextIO

_VENDIFY_HANDLER: logging.Handler | None = None


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_stdlib_logging(*, level: str = "INFO", stream: TextIO | None = None) -> None:
    """Configure Python stdlib logging for the command line.

    The ``vendify`` logger gets ``level`` and a single stream handler
    (stderr by default); third-party loggers stay at WARNING.

    Idempotent per-process: a handler installed by a previous call is replaced.
    """
    global _VENDIFY_HANDLER

    root = logging.getLogger()
    if root.level == logging.NOTSET or root.level > logging.WARNING:
        root.setLevel(logging.WARNING)

    logger = logging.getLogger("vendify")
    if _VENDIFY_HANDLER is not None:
        logger.removeHandler(_VENDIFY_HANDLER)
        _VENDIFY_HANDLER.close()
        _VENDIFY_HANDLER = None

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(_level_from_name(level))
    logger.propagate = False

    _VENDIFY_HANDLER = handler


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: remove the handler installed by ``configure_stdlib_logging``."""
    global _VENDIFY_HANDLER
    logger = logging.getLogger("vendify")
    if _VENDIFY_HANDLER is not None:
        logger.removeHandler(_VENDIFY_HANDLER)
        _VENDIFY_HANDLER.close()
        _VENDIFY_HANDLER = None
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


__all__ = ["configure_stdlib_logging", "reset_stdlib_logging_for_tests"]
