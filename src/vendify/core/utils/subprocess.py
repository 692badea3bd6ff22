"""Subprocess helpers with optional timeouts and debug logging.

No shell=True is ever used; commands are passed as argv lists.
"""
from __future__ import annotations

import logging
import shlex
import subprocess
from time import perf_counter
from typing import Any, Sequence

logger = logging.getLogger(__name__)


def _flatten_cmd(cmd: Any) -> Sequence[str]:
    if isinstance(cmd, (list, tuple)):
        return [str(p) for p in cmd]
    return shlex.split(str(cmd))


def run_with_timeout(cmd: Any, timeout: float | None = None, **kwargs: Any) -> subprocess.CompletedProcess:
    """Run a subprocess, logging its argv and duration at DEBUG level.

    Args:
        cmd: Command list/str passed through to ``subprocess.run``.
        timeout: Seconds before the command is killed; ``None`` waits forever.
        **kwargs: Additional arguments forwarded to ``subprocess.run``.

    Returns:
        CompletedProcess from ``subprocess.run``.

    Raises:
        subprocess.TimeoutExpired: When the command exceeds ``timeout``.
        subprocess.CalledProcessError: When ``check=True`` and the command fails.
    """
    argv = list(_flatten_cmd(cmd))
    start = perf_counter()
    try:
        return subprocess.run(argv, timeout=timeout, **kwargs)
    finally:
        logger.debug(
            "ran %s in %.1f ms (cwd=%s)",
            argv[0] if argv else "<empty>",
            (perf_counter() - start) * 1000.0,
            kwargs.get("cwd"),
        )


__all__ = ["run_with_timeout"]
