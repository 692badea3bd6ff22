"""Advisory file locks shared across threads and processes."""
from __future__ import annotations

import fcntl
import logging
import threading
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, TextIO

from .core import ensure_parent_dir

logger = logging.getLogger(__name__)

_THREAD_MUTEXES: dict[str, threading.Lock] = {}
_THREAD_MUTEXES_GUARD = threading.Lock()


class LockTimeoutError(TimeoutError):
    """Raised when an OS file lock cannot be acquired within timeout."""


def _thread_mutex(path: Path) -> threading.Lock:
    key = str(path.resolve())
    with _THREAD_MUTEXES_GUARD:
        lock = _THREAD_MUTEXES.get(key)
        if lock is None:
            lock = _THREAD_MUTEXES.setdefault(key, threading.Lock())
    return lock


@contextmanager
def acquire_file_lock(
    file_path: Path | str,
    *,
    timeout: Optional[float] = None,
    warn_after: Optional[float] = None,
    warning: Optional[str] = None,
    poll_interval: float = 0.05,
) -> Iterator[TextIO]:
    """Acquire an exclusive lock on ``file_path``.

    - Uses ``fcntl.flock`` with ``LOCK_EX | LOCK_NB`` (non-blocking) in a retry loop.
    - A per-path ``threading.Lock`` serializes threads of this process first, so
      the lock holds within a process as well as across processes.
    - The lock file itself is created when missing and left in place on release.

    Args:
        file_path: Sentinel file to lock.
        timeout: Maximum seconds to wait before raising ``LockTimeoutError``.
            ``None`` waits indefinitely.
        warn_after: Seconds after which ``warning`` is logged once while the
            caller keeps waiting.
        warning: Message logged after ``warn_after`` seconds.
        poll_interval: Sleep duration between non-blocking attempts.

    Yields:
        The opened file object kept locked for the duration of the context.

    Raises:
        LockTimeoutError: If ``timeout`` elapses first.
        OSError: If the lock file cannot be opened or locked.
    """
    if poll_interval <= 0:
        raise ValueError(f"poll_interval must be positive (got {poll_interval})")

    target = Path(file_path)
    ensure_parent_dir(target)

    start = time.monotonic()
    warned = False

    def _check_deadline() -> None:
        nonlocal warned
        elapsed = time.monotonic() - start
        if warn_after is not None and not warned and elapsed >= warn_after:
            logger.warning("%s", warning or f"waiting for lock on {target}")
            warned = True
        if timeout is not None and elapsed >= timeout:
            raise LockTimeoutError(f"Could not acquire lock on {target} within {timeout}s")

    mutex = _thread_mutex(target)
    while not mutex.acquire(timeout=poll_interval):
        _check_deadline()

    fh: Optional[TextIO] = None
    acquired = False
    try:
        fh = open(target, "a+", encoding="utf-8")
        while True:
            try:
                fcntl.flock(fh.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
                break
            except BlockingIOError:
                _check_deadline()
                time.sleep(poll_interval)
        acquired = True
        logger.debug("acquired lock %s", target)
        yield fh
    finally:
        try:
            if fh is not None:
                if acquired:
                    fcntl.flock(fh.fileno(), fcntl.LOCK_UN)
                fh.close()
        finally:
            mutex.release()


__all__ = ["acquire_file_lock", "LockTimeoutError"]
