"""Content-addressed cache of dependency working copies.

Layout::

    <root>/.LOCK          whole-cache lock, held for a full run
    <root>/repos/<id>     working copy of one dependency URL
    <root>/locks/<id>     per-repository lock

``<id>`` is the hex SHA-256 of the dependency URL; the refname never
participates, so every ref of a repository shares one working copy.
"""
from __future__ import annotations

import hashlib
import logging
import shutil
from contextlib import ExitStack, contextmanager
from pathlib import Path
from typing import Iterator, Optional

from vendify.core.config import VendifyConfig
from vendify.core.utils.io import acquire_file_lock
from vendify.core.vendors.exceptions import FilesystemError, LockError, RepositoryError
from vendify.core.vendors.models import Dependency
from vendify.core.vendors.preset import Preset
from vendify.core.vendors.redaction import redact_text, redact_url
from vendify.core.vendors.repository import Repository
from vendify.core.vendors.scm import SourceControlClient

logger = logging.getLogger(__name__)

REPOS_DIR = "repos"
LOCKS_DIR = "locks"
LOCK_FILE = ".LOCK"


def dependency_id(url: str) -> str:
    """Stable cache key for ``url``."""
    return hashlib.sha256(url.encode("utf-8")).hexdigest()


class Cache:
    """Shared on-disk store of cloned repositories."""

    def __init__(
        self,
        root: Path,
        client: SourceControlClient,
        *,
        warn_after: float = 1.0,
        poll_interval: float = 0.05,
    ) -> None:
        self.root = Path(root)
        self.client = client
        self.warn_after = warn_after
        self.poll_interval = poll_interval

    @classmethod
    def from_preset(
        cls,
        preset: Preset,
        client: SourceControlClient,
        config: Optional[VendifyConfig] = None,
    ) -> Cache:
        """Build the cache for ``preset``; a configured cache root wins."""
        config = config or VendifyConfig()
        return cls(
            config.cache_root or preset.cache,
            client,
            warn_after=config.lock_warn_after_seconds,
            poll_interval=config.lock_poll_interval_seconds,
        )

    @property
    def repos_path(self) -> Path:
        return self.root / REPOS_DIR

    @property
    def locks_path(self) -> Path:
        return self.root / LOCKS_DIR

    @property
    def lock_path(self) -> Path:
        return self.root / LOCK_FILE

    def get_repository_path(self, dep: Dependency) -> Path:
        return self.repos_path / dependency_id(dep.url)

    def get_repository_lock_path(self, dep: Dependency) -> Path:
        return self.locks_path / dependency_id(dep.url)

    def ensure(self) -> None:
        """Create ``repos`` and ``locks`` under the cache root (idempotent).

        Raises:
            FilesystemError: If a directory cannot be created.
        """
        for path in (self.repos_path, self.locks_path):
            try:
                path.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise FilesystemError(
                    f"cannot create cache directory {path}: {exc}",
                    context={"path": str(path)},
                ) from exc

    initialize = ensure

    def clear(self) -> None:
        """Remove every cached repository and lock; a missing cache is not an error.

        The ``.LOCK`` sentinel stays in place so every process keeps locking
        the same file.
        """
        if not self.root.is_dir():
            return
        try:
            for child in self.root.iterdir():
                if child.name == LOCK_FILE:
                    continue
                if child.is_dir() and not child.is_symlink():
                    shutil.rmtree(child)
                else:
                    child.unlink()
        except OSError as exc:
            raise FilesystemError(
                f"cannot remove cache directory {self.root}: {exc}",
                context={"path": str(self.root)},
            ) from exc
        logger.info("cleared cache %s", self.root)

    @contextmanager
    def lock(self) -> Iterator[None]:
        """Hold the whole-cache lock.

        Waits indefinitely; after ``warn_after`` seconds a warning is logged
        once so a user can tell a second vendify process holds the cache.
        """
        with self._acquire(
            self.lock_path,
            warning=f"waiting for cache lock {self.lock_path}: another instance may be running",
        ):
            yield

    @contextmanager
    def lock_repository(self, dep: Dependency) -> Iterator[None]:
        """Hold the lock of ``dep``'s working copy."""
        path = self.get_repository_lock_path(dep)
        with self._acquire(path, warning=f"waiting for repository lock of {redact_url(dep.url)}"):
            yield

    def get_repository(self, dep: Dependency) -> Repository:
        """Return ``dep``'s working copy, cloning it on first use.

        Raises:
            RepositoryError: If the working copy cannot be opened or cloned.
        """
        path = self.get_repository_path(dep)
        try:
            return Repository.open(dep.url, dep.refname, path, self.client)
        except RepositoryError as exc:
            raise RepositoryError(
                f"cannot open repository {redact_url(dep.url)}: {redact_text(str(exc))}",
                context={"url": redact_url(dep.url), "path": str(path)},
            ) from exc
        except OSError as exc:
            raise RepositoryError(
                f"cannot prepare repository directory {path}: {exc}",
                context={"url": redact_url(dep.url), "path": str(path)},
            ) from exc

    @contextmanager
    def _acquire(self, path: Path, *, warning: str) -> Iterator[None]:
        stack = ExitStack()
        try:
            stack.enter_context(
                acquire_file_lock(
                    path,
                    warn_after=self.warn_after,
                    warning=warning,
                    poll_interval=self.poll_interval,
                )
            )
        except OSError as exc:
            raise LockError(f"cannot lock {path}: {exc}", context={"path": str(path)}) from exc
        with stack:
            yield


__all__ = ["Cache", "dependency_id", "REPOS_DIR", "LOCKS_DIR", "LOCK_FILE"]
