"""Install/update orchestration across all dependencies of a spec.

A run holds the whole-cache lock, prepares the cache and the vendor
directory, then imports every dependency on a bounded thread pool. Each
worker holds its repository lock; results are merged into the lock
document one at a time as workers finish. A failing dependency is
logged and reported but never cancels its siblings.
"""
from __future__ import annotations

import logging
import shutil
import threading
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Optional

from vendify.core.vendors.cache import Cache
from vendify.core.vendors.exceptions import FilesystemError
from vendify.core.vendors.importer import Importer
from vendify.core.vendors.lock import SpecLock
from vendify.core.vendors.models import Dependency, ImportResult, LockedDependency
from vendify.core.vendors.redaction import redact_text, redact_url
from vendify.core.vendors.spec import Spec

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 8


class InstallerState(str, Enum):
    IDLE = "idle"
    CACHE_INITIALIZING = "cache_initializing"
    VENDOR_RESETTING = "vendor_resetting"
    DEPENDENCIES_RUNNING = "dependencies_running"
    AGGREGATING = "aggregating"
    DONE = "done"
    FAILED = "failed"


Action = Callable[[Importer, Path], LockedDependency]


class Installer:
    """Run install or update for every dependency of ``spec``.

    Attributes:
        state: Current ``InstallerState``
        results: One ``ImportResult`` per dependency of the last run
    """

    def __init__(
        self,
        spec: Spec,
        spec_lock: SpecLock,
        cache: Cache,
        *,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1 (got {max_workers})")
        self.spec = spec
        self.spec_lock = spec_lock
        self.cache = cache
        self.max_workers = max_workers
        self.state = InstallerState.IDLE
        self.results: list[ImportResult] = []
        self._merge_lock = threading.Lock()

    @property
    def failures(self) -> list[ImportResult]:
        return [r for r in self.results if not r.success]

    @property
    def succeeded(self) -> bool:
        return self.state is InstallerState.DONE and not self.failures

    def install(self) -> SpecLock:
        """Vendor every dependency at its locked revision.

        The vendor directory is deleted and recreated first.
        """
        return self._execute(lambda importer, to: importer.install(to), reset_vendor=True, use_lock=True)

    def update(self) -> SpecLock:
        """Vendor the latest revision of every dependency and relock it."""
        return self._execute(lambda importer, to: importer.update(to), reset_vendor=False, use_lock=False)

    def _execute(self, action: Action, *, reset_vendor: bool, use_lock: bool) -> SpecLock:
        self.results = []
        try:
            with self.cache.lock():
                self.state = InstallerState.CACHE_INITIALIZING
                self.cache.ensure()

                self.state = InstallerState.VENDOR_RESETTING
                vendor = self.spec.vendor_path
                prepare_vendor_path(vendor, reset=reset_vendor)

                self._run_dependencies(action, vendor, use_lock=use_lock)
        except Exception:
            self.state = InstallerState.FAILED
            raise

        self.state = InstallerState.DONE
        if self.failures:
            logger.warning("%d of %d dependencies failed", len(self.failures), len(self.results))
        return self.spec_lock

    def _run_dependencies(self, action: Action, vendor: Path, *, use_lock: bool) -> None:
        self.state = InstallerState.DEPENDENCIES_RUNNING
        deps = list(self.spec.deps)
        previous: Dict[str, Optional[LockedDependency]] = {
            dep.url: self.spec_lock.get_locked_dependency(dep.url) for dep in deps
        }
        if not deps:
            self.state = InstallerState.AGGREGATING
            return

        workers = min(self.max_workers, len(deps))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="vendify") as executor:
            futures: Dict[Future[LockedDependency], Dependency] = {
                executor.submit(
                    self._import_dependency,
                    dep,
                    action,
                    vendor,
                    previous[dep.url] if use_lock else None,
                ): dep
                for dep in deps
            }
            self.state = InstallerState.AGGREGATING
            for future in as_completed(futures):
                dep = futures[future]
                self._merge(dep, future, previous[dep.url])

    def _import_dependency(
        self,
        dep: Dependency,
        action: Action,
        vendor: Path,
        locked: Optional[LockedDependency],
    ) -> LockedDependency:
        with self.cache.lock_repository(dep):
            repository = self.cache.get_repository(dep)
            importer = Importer(self.spec, dep, repository, locked=locked)
            return action(importer, vendor)

    def _merge(
        self,
        dep: Dependency,
        future: Future[LockedDependency],
        previous: Optional[LockedDependency],
    ) -> None:
        url = redact_url(dep.url)
        previous_refname = previous.refname if previous is not None else None
        try:
            locked = future.result()
        except Exception as exc:
            message = redact_text(str(exc))
            logger.error("failed importing %s: %s", url, message)
            result = ImportResult(url=url, success=False, previous_refname=previous_refname, error=message)
        else:
            with self._merge_lock:
                self.spec_lock.add_locked_dependency(locked)
            result = ImportResult(
                url=url,
                success=True,
                refname=locked.refname,
                previous_refname=previous_refname,
                changed=locked.refname != previous_refname,
            )
        with self._merge_lock:
            self.results.append(result)


def prepare_vendor_path(path: Path, *, reset: bool) -> Path:
    """Make sure ``path`` is a directory, emptying it first when ``reset``.

    Raises:
        FilesystemError: If ``path`` is not a directory or cannot be prepared.
    """
    path = Path(path)
    if (path.exists() or path.is_symlink()) and not path.is_dir():
        raise FilesystemError(
            f"vendor path '{path}' already exists, and it's not a directory",
            context={"path": str(path)},
        )
    try:
        if reset and path.exists():
            shutil.rmtree(path)
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FilesystemError(
            f"cannot prepare vendor directory '{path}': {exc}",
            context={"path": str(path)},
        ) from exc
    return path


__all__ = ["Installer", "InstallerState", "prepare_vendor_path", "DEFAULT_MAX_WORKERS"]
