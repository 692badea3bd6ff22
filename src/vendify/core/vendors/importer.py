"""Install or update a single dependency into the vendor directory."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from vendify.core.vendors.collector import Collector
from vendify.core.vendors.exceptions import DependencyImportError
from vendify.core.vendors.models import Dependency, LockedDependency
from vendify.core.vendors.redaction import redact_url
from vendify.core.vendors.repository import Repository
from vendify.core.vendors.selector import Selector
from vendify.core.vendors.spec import Spec

logger = logging.getLogger(__name__)


class Importer:
    """Copy the selected files of one dependency out of its working copy.

    Args:
        spec: Spec providing the global filters (read only)
        dependency: Dependency to import
        repository: Cached working copy of the dependency
        locked: Lock entry pinning the revision used by ``install``
    """

    def __init__(
        self,
        spec: Spec,
        dependency: Dependency,
        repository: Repository,
        locked: Optional[LockedDependency] = None,
    ) -> None:
        self.dependency = dependency
        self.repository = repository
        self.locked = locked
        self.collector = Collector(Selector.for_dependency(spec, dependency))

    @property
    def locked_refname(self) -> str:
        return self.locked.refname if self.locked is not None else self.dependency.refname

    def install(self, to: Path) -> LockedDependency:
        """Vendor the locked revision (or the declared refname when unlocked)."""
        refname = self.locked_refname
        logger.info("installing %s@%s", redact_url(self.dependency.url), refname)
        self.repository.fetch(self.dependency.refname)
        self.repository.checkout(refname)
        return self._import(to)

    def update(self, to: Path) -> LockedDependency:
        """Vendor the latest revision of the declared refname, ignoring the lock."""
        refname = self.dependency.refname
        logger.info("updating %s@%s", redact_url(self.dependency.url), refname)
        self.repository.fetch(refname)
        self.repository.reset(refname)
        return self._import(to)

    def _import(self, to: Path) -> LockedDependency:
        self.copy_files(to)
        locked = self.dependency.to_locked_dependency(self.repository.current_revision())
        logger.info("locked %s at %s", redact_url(locked.url), locked.refname)
        return locked

    def copy_files(self, to: Path) -> int:
        """Copy every collected file under ``to``; returns the number copied.

        Raises:
            DependencyImportError: If walking the working copy or copying fails.
        """
        count = 0
        try:
            for collected in self.collector.collect(self.repository.path):
                dest = collected.copy(to)
                logger.debug(".../%s -> %s", collected.src_rel, dest)
                count += 1
        except OSError as exc:
            raise DependencyImportError(
                f"cannot import {redact_url(self.dependency.url)}: {exc}",
                context={"url": redact_url(self.dependency.url), "to": str(to)},
            ) from exc
        return count


__all__ = ["Importer"]
