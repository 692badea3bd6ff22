"""The lock document: resolved revisions of vendored dependencies.

The lock is keyed by dependency URL, so merging results from concurrent
installs produces the same content regardless of completion order.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

from vendify.core.utils.io import write_yaml
from vendify.core.vendors.documents import advance_version, canonical_by_url, load_document
from vendify.core.vendors.models import LockedDependency
from vendify.core.vendors.preset import Preset

logger = logging.getLogger(__name__)


class SpecLock:
    """Resolved revision pins paired with a spec."""

    def __init__(
        self,
        preset: Preset,
        root: Path | str,
        *,
        version: Optional[str] = None,
        deps: Optional[list[LockedDependency]] = None,
    ) -> None:
        self.preset = preset
        self.root = Path(root)
        self.version = advance_version(version)
        self.deps: list[LockedDependency] = list(deps or [])

    @classmethod
    def create(cls, preset: Preset, root: Path | str) -> SpecLock:
        return cls(preset, root)

    @classmethod
    def load(cls, preset: Preset, root: Path | str) -> SpecLock:
        """Load ``root / preset.spec_lock``.

        Raises:
            ConfigError: If the document is missing or invalid.
        """
        data = load_document(Path(root) / preset.spec_lock, "lock")
        return cls(
            preset,
            root,
            version=data.get("version"),
            deps=[LockedDependency.from_dict(item) for item in data.get("deps") or []],
        )

    @classmethod
    def load_or_create(cls, preset: Preset, root: Path | str) -> SpecLock:
        """Load the lock, or start an empty one when the file does not exist."""
        path = Path(root) / preset.spec_lock
        if not path.exists():
            logger.debug("no lock file at %s, starting empty", path)
            return cls.create(preset, root)
        return cls.load(preset, root)

    @property
    def path(self) -> Path:
        return self.root / self.preset.spec_lock

    def add_locked_dependency(self, dep: LockedDependency) -> LockedDependency:
        """Upsert by URL; an existing entry keeps its URL and takes the new refname."""
        for index, existing in enumerate(self.deps):
            if existing.matches(dep.url):
                updated = LockedDependency(url=existing.url, refname=dep.refname)
                self.deps[index] = updated
                return updated
        self.deps.append(dep)
        return dep

    def get_locked_dependency(self, url: str) -> Optional[LockedDependency]:
        for dep in self.deps:
            if dep.matches(url):
                return dep
        return None

    def pairs(self) -> set[tuple[str, str]]:
        return {(dep.url, dep.refname) for dep in self.deps}

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "deps": [dep.to_dict() for dep in self.deps],
        }

    def save(self) -> Path:
        self.deps = canonical_by_url(self.deps, lambda d: d.url)
        write_yaml(self.path, self.to_dict(), sort_keys=False)
        logger.info("wrote %s", self.path)
        return self.path


__all__ = ["SpecLock"]
