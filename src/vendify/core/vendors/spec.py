"""The spec document: declared dependencies and global filters."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

from vendify.core.utils.io import write_yaml
from vendify.core.vendors.documents import advance_version, canonical_by_url, load_document
from vendify.core.vendors.filters import Filters
from vendify.core.vendors.models import Dependency
from vendify.core.vendors.preset import Preset

logger = logging.getLogger(__name__)


class Spec:
    """Declarative vendoring configuration bound to a project root.

    Every construction path applies the preset, so a spec in memory always
    reflects the preset's vendor directory and filter policy.
    """

    def __init__(
        self,
        preset: Preset,
        root: Path | str,
        *,
        version: Optional[str] = None,
        filters: Optional[Filters] = None,
        deps: Optional[list[Dependency]] = None,
    ) -> None:
        self.preset = preset
        self.root = Path(root)
        self.version: str = version or ""
        self.preset_name: str = preset.name
        self.vendor: str = preset.vendor
        self.filters: Filters = filters if filters is not None else Filters()
        self.deps: list[Dependency] = list(deps or [])
        self._apply_preset()

    @classmethod
    def create(cls, preset: Preset, root: Path | str) -> Spec:
        return cls(preset, root)

    @classmethod
    def load(cls, preset: Preset, root: Path | str) -> Spec:
        """Load ``root / preset.spec``.

        Raises:
            ConfigError: If the document is missing or invalid.
        """
        path = Path(root) / preset.spec
        data = load_document(path, "spec")
        return cls(
            preset,
            root,
            version=data.get("version"),
            filters=Filters.from_dict(data),
            deps=[Dependency.from_dict(item) for item in data.get("deps") or []],
        )

    @property
    def path(self) -> Path:
        return self.root / self.preset.spec

    @property
    def vendor_path(self) -> Path:
        return self.root / self.vendor

    def _apply_preset(self) -> None:
        self.version = advance_version(self.version)
        self.vendor = self.preset.vendor
        if self.preset.force_filters:
            self.filters.clear()
        self.filters.merge(self.preset.global_filters())
        for dep in self.deps:
            dep.apply_preset(self.preset)
        self.preset_name = self.preset.name

    def add_dependency(self, dep: Dependency) -> Dependency:
        """Insert ``dep`` or update the entry with the same URL in place.

        Returns:
            The dependency now held by the spec.
        """
        dep.apply_preset(self.preset)
        existing = self.get_dependency(dep.url)
        if existing is not None:
            existing.update_from(dep)
            logger.debug("updated dependency %s", existing.url)
            return existing
        self.deps.append(dep)
        logger.debug("added dependency %s", dep.url)
        return dep

    def get_dependency(self, url: str) -> Optional[Dependency]:
        for dep in self.deps:
            if dep.matches(url):
                return dep
        return None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "version": self.version,
            "preset": self.preset_name,
            "vendor": self.vendor,
        }
        data.update(self.filters.to_dict())
        data["deps"] = [dep.to_dict() for dep in self.deps]
        return data

    def save(self) -> Path:
        """Canonicalize dependencies and write the document atomically."""
        self.deps = canonical_by_url(self.deps, lambda d: d.url)
        write_yaml(self.path, self.to_dict(), sort_keys=False)
        logger.info("wrote %s", self.path)
        return self.path


__all__ = ["Spec"]
