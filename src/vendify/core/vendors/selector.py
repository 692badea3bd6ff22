"""File and directory selection for a single dependency.

Paths are relative to the repository root and compared component by
component: ``a/b`` prefixes ``a/b/c`` but not ``a/bc``.
"""
from __future__ import annotations

from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Iterable, Optional

from vendify.core.vendors.filters import Filters

if TYPE_CHECKING:
    from vendify.core.vendors.models import Dependency
    from vendify.core.vendors.preset import Preset
    from vendify.core.vendors.spec import Spec

Parts = tuple[str, ...]


def path_parts(path: str | PurePosixPath) -> Parts:
    """Split a relative path into components, dropping empty and ``.`` parts."""
    raw = str(path).replace("\\", "/")
    return tuple(p for p in raw.split("/") if p and p != ".")


def _is_prefix(prefix: Parts, path: Parts) -> bool:
    return path[: len(prefix)] == prefix


class Selector:
    """Decide which files and directories of a dependency get vendored.

    Precedence is ignores, then targets, then extensions; a path equal to a
    target is selected whatever its extension.
    """

    def __init__(self, filters: Filters) -> None:
        self.filters = filters.copy()
        self._targets = self._parts(self.filters.targets)
        self._ignores = self._parts(self.filters.ignores)
        self._extensions = {e.lstrip(".").lower() for e in self.filters.extensions if e.lstrip(".")}

    @classmethod
    def for_dependency(cls, spec: Spec, dep: Dependency, preset: Optional[Preset] = None) -> Selector:
        """Effective filters: spec, preset global and dependency filters combined."""
        preset = preset if preset is not None else spec.preset
        effective = Filters().merge(spec.filters).merge(preset.global_filters()).merge(dep.filters)
        return cls(effective)

    @staticmethod
    def _parts(entries: Iterable[str]) -> list[Parts]:
        return [parts for parts in (path_parts(e) for e in entries) if parts]

    def _ignored(self, parts: Parts) -> bool:
        return any(_is_prefix(ignore, parts) for ignore in self._ignores)

    def select_file(self, path: str | PurePosixPath) -> bool:
        parts = path_parts(path)
        if not parts or self._ignored(parts):
            return False
        if self._targets and not any(_is_prefix(t, parts) for t in self._targets):
            return False
        suffix = PurePosixPath(parts[-1]).suffix
        if suffix and suffix[1:].lower() in self._extensions:
            return True
        return parts in self._targets

    def select_dir(self, path: str | PurePosixPath) -> bool:
        parts = path_parts(path)
        if not parts:
            return True
        if self._ignored(parts):
            return False
        if not self._targets:
            return True
        return any(_is_prefix(parts, t) or _is_prefix(t, parts) for t in self._targets)


__all__ = ["Selector", "path_parts"]
