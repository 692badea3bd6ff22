"""Presets: named defaults and filter policy.

A preset decides where the cache lives, the names of the spec and lock
documents, the vendor directory, and which filters are applied to the
spec and to each dependency. Presets are immutable; use
``PresetBuilder`` to derive a customised one.
"""
from __future__ import annotations

import logging
import tempfile
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Iterable, Optional

from vendify.core.vendors.filters import Filters

if TYPE_CHECKING:
    from vendify.core.vendors.models import Dependency

logger = logging.getLogger(__name__)

DEFAULT_PRESET_NAME = "default"
DEFAULT_VENDOR = "vendor"
DEFAULT_SPEC = ".vendor.yml"
DEFAULT_SPEC_LOCK = ".vendor-lock.yml"
CACHE_DIRNAME = ".vendify"

DependencyFiltersProvider = Callable[["Dependency"], Filters]


def default_cache() -> Path:
    """Return ``~/.vendify``, or ``<tempdir>/.vendify`` when there is no home."""
    try:
        home = Path.home()
    except (RuntimeError, KeyError):
        home = None
    if home is None or not str(home) or str(home) == "~":
        fallback = Path(tempfile.gettempdir()) / CACHE_DIRNAME
        logger.warning("cannot determine home directory, using %s as cache", fallback)
        return fallback
    return home / CACHE_DIRNAME


def no_dependency_filters(dep: Dependency) -> Filters:
    return Filters()


@dataclass(frozen=True)
class Preset:
    """Immutable bundle of default paths and filter policy.

    Attributes:
        name: Preset name recorded in the spec document
        cache: Cache root directory
        vendor: Vendor directory relative to the project root
        spec: Spec document file name
        spec_lock: Lock document file name
        force_filters: Clear user filters before merging the preset's filters
    """

    name: str = DEFAULT_PRESET_NAME
    cache: Path = field(default_factory=default_cache)
    vendor: str = DEFAULT_VENDOR
    spec: str = DEFAULT_SPEC
    spec_lock: str = DEFAULT_SPEC_LOCK
    force_filters: bool = False
    _global_filters: Filters = field(default_factory=Filters, repr=False)
    _dependency_filters: DependencyFiltersProvider = field(default=no_dependency_filters, repr=False)

    def global_filters(self) -> Filters:
        """Spec-wide filters; returns a fresh copy on every call."""
        return self._global_filters.copy()

    def dependency_filters(self, dep: Dependency) -> Filters:
        """Filters for ``dep``; returns a fresh copy on every call."""
        return self._dependency_filters(dep).copy()


class PresetBuilder:
    """Derive a new preset from a base one.

    Example:
        >>> preset = PresetBuilder().with_vendor("third_party").with_force_filters(True).build()
    """

    def __init__(self, base: Optional[Preset] = None) -> None:
        self._base = base if base is not None else Preset()
        self._changes: dict[str, object] = {}

    def with_name(self, name: str) -> PresetBuilder:
        self._changes["name"] = name
        return self

    def with_cache(self, cache: Path | str) -> PresetBuilder:
        self._changes["cache"] = Path(cache).expanduser()
        return self

    def with_vendor(self, vendor: str) -> PresetBuilder:
        self._changes["vendor"] = vendor
        return self

    def with_spec(self, spec: str) -> PresetBuilder:
        self._changes["spec"] = spec
        return self

    def with_spec_lock(self, spec_lock: str) -> PresetBuilder:
        self._changes["spec_lock"] = spec_lock
        return self

    def with_force_filters(self, force: bool) -> PresetBuilder:
        self._changes["force_filters"] = bool(force)
        return self

    def with_global_filters(self, filters: Filters) -> PresetBuilder:
        self._changes["_global_filters"] = filters.copy()
        return self

    def with_global_targets(self, targets: Iterable[str]) -> PresetBuilder:
        return self.with_global_filters(self._current_global().add_targets(targets))

    def with_global_ignores(self, ignores: Iterable[str]) -> PresetBuilder:
        return self.with_global_filters(self._current_global().add_ignores(ignores))

    def with_global_extensions(self, extensions: Iterable[str]) -> PresetBuilder:
        return self.with_global_filters(self._current_global().add_extensions(extensions))

    def with_dependency_filters(self, provider: DependencyFiltersProvider) -> PresetBuilder:
        self._changes["_dependency_filters"] = provider
        return self

    def build(self) -> Preset:
        return replace(self._base, **self._changes)

    def _current_global(self) -> Filters:
        current = self._changes.get("_global_filters")
        if isinstance(current, Filters):
            return current.copy()
        return self._base.global_filters()


__all__ = [
    "Preset",
    "PresetBuilder",
    "default_cache",
    "no_dependency_filters",
    "DEFAULT_PRESET_NAME",
]
