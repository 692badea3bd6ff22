"""File-selection filters.

A ``Filters`` value holds three string lists (targets, ignores and
extensions). Every list is kept sorted and free of duplicates after
each mutation, so merging filters from several layers is order
independent.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable


def _normalized(current: list[str], values: Iterable[str]) -> list[str]:
    return sorted(set(current).union(str(v) for v in values))


@dataclass(slots=True)
class Filters:
    """Target, ignore and extension lists used to select files.

    Attributes:
        targets: Paths (relative to the repository root) to restrict the copy to
        ignores: Paths excluded from the copy, taking precedence over targets
        extensions: File extensions (without the leading dot) to copy
    """

    targets: list[str] = field(default_factory=list)
    ignores: list[str] = field(default_factory=list)
    extensions: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.targets = _normalized([], self.targets)
        self.ignores = _normalized([], self.ignores)
        self.extensions = _normalized([], self.extensions)

    def add_targets(self, targets: Iterable[str]) -> Filters:
        self.targets = _normalized(self.targets, targets)
        return self

    def add_ignores(self, ignores: Iterable[str]) -> Filters:
        self.ignores = _normalized(self.ignores, ignores)
        return self

    def add_extensions(self, extensions: Iterable[str]) -> Filters:
        self.extensions = _normalized(self.extensions, extensions)
        return self

    def merge(self, other: Filters) -> Filters:
        """Union ``other`` into this instance."""
        self.add_targets(other.targets)
        self.add_ignores(other.ignores)
        self.add_extensions(other.extensions)
        return self

    def clear(self) -> Filters:
        self.targets = []
        self.ignores = []
        self.extensions = []
        return self

    def copy(self) -> Filters:
        return Filters(list(self.targets), list(self.ignores), list(self.extensions))

    def is_empty(self) -> bool:
        return not (self.targets or self.ignores or self.extensions)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Filters:
        """Read the optional ``targets``/``ignores``/``extensions`` keys."""
        return cls(
            targets=list(data.get("targets") or []),
            ignores=list(data.get("ignores") or []),
            extensions=list(data.get("extensions") or []),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize non-empty lists only."""
        result: dict[str, Any] = {}
        if self.targets:
            result["targets"] = list(self.targets)
        if self.ignores:
            result["ignores"] = list(self.ignores)
        if self.extensions:
            result["extensions"] = list(self.extensions)
        return result


__all__ = ["Filters"]
