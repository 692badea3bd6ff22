"""Vendor data models.

``Dependency`` is the declared, mutable form kept in the spec document;
``LockedDependency`` pins a dependency URL to a resolved revision;
``ImportResult`` reports the outcome of one dependency during a run.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from vendify.core.vendors.filters import Filters

if TYPE_CHECKING:
    from vendify.core.vendors.preset import Preset


def same_url(left: str, right: str) -> bool:
    """Dependency identity: URLs compared case-insensitively."""
    return left.casefold() == right.casefold()


@dataclass(slots=True)
class Dependency:
    """A remote repository to vendor.

    Attributes:
        url: Repository URL, the dependency identity
        refname: Branch, tag or commit to vendor
        filters: Dependency-specific file selection
    """

    url: str
    refname: str
    filters: Filters = field(default_factory=Filters)

    def matches(self, url: str) -> bool:
        return same_url(self.url, url)

    def update_from(self, other: Dependency) -> Dependency:
        """Take ``other``'s refname and filters, keeping this URL."""
        self.refname = other.refname
        self.filters = other.filters.copy()
        return self

    def apply_preset(self, preset: Preset) -> Dependency:
        if preset.force_filters:
            self.filters.clear()
        self.filters.merge(preset.dependency_filters(self))
        return self

    def to_locked_dependency(self, refname: str) -> LockedDependency:
        return LockedDependency(url=self.url, refname=refname)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Dependency:
        return cls(url=data["url"], refname=data["refname"], filters=Filters.from_dict(data))

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"url": self.url, "refname": self.refname}
        result.update(self.filters.to_dict())
        return result


@dataclass(frozen=True, slots=True)
class LockedDependency:
    """A dependency URL pinned to a fully resolved revision."""

    url: str
    refname: str

    def matches(self, url: str) -> bool:
        return same_url(self.url, url)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LockedDependency:
        return cls(url=data["url"], refname=data["refname"])

    def to_dict(self) -> dict[str, Any]:
        return {"url": self.url, "refname": self.refname}


@dataclass(frozen=True, slots=True)
class ImportResult:
    """Result of installing or updating one dependency.

    Attributes:
        url: Dependency URL (credentials redacted)
        success: Whether the dependency was vendored
        refname: Resolved revision recorded in the lock
        previous_refname: Revision locked before this run, if any
        changed: Whether the locked revision changed
        error: Error message if failed
    """

    url: str
    success: bool
    refname: str | None = None
    previous_refname: str | None = None
    changed: bool = False
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "success": self.success,
            "refname": self.refname,
            "previous_refname": self.previous_refname,
            "changed": self.changed,
            "error": self.error,
        }


__all__ = ["Dependency", "LockedDependency", "ImportResult", "same_url"]
