"""Source control capability used by the cache and importer.

The vendoring engine never talks to git directly; it depends on this
protocol so tests (and other backends) can provide their own client.
"""
from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class SourceControlClient(Protocol):
    """Clone-or-open, fetch, checkout, hard-reset and revision lookup.

    Every method raises ``RepositoryError`` on failure.
    """

    def open_or_clone(self, url: str, refname: str, path: Path) -> None:
        """Open the working copy at ``path`` or replace it with a fresh clone of ``url``."""
        ...

    def fetch(self, path: Path, refname: str) -> None:
        """Fetch branches and tags from ``origin`` and check ``refname`` resolves."""
        ...

    def checkout(self, path: Path, refname: str) -> None:
        """Force-checkout the commit ``refname`` resolves to and drop untracked files."""
        ...

    def reset(self, path: Path, refname: str) -> None:
        """Hard-reset to the commit ``refname`` resolves to and drop untracked files."""
        ...

    def current_revision(self, path: Path) -> str:
        """Return the full commit id of ``HEAD``."""
        ...


__all__ = ["SourceControlClient"]
