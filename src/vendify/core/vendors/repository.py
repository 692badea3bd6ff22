"""A cached working copy bound to a source control client."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from vendify.core.vendors.redaction import redact_url
from vendify.core.vendors.scm import SourceControlClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Repository:
    """One dependency's working copy inside the cache.

    Attributes:
        url: Remote URL
        path: Working copy directory (``<cache>/repos/<id>``)
        client: Client performing the source control operations
    """

    url: str
    path: Path
    client: SourceControlClient

    @classmethod
    def open(cls, url: str, refname: str, path: Path, client: SourceControlClient) -> Repository:
        """Open the working copy at ``path``, cloning ``url`` when needed."""
        logger.debug("opening %s at %s", redact_url(url), path)
        client.open_or_clone(url, refname, path)
        return cls(url=url, path=Path(path), client=client)

    def fetch(self, refname: str) -> None:
        self.client.fetch(self.path, refname)

    def checkout(self, refname: str) -> None:
        self.client.checkout(self.path, refname)

    def reset(self, refname: str) -> None:
        self.client.reset(self.path, refname)

    def current_revision(self) -> str:
        return self.client.current_revision(self.path)


__all__ = ["Repository"]
