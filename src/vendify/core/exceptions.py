from __future__ import annotations

from typing import Any, Dict, Mapping


class VendifyError(Exception):
    """Base exception for vendify."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class ConfigError(VendifyError):
    """Raised when a spec/lock document or the configuration is missing or invalid."""


class LockError(VendifyError):
    """Raised when an advisory lock cannot be opened or acquired."""


class FilesystemError(VendifyError):
    """Raised when cache or vendor directories cannot be prepared or removed."""


__all__ = [
    "VendifyError",
    "ConfigError",
    "LockError",
    "FilesystemError",
]
