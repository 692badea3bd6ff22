"""Vendor subsystem exceptions.

Per-dependency failures are raised as ``RepositoryError`` or
``DependencyImportError`` so the installer can isolate them from sibling
dependencies, while precondition failures reuse the core error kinds.
"""
from __future__ import annotations

from vendify.core.exceptions import ConfigError, FilesystemError, LockError, VendifyError


class VendorError(VendifyError):
    """Base exception for per-dependency vendoring errors."""


class RepositoryError(VendorError):
    """Raised when clone, fetch, checkout, reset or revision lookup fails."""


class DependencyImportError(VendorError):
    """Raised when copying the selected files of a dependency fails."""


__all__ = [
    "VendifyError",
    "ConfigError",
    "LockError",
    "FilesystemError",
    "VendorError",
    "RepositoryError",
    "DependencyImportError",
]
