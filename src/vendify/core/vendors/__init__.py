"""vendify vendoring engine.

Fetches dependency repositories into a shared cache and copies the
selected files into the project's vendor directory.

Key components:
- Spec / SpecLock: the declared dependencies and their resolved revisions
- Preset: default paths and filter policy
- Cache: content-addressed working copies guarded by advisory locks
- Installer: concurrent install/update of every dependency
- GitClient: git-backed SourceControlClient
"""
from __future__ import annotations

from vendify.core.vendors.cache import Cache, dependency_id
from vendify.core.vendors.collector import CollectedPath, Collector
from vendify.core.vendors.exceptions import (
    ConfigError,
    DependencyImportError,
    FilesystemError,
    LockError,
    RepositoryError,
    VendifyError,
    VendorError,
)
from vendify.core.vendors.filters import Filters
from vendify.core.vendors.git import GitClient
from vendify.core.vendors.importer import Importer
from vendify.core.vendors.installer import Installer, InstallerState
from vendify.core.vendors.lock import SpecLock
from vendify.core.vendors.models import Dependency, ImportResult, LockedDependency
from vendify.core.vendors.preset import Preset, PresetBuilder, default_cache
from vendify.core.vendors.repository import Repository
from vendify.core.vendors.scm import SourceControlClient
from vendify.core.vendors.selector import Selector
from vendify.core.vendors.spec import Spec

__all__ = [
    # Documents
    "Spec",
    "SpecLock",
    # Models
    "Dependency",
    "LockedDependency",
    "ImportResult",
    "Filters",
    # Presets
    "Preset",
    "PresetBuilder",
    "default_cache",
    # Engine
    "Cache",
    "dependency_id",
    "Selector",
    "Collector",
    "CollectedPath",
    "Importer",
    "Installer",
    "InstallerState",
    # Source control
    "SourceControlClient",
    "GitClient",
    "Repository",
    # Exceptions
    "VendifyError",
    "VendorError",
    "ConfigError",
    "LockError",
    "FilesystemError",
    "RepositoryError",
    "DependencyImportError",
]
