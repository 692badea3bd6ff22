"""I/O utilities for vendify.

This package provides safe file operations:
- Core: atomic writes
- YAML: document read/write
- Locking: advisory file locks shared across threads and processes
"""
from __future__ import annotations

from .core import (
    atomic_write,
    ensure_parent_dir,
)
from .locking import (
    LockTimeoutError,
    acquire_file_lock,
)
from .yaml import (
    dump_yaml_string,
    read_yaml,
    write_yaml,
)

__all__ = [
    # core
    "ensure_parent_dir",
    "atomic_write",
    # locking
    "LockTimeoutError",
    "acquire_file_lock",
    # yaml
    "read_yaml",
    "write_yaml",
    "dump_yaml_string",
]
