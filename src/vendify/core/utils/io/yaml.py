"""YAML I/O utilities with atomic writes."""
from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .core import atomic_write


def read_yaml(path: Path, default: Any = None, raise_on_error: bool = False) -> Any:
    """Read YAML with error handling.

    Returns default if file is missing or invalid, unless raise_on_error is True.

    Args:
        path: YAML file path to read
        default: Value to return if file missing or invalid (default: None)
        raise_on_error: If True, propagate exceptions instead of returning default.

    Returns:
        Any: Parsed YAML data, or default if error

    Examples:
        >>> config = read_yaml(Path("config.yaml"), default={})
        >>> assert isinstance(config, dict)
    """
    path = Path(path)
    if not path.exists():
        if raise_on_error:
            raise FileNotFoundError(f"File not found: {path}")
        return default

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return data if data is not None else default
    except (OSError, yaml.YAMLError):
        if raise_on_error:
            raise
        return default


def dump_yaml_string(data: Any, *, sort_keys: bool = True) -> str:
    """Serialize ``data`` to a YAML string with block style."""
    return yaml.safe_dump(
        data,
        default_flow_style=False,
        sort_keys=sort_keys,
        allow_unicode=True,
    )


def write_yaml(path: Path, data: Any, *, sort_keys: bool = True) -> None:
    """Atomically write YAML data to ``path``.

    Keys are sorted for deterministic output unless ``sort_keys`` is False,
    in which case mapping insertion order is kept.

    Args:
        path: Target file path
        data: Data to serialize as YAML
        sort_keys: Sort mapping keys
    """

    def _writer(f) -> None:
        f.write(dump_yaml_string(data, sort_keys=sort_keys))

    atomic_write(Path(path), _writer)


__all__ = ["read_yaml", "write_yaml", "dump_yaml_string"]
