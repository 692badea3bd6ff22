"""Shared handling of the spec and lock YAML documents."""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Callable, Iterable, TypeVar

import yaml

import vendify
from vendify.core.exceptions import ConfigError
from vendify.core.schemas import validate_document

logger = logging.getLogger(__name__)

T = TypeVar("T")

_NUMBER_RE = re.compile(r"\d+")


def running_version() -> str:
    return vendify.__version__


def _version_key(version: str) -> tuple[int, ...]:
    parts = []
    for component in str(version).split("."):
        match = _NUMBER_RE.match(component.strip())
        parts.append(int(match.group()) if match else 0)
    while len(parts) > 1 and parts[-1] == 0:
        parts.pop()
    return tuple(parts)


def compare_versions(left: str, right: str) -> int:
    """Return -1, 0 or 1 comparing dotted versions component by component."""
    lk, rk = _version_key(left), _version_key(right)
    return (lk > rk) - (lk < rk)


def advance_version(current: str | None) -> str:
    """Move ``current`` forward to the running version, never backwards."""
    target = running_version()
    if current and compare_versions(current, target) > 0:
        return str(current)
    return target


def _raw_scalar(text: str, key: str) -> str | None:
    """Return the top-level ``key`` scalar of a YAML document exactly as written."""
    node = yaml.compose(text, Loader=yaml.SafeLoader)
    if not isinstance(node, yaml.MappingNode):
        return None
    for key_node, value_node in node.value:
        if key_node.value == key and isinstance(value_node, yaml.ScalarNode):
            return value_node.value
    return None


def load_document(path: Path, schema_name: str) -> dict[str, Any]:
    """Read and validate a spec or lock document.

    Raises:
        ConfigError: If the file is missing, unparsable or schema-invalid.
    """
    if not path.is_file():
        raise ConfigError(f"{schema_name} file not found: {path}", context={"path": str(path)})
    try:
        text = path.read_text(encoding="utf-8")
        data = yaml.safe_load(text)
        version = data.get("version") if isinstance(data, dict) else None
        if isinstance(version, (int, float)) and not isinstance(version, bool):
            # Unquoted ``version: 0.10`` would otherwise read back as 0.1.
            data["version"] = _raw_scalar(text, "version")
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"cannot read {path}: {exc}", context={"path": str(path)}) from exc
    if data is None:
        data = {}
    validate_document(data, schema_name, path=path)
    logger.debug("loaded %s document %s", schema_name, path)
    return data


def canonical_by_url(items: Iterable[T], url_of: Callable[[T], str]) -> list[T]:
    """Drop case-insensitive URL duplicates (first wins) and sort by URL."""
    seen: set[str] = set()
    unique: list[T] = []
    for item in items:
        key = url_of(item).casefold()
        if key in seen:
            continue
        seen.add(key)
        unique.append(item)
    return sorted(unique, key=url_of)


__all__ = [
    "advance_version",
    "canonical_by_url",
    "compare_versions",
    "load_document",
    "running_version",
]
