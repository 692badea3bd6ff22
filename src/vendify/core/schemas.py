"""Document schema validation.

Spec and lock documents are validated with JSON Schema before they are
turned into model objects. Schemas are stored as YAML under
``vendify/data/schemas`` and loaded once per process.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

from jsonschema import Draft202012Validator

from vendify.core.exceptions import ConfigError
from vendify.data import read_yaml


def load_schema(schema_name: str) -> Dict[str, Any]:
    """Load a bundled schema by name (``"spec"`` or ``"lock"``)."""
    return read_yaml("schemas", f"{schema_name}.schema.yaml")


def validate_document(data: Any, schema_name: str, *, path: Path | None = None) -> None:
    """Validate ``data`` against the named schema.

    Raises:
        ConfigError: With every violation listed, ordered by location.
    """
    validator = Draft202012Validator(load_schema(schema_name))
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.absolute_path))
    if not errors:
        return

    lines = []
    for error in errors:
        location = "/".join(str(p) for p in error.absolute_path) or "<root>"
        lines.append(f"{location}: {error.message}")
    where = f" {path}" if path is not None else ""
    raise ConfigError(
        f"invalid {schema_name} document{where}:\n  " + "\n  ".join(lines),
        context={"schema": schema_name, "path": str(path) if path else None},
    )


__all__ = ["load_schema", "validate_document"]
