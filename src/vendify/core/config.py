"""
vendify configuration management.

Precedence (in increasing order):
  1) Bundled defaults (``vendify/data/config/defaults.yaml``)
  2) Project overlay (``<repo_root>/.vendify.config.yaml``)
  3) Environment overrides (``VENDIFY_*``)

Environment overrides:
- Path separator: double underscore ``__`` between section and key
  (e.g., ``VENDIFY_INSTALL__MAX_WORKERS=4``).
- Case handling: keys are matched case-insensitively.
- Type coercion: bool/int/float/null strings are coerced.
"""
from __future__ import annotations

import copy
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from vendify.core.exceptions import ConfigError
from vendify.core.utils.io import read_yaml
from vendify.data import read_yaml as read_data_yaml

ENV_PREFIX = "VENDIFY_"
PROJECT_CONFIG_FILENAME = ".vendify.config.yaml"


@dataclass(frozen=True, slots=True)
class VendifyConfig:
    """Resolved runtime configuration.

    Attributes:
        cache_root: Cache root override; ``None`` selects the preset default
        lock_warn_after_seconds: Delay before the cache lock warning is logged
        lock_poll_interval_seconds: Sleep between non-blocking lock attempts
        max_workers: Upper bound on dependencies processed concurrently
        git_executable: Git binary used by the git client
        git_timeout_seconds: Per-command git timeout; ``None`` disables it
    """

    cache_root: Optional[Path] = None
    lock_warn_after_seconds: float = 1.0
    lock_poll_interval_seconds: float = 0.05
    max_workers: int = 8
    git_executable: str = "git"
    git_timeout_seconds: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VendifyConfig:
        """Build a config from the merged mapping, validating every value."""
        cache = _section(data, "cache")
        locking = _section(data, "locking")
        install = _section(data, "install")
        git = _section(data, "git")

        root = cache.get("root")
        return cls(
            cache_root=Path(str(root)).expanduser() if root else None,
            lock_warn_after_seconds=_positive_float(locking, "warn_after_seconds"),
            lock_poll_interval_seconds=_positive_float(locking, "poll_interval_seconds"),
            max_workers=_positive_int(install, "max_workers"),
            git_executable=str(git.get("executable") or "git"),
            git_timeout_seconds=(
                None if git.get("timeout_seconds") is None else _positive_float(git, "timeout_seconds")
            ),
        )


def load_config(repo_root: Optional[Path] = None, *, environ: Optional[Mapping[str, str]] = None) -> VendifyConfig:
    """Load defaults, the optional project overlay and environment overrides.

    Args:
        repo_root: Project directory holding ``.vendify.config.yaml``.
        environ: Environment mapping (defaults to ``os.environ``).

    Raises:
        ConfigError: If the overlay is unreadable or any value is invalid.
    """
    cfg: Dict[str, Any] = copy.deepcopy(read_data_yaml("config", "defaults.yaml"))

    if repo_root is not None:
        overlay_path = Path(repo_root) / PROJECT_CONFIG_FILENAME
        if overlay_path.exists():
            try:
                overlay = read_yaml(overlay_path, default={}, raise_on_error=True)
            except (OSError, yaml.YAMLError) as exc:
                raise ConfigError(
                    f"cannot load {overlay_path}: {exc}",
                    context={"path": str(overlay_path)},
                ) from exc
            if not isinstance(overlay, dict):
                raise ConfigError(f"{overlay_path} must contain a mapping")
            _deep_merge(cfg, overlay)

    apply_env_overrides(cfg, os.environ if environ is None else environ)
    return VendifyConfig.from_dict(cfg)


def apply_env_overrides(cfg: Dict[str, Any], environ: Mapping[str, str]) -> None:
    """Apply ``VENDIFY_<section>__<key>`` overrides to ``cfg`` in place."""
    for name in sorted(environ.keys()):
        if not name.upper().startswith(ENV_PREFIX):
            continue
        raw = name[len(ENV_PREFIX):]
        parts = [p.lower() for p in raw.split("__")]
        if len(parts) != 2 or not all(parts):
            # Not a config key (e.g. an unrelated VENDIFY_FOO variable).
            continue
        section, key = parts
        container = cfg.setdefault(section, {})
        if not isinstance(container, dict):
            raise ConfigError(f"cannot override {name}: '{section}' is not a section")
        lower_map = {k.lower(): k for k in container.keys() if isinstance(k, str)}
        container[lower_map.get(key, key)] = _coerce_type(environ[name])


def _coerce_type(value: str) -> Any:
    s = value.strip()
    lowered = s.lower()
    if lowered in {"true", "yes", "on"}:
        return True
    if lowered in {"false", "no", "off"}:
        return False
    if lowered in {"null", "none", ""}:
        return None
    for caster in (int, float):
        try:
            return caster(s)
        except ValueError:
            continue
    return s


def _deep_merge(base: Dict[str, Any], overlay: Mapping[str, Any]) -> None:
    for key, value in overlay.items():
        if isinstance(value, Mapping) and isinstance(base.get(key), dict):
            _deep_merge(base[key], value)
        else:
            base[key] = copy.deepcopy(value)


def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, Mapping):
        raise ConfigError(f"configuration section '{name}' must be a mapping")
    return section


def _positive_float(section: Mapping[str, Any], key: str) -> float:
    value = section.get(key)
    if isinstance(value, bool):
        raise ConfigError(f"configuration key '{key}' must be a number (got {value!r})")
    try:
        result = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"configuration key '{key}' must be a number (got {value!r})") from exc
    if result <= 0:
        raise ConfigError(f"configuration key '{key}' must be positive (got {result})")
    return result


def _positive_int(section: Mapping[str, Any], key: str) -> int:
    value = section.get(key)
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"configuration key '{key}' must be a positive integer (got {value!r})")
    return value


__all__ = ["VendifyConfig", "load_config", "apply_env_overrides", "PROJECT_CONFIG_FILENAME"]
