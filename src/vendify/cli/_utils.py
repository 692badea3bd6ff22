"""Shared CLI utilities: project root, configuration and cache wiring."""
from __future__ import annotations

import argparse
from pathlib import Path

from vendify.core.config import VendifyConfig, load_config
from vendify.core.vendors.cache import Cache
from vendify.core.vendors.git import GitClient
from vendify.core.vendors.preset import Preset, PresetBuilder


def get_repo_root(args: argparse.Namespace) -> Path:
    """Project directory from ``--repo-root``, else the current directory."""
    raw = getattr(args, "repo_root", None)
    if raw:
        return Path(raw).expanduser().resolve()
    return Path.cwd().resolve()


def load_runtime(repo_root: Path) -> tuple[VendifyConfig, Preset]:
    """Load configuration and the preset it selects.

    Raises:
        ConfigError: If the configuration is invalid.
    """
    config = load_config(repo_root)
    builder = PresetBuilder()
    if config.cache_root is not None:
        builder.with_cache(config.cache_root)
    return config, builder.build()


def build_cache(config: VendifyConfig, preset: Preset) -> Cache:
    client = GitClient(config.git_executable, timeout=config.git_timeout_seconds)
    return Cache.from_preset(preset, client, config)


__all__ = ["get_repo_root", "load_runtime", "build_cache"]
