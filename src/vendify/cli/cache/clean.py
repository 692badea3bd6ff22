"""
vendify cache clean command.

SUMMARY: Remove every cached repository
"""
from __future__ import annotations

import argparse

from vendify.cli import OutputFormatter, add_standard_flags, build_cache, get_repo_root, load_runtime
from vendify.core.exceptions import VendifyError

SUMMARY = "Remove every cached repository"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        config, preset = load_runtime(get_repo_root(args))
        cache = build_cache(config, preset)
        # Waits for any running install/update to release the cache.
        with cache.lock():
            cache.clear()
    except VendifyError as e:
        formatter.error(e, error_code="cache_clean_error")
        return 1
    formatter.success({"path": str(cache.root)}, f"Removed {cache.root}")
    return 0
