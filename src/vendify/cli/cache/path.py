"""
vendify cache path command.

SUMMARY: Print the cache directory
"""
from __future__ import annotations

import argparse

from vendify.cli import OutputFormatter, add_standard_flags, build_cache, get_repo_root, load_runtime
from vendify.core.exceptions import VendifyError

SUMMARY = "Print the cache directory"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        config, preset = load_runtime(get_repo_root(args))
    except VendifyError as e:
        formatter.error(e, error_code="config_error")
        return 1
    cache = build_cache(config, preset)
    formatter.success({"path": str(cache.root)}, str(cache.root))
    return 0
