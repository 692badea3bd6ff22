"""
vendify add command.

SUMMARY: Add a dependency to the spec, or update it
"""
from __future__ import annotations

import argparse

from vendify.cli import OutputFormatter, add_standard_flags, get_repo_root, load_runtime
from vendify.core.exceptions import VendifyError
from vendify.core.vendors.filters import Filters
from vendify.core.vendors.models import Dependency
from vendify.core.vendors.spec import Spec

SUMMARY = "Add a dependency to the spec, or update it"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("url", help="Git repository URL")
    parser.add_argument("refname", help="Branch, tag or commit to vendor")
    parser.add_argument(
        "--extension",
        "-e",
        dest="extensions",
        action="append",
        default=[],
        metavar="EXT",
        help="File extension to vendor (repeatable)",
    )
    parser.add_argument(
        "--target",
        "-t",
        dest="targets",
        action="append",
        default=[],
        metavar="PATH",
        help="Path to restrict vendoring to (repeatable)",
    )
    parser.add_argument(
        "--ignore",
        "-i",
        dest="ignores",
        action="append",
        default=[],
        metavar="PATH",
        help="Path to exclude from vendoring (repeatable)",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        repo_root = get_repo_root(args)
        _config, preset = load_runtime(repo_root)
        spec = Spec.load(preset, repo_root)
    except VendifyError as e:
        formatter.error(e, "cannot load spec: " + str(e), error_code="spec_load_error")
        return 1

    filters = Filters(targets=args.targets, ignores=args.ignores, extensions=args.extensions)
    dep = spec.add_dependency(Dependency(url=args.url, refname=args.refname, filters=filters))
    try:
        spec.save()
    except (VendifyError, OSError) as e:
        formatter.error(e, error_code="spec_save_error")
        return 1

    formatter.success({"dependency": dep.to_dict()}, f"Added {dep.url}@{dep.refname}")
    return 0
