"""
vendify init command.

SUMMARY: Create an empty spec file in the project
"""
from __future__ import annotations

import argparse
import logging

from vendify.cli import OutputFormatter, add_standard_flags, get_repo_root, load_runtime
from vendify.core.exceptions import VendifyError
from vendify.core.vendors.spec import Spec

SUMMARY = "Create an empty spec file in the project"

logger = logging.getLogger(__name__)


def register_args(parser: argparse.ArgumentParser) -> None:
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        repo_root = get_repo_root(args)
        _config, preset = load_runtime(repo_root)
        spec = Spec.create(preset, repo_root)
        if spec.path.exists():
            logger.warning("spec file %s already exists, not overwriting", spec.path)
            formatter.error(FileExistsError(str(spec.path)), f"{spec.path} already exists", error_code="spec_exists")
            return 1
        spec.save()
        formatter.success({"path": str(spec.path)}, f"Created {spec.path}")
        return 0
    except VendifyError as e:
        formatter.error(e, error_code="init_error")
        return 1
