"""
vendify install command.

SUMMARY: Vendor every dependency at its locked revision
"""
from __future__ import annotations

import argparse

from vendify.cli import add_standard_flags
from vendify.cli._install import run_installer

SUMMARY = "Vendor every dependency at its locked revision"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    """Reset the vendor directory and install from the lock file."""
    return run_installer(args, update=False)
