"""
vendify update command.

SUMMARY: Vendor the latest revision of every dependency and relock
"""
from __future__ import annotations

import argparse

from vendify.cli import add_standard_flags
from vendify.cli._install import run_installer

SUMMARY = "Vendor the latest revision of every dependency and relock"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    return run_installer(args, update=True)
