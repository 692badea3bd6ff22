"""
Auto-discovery CLI dispatcher for vendify.

Top-level commands are the modules of ``cli/commands``; every other
subfolder is a command domain (``vendify cache path``). A command module
exposes ``SUMMARY``, ``register_args(parser)`` and ``main(args) -> int``.
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from functools import lru_cache
from pathlib import Path
from typing import Any

from vendify.core.log import configure_stdlib_logging

logger = logging.getLogger(__name__)


def _load_command(module_name: str, default_summary: str) -> dict[str, Any]:
    module = importlib.import_module(module_name)
    return {
        "module": module,
        "summary": getattr(module, "SUMMARY", default_summary),
        "register_args": getattr(module, "register_args", None),
        "main": getattr(module, "main", None),
    }


@lru_cache(maxsize=1)
def discover_domains() -> dict[str, Path]:
    """Map domain name to directory for every CLI subfolder with commands."""
    cli_dir = Path(__file__).parent
    domains = {}
    for item in cli_dir.iterdir():
        if item.name == "commands" or not item.is_dir() or item.name.startswith("_"):
            continue
        if any(f.suffix == ".py" and not f.name.startswith("_") for f in item.iterdir()):
            domains[item.name] = item
    return domains


@lru_cache(maxsize=1)
def discover_root_commands() -> dict[str, dict[str, Any]]:
    """Discover top-level commands under cli/commands (no domain prefix)."""
    commands_dir = Path(__file__).parent / "commands"
    commands: dict[str, dict[str, Any]] = {}
    for item in commands_dir.glob("*.py"):
        if item.name.startswith("_"):
            continue
        commands[item.stem] = _load_command(f"vendify.cli.commands.{item.stem}", item.stem)
    return commands


@lru_cache(maxsize=8)
def discover_commands(domain: str) -> dict[str, dict[str, Any]]:
    """Discover the commands of one domain subfolder."""
    domain_dir = Path(__file__).parent / domain
    commands: dict[str, dict[str, Any]] = {}
    for item in domain_dir.glob("*.py"):
        if item.name.startswith("_"):
            continue
        commands[item.stem] = _load_command(f"vendify.cli.{domain}.{item.stem}", f"{domain} {item.stem}")
    return commands


def _register(subparsers: Any, name: str, info: dict[str, Any]) -> None:
    primary = name.replace("_", "-")
    aliases = [name] if primary != name else []
    cmd_parser = subparsers.add_parser(primary, aliases=aliases, help=info["summary"])
    if info["register_args"]:
        info["register_args"](cmd_parser)
    if info["main"]:
        cmd_parser.set_defaults(_func=info["main"])


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with auto-discovered domains and commands."""
    from vendify import __version__

    parser = argparse.ArgumentParser(
        prog="vendify",
        description="Vendor files from remote git repositories into your project",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", "-v", action="store_true", help="Log progress (INFO)")
    verbosity.add_argument("--debug", action="store_true", help="Log every step, including copied files (DEBUG)")

    subparsers = parser.add_subparsers(dest="domain", title="commands", metavar="<command>")

    for cmd_name, cmd_info in sorted(discover_root_commands().items()):
        _register(subparsers, cmd_name, cmd_info)

    for domain_name in sorted(discover_domains()):
        domain_commands = discover_commands(domain_name)
        if not domain_commands:
            continue
        package = importlib.import_module(f"vendify.cli.{domain_name}")
        summary = (package.__doc__ or f"{domain_name} commands").strip().splitlines()[0]
        domain_parser = subparsers.add_parser(domain_name, help=summary)
        cmd_subparsers = domain_parser.add_subparsers(
            dest="command",
            title="commands",
            metavar="<command>",
        )
        for cmd_name, cmd_info in sorted(domain_commands.items()):
            _register(cmd_subparsers, cmd_name, cmd_info)

    return parser


def _log_level(args: argparse.Namespace) -> str:
    if getattr(args, "debug", False):
        return "DEBUG"
    if getattr(args, "verbose", False):
        return "INFO"
    return "WARNING"


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the vendify CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(list(argv))

    if not args.domain:
        parser.print_help()
        return 0

    func = getattr(args, "_func", None)
    if func is None:
        # Domain given without a command.
        domain_parser = parser._subparsers._group_actions[0].choices.get(args.domain)
        if domain_parser:
            domain_parser.print_help()
        return 0

    configure_stdlib_logging(level=_log_level(args))
    logger.debug("running %s", " ".join(argv))
    return int(func(args) or 0)


__all__ = ["build_parser", "main", "discover_domains", "discover_commands", "discover_root_commands"]
