"""
vendify CLI package.

Commands are auto-discovered: top-level commands live in ``commands/``,
grouped commands in a domain subfolder (``cache/``).

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Shared CLI utilities
"""
from ._output import OutputFormatter, format_json
from ._args import add_json_flag, add_repo_root_flag, add_standard_flags
from ._utils import build_cache, get_repo_root, load_runtime

__all__ = [
    # Output formatting
    "OutputFormatter",
    "format_json",
    # Argument helpers
    "add_json_flag",
    "add_repo_root_flag",
    "add_standard_flags",
    # Utilities
    "get_repo_root",
    "load_runtime",
    "build_cache",
]
