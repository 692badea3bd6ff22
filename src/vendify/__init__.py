"""
vendify - vendor selected files from remote git repositories

vendify clones each configured dependency into a shared cache, selects a
subset of its files through layered filters, and copies them into a
project-local vendor directory, pinning every dependency to a resolved
revision in a lock file.
"""

__version__ = "0.4.0"
__all__ = ["__version__"]
