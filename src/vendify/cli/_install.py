"""Shared implementation of the install and update commands."""
from __future__ import annotations

import argparse
import logging

from vendify.cli._output import OutputFormatter
from vendify.cli._utils import build_cache, get_repo_root, load_runtime
from vendify.core.exceptions import VendifyError
from vendify.core.vendors.installer import Installer
from vendify.core.vendors.lock import SpecLock
from vendify.core.vendors.spec import Spec

logger = logging.getLogger(__name__)


def run_installer(args: argparse.Namespace, *, update: bool) -> int:
    """Run install (or update) and persist the lock and spec.

    Successful dependencies are persisted even when others failed; the
    exit code is 1 when anything failed.
    """
    action = "update" if update else "install"
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        repo_root = get_repo_root(args)
        config, preset = load_runtime(repo_root)
        spec = Spec.load(preset, repo_root)
        spec_lock = SpecLock.load_or_create(preset, repo_root)
        installer = Installer(spec, spec_lock, build_cache(config, preset), max_workers=config.max_workers)
        spec_lock = installer.update() if update else installer.install()
        spec_lock.save()
        spec.save()
    except (VendifyError, OSError) as e:
        formatter.error(e, error_code=f"{action}_error")
        return 1

    results = installer.results
    if formatter.json_mode:
        formatter.json_output(
            {
                "status": "success" if installer.succeeded else "partial",
                "results": [r.to_dict() for r in results],
            }
        )
    else:
        done = sum(1 for r in results if r.success)
        verb = "Updated" if update else "Installed"
        formatter.text(f"{verb} {done}/{len(results)} dependencies")
        for result in sorted(results, key=lambda r: r.url):
            status = "OK" if result.success else "FAILED"
            changed = " (changed)" if result.changed else ""
            formatter.text(f"  {result.url}: {status}{changed}")
            if result.refname:
                formatter.text_kv("Revision", result.refname[:12], prefix="    ")
            if result.error:
                formatter.text_kv("Error", result.error, prefix="    ")

    return 0 if installer.succeeded else 1


__all__ = ["run_installer"]
