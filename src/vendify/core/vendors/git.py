"""Git implementation of the source control capability.

Runs the ``git`` executable in a subprocess. Prompts are disabled so a
missing credential fails fast instead of hanging a worker thread, and
every error message is passed through credential redaction.
"""
from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import Optional

from vendify.core.utils.subprocess import run_with_timeout
from vendify.core.vendors.exceptions import RepositoryError
from vendify.core.vendors.redaction import redact_args, redact_text, redact_url

logger = logging.getLogger(__name__)


class GitClient:
    """``SourceControlClient`` backed by the git command line."""

    def __init__(self, executable: str = "git", *, timeout: Optional[float] = None) -> None:
        self.executable = executable
        self.timeout = timeout

    def open_or_clone(self, url: str, refname: str, path: Path) -> None:
        path = Path(path)
        if self._is_working_copy(path):
            return

        if path.is_symlink() or path.is_file():
            path.unlink()
        elif path.exists():
            shutil.rmtree(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        logger.info("cloning %s...", redact_url(url))
        self._run(["clone", "--no-checkout", "--", url, str(path)], cwd=path.parent)

    def fetch(self, path: Path, refname: str) -> None:
        self._run(["fetch", "--tags", "--force", "--prune", "origin"], cwd=path)
        self.resolve(path, refname)

    def checkout(self, path: Path, refname: str) -> None:
        commit = self.resolve(path, refname)
        self._run(["checkout", "--force", "--detach", commit], cwd=path)
        self._run(["clean", "-ffdx"], cwd=path)

    def reset(self, path: Path, refname: str) -> None:
        commit = self.resolve(path, refname)
        self._run(["reset", "--hard", commit], cwd=path)
        self._run(["clean", "-ffdx"], cwd=path)

    def current_revision(self, path: Path) -> str:
        result = self._run(["rev-parse", "--verify", "HEAD^{commit}"], cwd=path)
        return result.stdout.strip()

    def resolve(self, path: Path, refname: str) -> str:
        """Resolve ``refname`` to a commit id.

        Remote branches win over local refs, tags and commit ids of the
        same name.

        Raises:
            RepositoryError: If nothing matches.
        """
        for candidate in (f"refs/remotes/origin/{refname}", refname):
            result = self._run(
                ["rev-parse", "--verify", "--quiet", f"{candidate}^{{commit}}"],
                cwd=path,
                check=False,
            )
            if result.returncode == 0 and result.stdout.strip():
                return result.stdout.strip()
        raise RepositoryError(
            f"cannot find refname '{refname}' in {path}",
            context={"refname": refname, "path": str(path)},
        )

    def _is_working_copy(self, path: Path) -> bool:
        if not (path / ".git").is_dir():
            return False
        result = self._run(["rev-parse", "--git-dir"], cwd=path, check=False)
        return result.returncode == 0 and result.stdout.strip() == ".git"

    def _run(self, args: list[str], *, cwd: Path, check: bool = True) -> subprocess.CompletedProcess[str]:
        env = os.environ.copy()
        env["GIT_TERMINAL_PROMPT"] = "0"
        safe_cmd = "git " + " ".join(redact_args(args))
        try:
            result = run_with_timeout(
                [self.executable, *args],
                timeout=self.timeout,
                cwd=str(cwd),
                capture_output=True,
                text=True,
                env=env,
            )
        except subprocess.TimeoutExpired as exc:
            raise RepositoryError(
                f"git command timed out after {self.timeout}s: {safe_cmd}",
                context={"cwd": str(cwd)},
            ) from exc
        except OSError as exc:
            raise RepositoryError(
                f"cannot run {self.executable}: {exc}",
                context={"cwd": str(cwd)},
            ) from exc

        if check and result.returncode != 0:
            output = redact_text((result.stderr or result.stdout or "").strip())
            raise RepositoryError(
                f"git command failed: {safe_cmd}\n{output}",
                context={"cwd": str(cwd), "returncode": result.returncode},
            )
        return result


__all__ = ["GitClient"]
