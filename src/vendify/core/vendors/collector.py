"""Walk a working copy and yield the files a selector accepts."""
from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Iterator

from vendify.core.vendors.selector import Selector

logger = logging.getLogger(__name__)

GIT_DIR = ".git"


@dataclass(frozen=True, slots=True)
class CollectedPath:
    """A selected file.

    Attributes:
        src: Absolute path inside the working copy
        src_rel: Path relative to the working copy root
    """

    src: Path
    src_rel: PurePosixPath

    def copy(self, to: Path) -> Path:
        """Copy the file under ``to``, creating parents and overwriting."""
        dest = Path(to).joinpath(*self.src_rel.parts)
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(self.src, dest)
        return dest


class Collector:
    def __init__(self, selector: Selector) -> None:
        self.selector = selector

    def collect(self, root: Path) -> Iterator[CollectedPath]:
        """Yield selected regular files under ``root``.

        Directories are visited in sorted order and pruned as soon as the
        selector rejects them; the repository's ``.git`` directory is never
        entered. Symlinked directories are not followed, symlinked files are
        collected and copied by content. Each call starts a fresh walk.
        """
        root = Path(root)
        stack: list[PurePosixPath] = [PurePosixPath()]
        while stack:
            rel_dir = stack.pop()
            with os.scandir(root.joinpath(*rel_dir.parts)) as it:
                entries = sorted(it, key=lambda e: e.name)
            subdirs: list[PurePosixPath] = []
            for entry in entries:
                rel = rel_dir / entry.name
                if entry.is_dir(follow_symlinks=False):
                    if not rel_dir.parts and entry.name == GIT_DIR:
                        continue
                    if self.selector.select_dir(rel.as_posix()):
                        subdirs.append(rel)
                elif entry.is_file():
                    if self.selector.select_file(rel.as_posix()):
                        yield CollectedPath(src=Path(entry.path), src_rel=rel)
            # Reversed so the stack pops directories in sorted order.
            stack.extend(reversed(subdirs))


__all__ = ["Collector", "CollectedPath", "GIT_DIR"]
