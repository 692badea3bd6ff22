"""Tests for the pruned working copy walk."""
from __future__ import annotations

from pathlib import Path


def write(root: Path, rel: str, content: str = "x") -> None:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def make_collector(targets=(), ignores=(), extensions=()):
    from vendify.core.vendors.collector import Collector
    from vendify.core.vendors.filters import Filters
    from vendify.core.vendors.selector import Selector

    filters = Filters(targets=list(targets), ignores=list(ignores), extensions=list(extensions))
    return Collector(Selector(filters))


class TestCollector:
    def test_collects_selected_files_in_sorted_order(self, tmp_path: Path) -> None:
        for rel in ["b/z.proto", "a/y.proto", "a/x.txt", "root.proto", "c/d/e.proto"]:
            write(tmp_path, rel)

        sut = make_collector(extensions=["proto"])
        collected = [c.src_rel.as_posix() for c in sut.collect(tmp_path)]

        assert collected == ["root.proto", "a/y.proto", "b/z.proto", "c/d/e.proto"]

    def test_never_enters_git_directory(self, tmp_path: Path) -> None:
        write(tmp_path, ".git/objects/pack.proto")
        write(tmp_path, ".git/HEAD")
        write(tmp_path, "api.proto")

        sut = make_collector(extensions=["proto"])

        assert [c.src_rel.as_posix() for c in sut.collect(tmp_path)] == ["api.proto"]

    def test_pruned_directories_are_not_listed(self, tmp_path: Path, monkeypatch) -> None:
        import os

        write(tmp_path, "keep/a.proto")
        write(tmp_path, "skip/deep/b.proto")
        visited: list[str] = []
        real_scandir = os.scandir

        def _recording_scandir(path):
            visited.append(Path(path).relative_to(tmp_path).as_posix())
            return real_scandir(path)

        monkeypatch.setattr("vendify.core.vendors.collector.os.scandir", _recording_scandir)
        sut = make_collector(ignores=["skip"], extensions=["proto"])

        assert [c.src_rel.as_posix() for c in sut.collect(tmp_path)] == ["keep/a.proto"]
        assert "skip" not in visited
        assert "skip/deep" not in visited

    def test_collects_symlinked_files_by_content(self, tmp_path: Path) -> None:
        write(tmp_path, "proto/real.proto", "syntax = 1;")
        (tmp_path / "alias.proto").symlink_to(tmp_path / "proto" / "real.proto")
        (tmp_path / "dangling.proto").symlink_to(tmp_path / "missing.proto")

        sut = make_collector(extensions=["proto"])
        collected = list(sut.collect(tmp_path))

        assert [c.src_rel.as_posix() for c in collected] == ["alias.proto", "proto/real.proto"]
        dest = collected[0].copy(tmp_path / "out")
        assert not dest.is_symlink()
        assert dest.read_text(encoding="utf-8") == "syntax = 1;"

    def test_does_not_follow_symlinked_directories(self, tmp_path: Path) -> None:
        write(tmp_path, "real/a.proto")
        (tmp_path / "linked").symlink_to(tmp_path / "real", target_is_directory=True)

        sut = make_collector(extensions=["proto"])

        assert [c.src_rel.as_posix() for c in sut.collect(tmp_path)] == ["real/a.proto"]

    def test_collect_is_restartable(self, tmp_path: Path) -> None:
        write(tmp_path, "a.proto")
        write(tmp_path, "b/c.proto")
        sut = make_collector(extensions=["proto"])

        first = [c.src_rel for c in sut.collect(tmp_path)]
        second = [c.src_rel for c in sut.collect(tmp_path)]

        assert first == second
        assert len(first) == 2


class TestCollectedPath:
    def test_copy_creates_parents_and_overwrites(self, tmp_path: Path) -> None:
        from pathlib import PurePosixPath

        from vendify.core.vendors.collector import CollectedPath

        write(tmp_path, "src/path/file.txt", "new")
        dest_root = tmp_path / "dst"
        write(dest_root, "path/file.txt", "old")

        sut = CollectedPath(src=tmp_path / "src/path/file.txt", src_rel=PurePosixPath("path/file.txt"))
        result = sut.copy(dest_root)

        assert result == dest_root / "path/file.txt"
        assert result.read_text(encoding="utf-8") == "new"
