"""Tests for the vendify command line."""
from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
import yaml

if TYPE_CHECKING:
    from helpers.env import TestGitRepo


def run(*argv: str) -> int:
    from vendify.cli._dispatcher import main

    return main(list(argv))


class TestDispatcher:
    def test_discovers_commands(self) -> None:
        from vendify.cli._dispatcher import discover_commands, discover_domains, discover_root_commands

        assert set(discover_root_commands()) == {"init", "add", "install", "update"}
        assert set(discover_domains()) == {"cache"}
        assert set(discover_commands("cache")) == {"path", "clean"}

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert run() == 0
        assert "usage: vendify" in capsys.readouterr().out

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        import vendify

        with pytest.raises(SystemExit) as exc_info:
            run("--version")

        assert exc_info.value.code == 0
        assert vendify.__version__ in capsys.readouterr().out


class TestInitCommand:
    def test_init_creates_spec(self, project: Path) -> None:
        assert run("init", "--repo-root", str(project)) == 0

        data = yaml.safe_load((project / ".vendor.yml").read_text(encoding="utf-8"))
        assert data["deps"] == []
        assert data["vendor"] == "vendor"

    def test_init_refuses_to_overwrite(self, project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        spec_path = project / ".vendor.yml"
        spec_path.write_text("precious: true\n", encoding="utf-8")

        assert run("init", "--repo-root", str(project)) == 1

        assert spec_path.read_text(encoding="utf-8") == "precious: true\n"
        assert "already exists" in capsys.readouterr().err


class TestAddCommand:
    def test_add_inserts_then_updates(self, project: Path) -> None:
        run("init", "--repo-root", str(project))

        assert run("add", "https://example.com/a.git", "main", "-e", "proto", "--repo-root", str(project)) == 0
        assert (
            run(
                "add",
                "https://example.com/a.git",
                "v2",
                "--target",
                "api",
                "--ignore",
                "api/internal",
                "--repo-root",
                str(project),
            )
            == 0
        )

        data = yaml.safe_load((project / ".vendor.yml").read_text(encoding="utf-8"))
        assert data["deps"] == [
            {
                "url": "https://example.com/a.git",
                "refname": "v2",
                "targets": ["api"],
                "ignores": ["api/internal"],
            }
        ]

    def test_add_without_spec_fails_and_leaves_nothing(
        self, project: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert run("add", "https://example.com/a.git", "main", "--repo-root", str(project)) == 1

        assert not (project / ".vendor.yml").exists()
        assert "cannot load spec" in capsys.readouterr().err

    def test_add_with_invalid_spec_leaves_it_untouched(self, project: Path) -> None:
        spec_path = project / ".vendor.yml"
        spec_path.write_text("deps: not-a-list\n", encoding="utf-8")

        assert run("add", "https://example.com/a.git", "main", "--repo-root", str(project)) == 1

        assert spec_path.read_text(encoding="utf-8") == "deps: not-a-list\n"


class TestInstallCommands:
    def _prepare(self, project: Path, git_repo: "TestGitRepo") -> None:
        git_repo.write("api/service.proto", "syntax = 'proto3';")
        git_repo.write("docs/guide.md", "guide")
        git_repo.commit_all("Add api")
        run("init", "--repo-root", str(project))
        run("add", git_repo.url, "main", "-e", "proto", "--repo-root", str(project))

    def test_install_vendors_files_and_writes_lock(self, project: Path, git_repo: "TestGitRepo") -> None:
        self._prepare(project, git_repo)

        assert run("install", "--repo-root", str(project)) == 0

        assert (project / "vendor" / "api" / "service.proto").exists()
        assert not (project / "vendor" / "docs").exists()
        lock = yaml.safe_load((project / ".vendor-lock.yml").read_text(encoding="utf-8"))
        assert lock["deps"] == [{"url": git_repo.url, "refname": git_repo.head()}]

    def test_install_is_pinned_until_update(self, project: Path, git_repo: "TestGitRepo") -> None:
        self._prepare(project, git_repo)
        run("install", "--repo-root", str(project))
        pinned = git_repo.head()

        git_repo.write("api/new.proto", "new")
        newer = git_repo.commit_all("Add new proto")

        assert run("install", "--repo-root", str(project)) == 0
        assert not (project / "vendor" / "api" / "new.proto").exists()
        lock = yaml.safe_load((project / ".vendor-lock.yml").read_text(encoding="utf-8"))
        assert lock["deps"][0]["refname"] == pinned

        assert run("update", "--repo-root", str(project)) == 0
        assert (project / "vendor" / "api" / "new.proto").exists()
        lock = yaml.safe_load((project / ".vendor-lock.yml").read_text(encoding="utf-8"))
        assert lock["deps"][0]["refname"] == newer

    def test_partial_failure_exits_one_but_persists_successes(
        self, project: Path, git_repo: "TestGitRepo", tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        self._prepare(project, git_repo)
        missing = str(tmp_path / "no-such-remote")
        run("add", missing, "main", "--repo-root", str(project))

        assert run("install", "--json", "--repo-root", str(project)) == 1

        output = json.loads(capsys.readouterr().out)
        assert output["status"] == "partial"
        by_url = {r["url"]: r for r in output["results"]}
        assert by_url[git_repo.url]["success"] is True
        assert by_url[missing]["success"] is False
        lock = yaml.safe_load((project / ".vendor-lock.yml").read_text(encoding="utf-8"))
        assert [d["url"] for d in lock["deps"]] == [git_repo.url]

    def test_install_without_spec_fails(self, project: Path) -> None:
        assert run("install", "--repo-root", str(project)) == 1


class TestCacheCommands:
    def test_cache_path_uses_configured_root(
        self, project: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert run("cache", "path", "--repo-root", str(project)) == 0

        assert capsys.readouterr().out.strip() == str(tmp_path / "vendify-cache")

    def test_cache_clean_removes_cache(self, project: Path, tmp_path: Path) -> None:
        cache_root = tmp_path / "vendify-cache"
        (cache_root / "repos" / "x").mkdir(parents=True)

        assert run("cache", "clean", "--repo-root", str(project)) == 0

        assert not (cache_root / "repos").exists()
