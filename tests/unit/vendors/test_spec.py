"""Tests for the spec document."""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest


def write_yaml(path: Path, content: str) -> None:
    """Helper to write YAML content to a file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content), encoding="utf-8")


class TestSpecCreate:
    def test_create_applies_preset(self, tmp_path: Path, project: Path) -> None:
        import vendify
        from vendify.core.vendors.preset import PresetBuilder
        from vendify.core.vendors.spec import Spec

        preset = (
            PresetBuilder()
            .with_cache(tmp_path / "cache")
            .with_name("protos")
            .with_vendor("third_party")
            .with_global_extensions(["proto"])
            .build()
        )

        sut = Spec.create(preset, project)

        assert sut.version == vendify.__version__
        assert sut.preset_name == "protos"
        assert sut.vendor == "third_party"
        assert sut.filters.extensions == ["proto"]
        assert sut.deps == []
        assert sut.path == project / ".vendor.yml"
        assert sut.vendor_path == project / "third_party"


class TestSpecLoad:
    def test_load_missing_file_raises_config_error(self, preset, project: Path) -> None:
        from vendify.core.exceptions import ConfigError
        from vendify.core.vendors.spec import Spec

        with pytest.raises(ConfigError, match="not found"):
            Spec.load(preset, project)

    def test_load_invalid_yaml_raises_config_error(self, preset, project: Path) -> None:
        from vendify.core.exceptions import ConfigError
        from vendify.core.vendors.spec import Spec

        (project / ".vendor.yml").write_text("deps: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigError):
            Spec.load(preset, project)

    def test_load_schema_violation_raises_config_error(self, preset, project: Path) -> None:
        from vendify.core.exceptions import ConfigError
        from vendify.core.vendors.spec import Spec

        write_yaml(
            project / ".vendor.yml",
            """
            version: "0.1.0"
            deps:
              - url: https://example.com/a.git
            """,
        )

        with pytest.raises(ConfigError, match="refname"):
            Spec.load(preset, project)

    def test_load_reads_dependencies_and_filters(self, preset, project: Path) -> None:
        from vendify.core.vendors.spec import Spec

        write_yaml(
            project / ".vendor.yml",
            """
            version: "0.1.0"
            vendor: ignored-by-preset
            extensions: [proto]
            deps:
              - url: https://example.com/a.git
                refname: main
                targets: [api]
            """,
        )

        sut = Spec.load(preset, project)

        assert sut.vendor == "vendor"
        assert sut.filters.extensions == ["proto"]
        dep = sut.get_dependency("https://example.com/a.git")
        assert dep is not None
        assert dep.refname == "main"
        assert dep.filters.targets == ["api"]

    def test_load_advances_older_version(self, preset, project: Path) -> None:
        import vendify
        from vendify.core.vendors.spec import Spec

        write_yaml(project / ".vendor.yml", 'version: "0.0.1"\ndeps: []\n')

        assert Spec.load(preset, project).version == vendify.__version__

    def test_load_never_regresses_version(self, preset, project: Path) -> None:
        from vendify.core.vendors.spec import Spec

        write_yaml(project / ".vendor.yml", 'version: "99.0.0"\ndeps: []\n')

        assert Spec.load(preset, project).version == "99.0.0"

    def test_load_keeps_unquoted_version_as_written(self, preset, project: Path) -> None:
        from vendify.core.vendors.documents import load_document
        from vendify.core.vendors.spec import Spec

        write_yaml(project / ".vendor.yml", "version: 99.10\ndeps: []\n")

        assert load_document(project / ".vendor.yml", "spec")["version"] == "99.10"
        assert Spec.load(preset, project).version == "99.10"

    def test_load_with_force_filters_replaces_user_filters(self, tmp_path: Path, project: Path) -> None:
        from vendify.core.vendors.preset import PresetBuilder
        from vendify.core.vendors.spec import Spec

        write_yaml(
            project / ".vendor.yml",
            """
            version: "0.1.0"
            targets: [src]
            deps:
              - url: u
                refname: main
                extensions: [go]
            """,
        )
        preset = (
            PresetBuilder()
            .with_cache(tmp_path / "cache")
            .with_force_filters(True)
            .with_global_extensions(["proto"])
            .build()
        )

        sut = Spec.load(preset, project)

        assert sut.filters.targets == []
        assert sut.filters.extensions == ["proto"]
        assert sut.deps[0].filters.is_empty()


class TestSpecDependencies:
    def test_add_dependency_twice_updates_in_place(self, preset, project: Path) -> None:
        from vendify.core.vendors.filters import Filters
        from vendify.core.vendors.models import Dependency
        from vendify.core.vendors.spec import Spec

        sut = Spec.create(preset, project)
        sut.add_dependency(Dependency("https://example.com/a.git", "main", Filters(targets=["a"])))
        sut.add_dependency(Dependency("https://EXAMPLE.com/a.git", "v2", Filters(extensions=["proto"])))

        assert len(sut.deps) == 1
        dep = sut.deps[0]
        assert dep.url == "https://example.com/a.git"
        assert dep.refname == "v2"
        assert dep.filters.extensions == ["proto"]
        assert dep.filters.targets == []

    def test_add_dependency_applies_preset(self, tmp_path: Path, project: Path) -> None:
        from vendify.core.vendors.filters import Filters
        from vendify.core.vendors.models import Dependency
        from vendify.core.vendors.preset import PresetBuilder
        from vendify.core.vendors.spec import Spec

        preset = (
            PresetBuilder()
            .with_cache(tmp_path / "cache")
            .with_dependency_filters(lambda dep: Filters(ignores=["tests"]))
            .build()
        )
        sut = Spec.create(preset, project)

        dep = sut.add_dependency(Dependency("u", "main"))

        assert dep.filters.ignores == ["tests"]

    def test_get_dependency_missing_returns_none(self, preset, project: Path) -> None:
        from vendify.core.vendors.spec import Spec

        assert Spec.create(preset, project).get_dependency("nope") is None


class TestSpecSave:
    def test_save_canonicalizes_dependencies(self, preset, project: Path) -> None:
        from vendify.core.vendors.models import Dependency
        from vendify.core.vendors.spec import Spec

        sut = Spec.create(preset, project)
        sut.deps = [
            Dependency("https://example.com/b.git", "main"),
            Dependency("https://example.com/a.git", "first"),
            Dependency("https://EXAMPLE.com/a.git", "second"),
        ]

        sut.save()

        assert [d.url for d in sut.deps] == ["https://example.com/a.git", "https://example.com/b.git"]
        assert sut.deps[0].refname == "first"

    def test_round_trip(self, preset, project: Path) -> None:
        from vendify.core.vendors.filters import Filters
        from vendify.core.vendors.models import Dependency
        from vendify.core.vendors.spec import Spec

        sut = Spec.create(preset, project)
        sut.filters.add_ignores(["docs"])
        sut.add_dependency(Dependency("https://example.com/b.git", "v1", Filters(extensions=["proto"])))
        sut.add_dependency(Dependency("https://example.com/a.git", "main", Filters(targets=["api"])))
        sut.save()

        loaded = Spec.load(preset, project)

        assert loaded.to_dict() == sut.to_dict()

    def test_resave_is_byte_stable(self, preset, project: Path) -> None:
        from vendify.core.vendors.models import Dependency
        from vendify.core.vendors.spec import Spec

        sut = Spec.create(preset, project)
        sut.add_dependency(Dependency("https://example.com/a.git", "main"))
        path = sut.save()
        first = path.read_text(encoding="utf-8")

        Spec.load(preset, project).save()

        assert path.read_text(encoding="utf-8") == first

    def test_saved_document_omits_empty_filters(self, preset, project: Path) -> None:
        import yaml

        from vendify.core.vendors.models import Dependency
        from vendify.core.vendors.spec import Spec

        sut = Spec.create(preset, project)
        sut.add_dependency(Dependency("u", "main"))
        data = yaml.safe_load(sut.save().read_text(encoding="utf-8"))

        assert "targets" not in data
        assert data["deps"] == [{"url": "u", "refname": "main"}]
        assert data["preset"] == "default"
        assert data["vendor"] == "vendor"
