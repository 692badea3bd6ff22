import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'vendify' and tests/ as 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


@pytest.fixture(autouse=True)
def _isolate_vendify_env(monkeypatch, tmp_path):
    """Keep VENDIFY_* overrides and CLI logging handlers from leaking between tests."""
    import os

    from vendify.core.log import reset_stdlib_logging_for_tests

    for name in list(os.environ):
        if name.upper().startswith("VENDIFY_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("VENDIFY_CACHE__ROOT", str(tmp_path / "vendify-cache"))
    yield
    reset_stdlib_logging_for_tests()


@pytest.fixture
def preset(tmp_path: Path):
    """Default preset with the cache inside the test's tmp_path."""
    from vendify.core.vendors.preset import PresetBuilder

    return PresetBuilder().with_cache(tmp_path / "cache").build()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def git_repo(tmp_path: Path):
    """Create an isolated git repository used as a dependency remote."""
    from helpers.env import TestGitRepo

    return TestGitRepo(tmp_path / "remote")


@pytest.fixture
def fake_client():
    """In-memory SourceControlClient."""
    from helpers.fake_scm import FakeClient

    return FakeClient()
