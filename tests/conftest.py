import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'cookshelf' and tests/ importable as 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


@pytest.fixture(autouse=True)
def isolated_shelf(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the cookshelf home at a per-test directory."""
    shelf = tmp_path / "shelf"
    monkeypatch.setenv("COOKSHELF_PATH", str(shelf))
    monkeypatch.delenv("COOKSHELF_LOG_LEVEL", raising=False)
    monkeypatch.delenv("COOKSHELF_COOKBOOK_STORE", raising=False)
    return shelf


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    from cookshelf.core.stdlib_logging import reset_logging_for_tests

    reset_logging_for_tests()


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Empty project directory used as the working directory."""
    root = tmp_path / "project"
    root.mkdir()
    monkeypatch.chdir(root)
    return root


@pytest.fixture
def store_dir(isolated_shelf: Path) -> Path:
    """Default cookbook store inside the isolated cookshelf home."""
    path = isolated_shelf / "cookbooks"
    path.mkdir(parents=True, exist_ok=True)
    return path
