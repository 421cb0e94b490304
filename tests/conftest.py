import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'addonkit' and tests/ importable as 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from addonkit.core.stdlib_logging import reset_logging_for_tests


@pytest.fixture(autouse=True)
def _isolate_addonkit_env(monkeypatch: pytest.MonkeyPatch):
    """Drop ADDONKIT_* overrides leaking in from the outer environment."""
    for key in list(os.environ):
        if key.startswith("ADDONKIT_"):
            monkeypatch.delenv(key, raising=False)
    yield
    reset_logging_for_tests()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """An empty project directory with a node_modules folder."""
    (tmp_path / "node_modules").mkdir()
    return tmp_path
