"""Root conftest: sets env vars BEFORE any miku module is imported.

miku.config builds its Settings singleton at import time, so the data
directory must point somewhere disposable before pytest collects any test
that imports miku.
"""

import os
import tempfile
from pathlib import Path

import pytest

# Force-set (not setdefault) so a real data dir is never touched by tests
os.environ["MIKU_DATA_DIR"] = tempfile.mkdtemp(prefix="miku-test-")


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Empty app data directory for one test."""
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Empty workspace root directory for one test."""
    path = tmp_path / "notes"
    path.mkdir()
    return path
