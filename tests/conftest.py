# tests/conftest.py
from __future__ import annotations

import pytest

from mgons import runtime
from mgons.numtheory import clear_caches


@pytest.fixture(autouse=True)
def isolated_workspace(tmp_path, monkeypatch):
    """Every test gets its own workspace folder and a fresh Runtime."""
    ws = tmp_path / "workspace"
    monkeypatch.setenv("MGONS_HOME", str(ws))
    runtime.reset()
    yield ws
    runtime.reset()


@pytest.fixture
def fresh_caches():
    clear_caches()
    yield
    clear_caches()
