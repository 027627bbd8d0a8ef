# tests/conftest.py
from __future__ import annotations

import pytest

from detprime.runtime import reset


@pytest.fixture(autouse=True)
def isolated_workspace(tmp_path, monkeypatch):
    """Every test gets its own workspace and a fresh runtime."""
    ws = tmp_path / "detprime_home"
    monkeypatch.setenv("DETPRIME_HOME", str(ws))
    reset()
    yield ws
    reset()
