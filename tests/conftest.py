from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep the user's real config files out of every test."""
    xdg = tmp_path / "xdg"
    xdg.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg))
    monkeypatch.delenv("MKRS_CONFIG", raising=False)
    monkeypatch.delenv("CARGO", raising=False)
    return xdg


@pytest.fixture()
def crate(tmp_path: Path) -> Path:
    root = tmp_path / "crate"
    root.mkdir()
    return root
