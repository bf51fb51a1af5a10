from __future__ import annotations

import logging

import pytest

from slsa_provenance.config import Config


@pytest.fixture(autouse=True)
def env_protect(tmp_path, monkeypatch):
    """Run each test in its own directory with no configuration loaded."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(Config, "data", {})
    monkeypatch.setenv("SLSA_PROVENANCE_CONFIG", str(tmp_path / "no-config.toml"))


@pytest.fixture
def root_logger():
    """Give access to the root logger, removing added handlers afterwards."""
    root = logging.getLogger("")
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers[:]:
        if handler not in handlers:
            handler.close()
            root.removeHandler(handler)
    root.setLevel(level)
