import os

import pytest


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep BF_* variables and stray .env files out of every test."""
    for key in list(os.environ):
        if key.startswith("BF_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
