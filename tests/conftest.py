"""Pytest configuration helpers and shared fixtures.

Ensure the project root is on sys.path so tests can import the package
without requiring PYTHONPATH to be set externally.
"""
import sys
from pathlib import Path

import pytest


def pytest_configure(config):
    # Insert repo root (one level up from tests/) to sys.path
    repo_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo_root))


@pytest.fixture
def store():
    from postdir_lib.storage import MemoryPostStore
    return MemoryPostStore()


@pytest.fixture
def app(store, tmp_path, monkeypatch):
    from postdir_lib.main import create_app, Config
    for var in ('POSTDIR_MONGO_URI', 'POSTDIR_DATABASE', 'POSTDIR_COLLECTION'):
        monkeypatch.delenv(var, raising=False)
    # Point at a config path that does not exist so defaults are used
    return create_app(Config(config_path=str(tmp_path / 'server_config.yml'), store=store))


@pytest.fixture
def client(app):
    from fastapi.testclient import TestClient
    with TestClient(app) as c:
        yield c
