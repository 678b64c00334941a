"""Pytest fixtures for schemascope unit tests."""

from __future__ import annotations

import os

import pytest

from schemascope.config import ENV_PREFIX, Settings
from schemascope.sql_completion import SchemaCatalog
from tests.fixtures.snapshots import make_snapshot


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    """Ensure SCHEMASCOPE_* variables from the shell do not leak into tests."""
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def snapshot():
    """Two schemas: a populated public schema and a small billing schema."""
    return make_snapshot()


@pytest.fixture
def catalog(snapshot):
    return SchemaCatalog(snapshot, default_schema="public")


@pytest.fixture
def settings():
    return Settings()
