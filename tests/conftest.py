"""Shared fixtures: an in-process stand-in for the MySQL connection pool."""

import sys
from contextlib import asynccontextmanager
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add repo root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from delivery_api.main import app  # noqa: E402


class FakeResult:
    def __init__(self, rows, rowcount):
        self._rows = list(rows)
        self.rowcount = rowcount

    def mappings(self):
        return self

    def all(self):
        return list(self._rows)


class FakeConnection:
    def __init__(self, engine):
        self._engine = engine

    async def execute(self, statement, params=None):
        self._engine.executed.append((str(statement), dict(params or {})))
        if self._engine.query_error is not None:
            raise self._engine.query_error
        return FakeResult(self._engine.rows, self._engine.rowcount)


class FakeEngine:
    """Records statements; mimics AsyncEngine.connect() and begin()."""

    def __init__(self):
        self.rows = []
        self.rowcount = 1
        self.connect_error = None
        self.query_error = None
        self.executed = []
        self.checkouts = 0
        self.releases = 0
        self.disposed = False

    @asynccontextmanager
    async def connect(self):
        if self.connect_error is not None:
            raise self.connect_error
        self.checkouts += 1
        try:
            yield FakeConnection(self)
        finally:
            self.releases += 1

    begin = connect

    async def dispose(self):
        self.disposed = True


@pytest.fixture
def engine():
    return FakeEngine()


@pytest.fixture
def client(engine):
    app.state.engine = engine
    yield TestClient(app)
    del app.state.engine
