"""Tests for connection pool startup and shutdown."""

from fastapi.testclient import TestClient

from delivery_api import main


def test_pool_created_on_startup_and_disposed_on_shutdown(monkeypatch, engine):
    created = []

    def fake_create_engine(config):
        created.append(config)
        return engine

    monkeypatch.setattr(main, "create_engine", fake_create_engine)

    try:
        with TestClient(main.app) as client:
            assert main.app.state.engine is engine
            assert not engine.disposed

            response = client.get("/health")
            assert response.status_code == 200

        assert created == [main.settings]
        assert engine.disposed
    finally:
        del main.app.state.engine
