import importlib

import pytest

fastapi = pytest.importorskip("fastapi")
TestClient = pytest.importorskip("fastapi.testclient").TestClient
pytest.importorskip("redis")
pytest.importorskip("psycopg_pool")


@pytest.fixture
def app_modules(monkeypatch, store):
    """
    Load app + routers with an in-memory store so startup needs no Redis or Postgres.
    Returns modules for monkeypatching in tests.
    """
    app_module = importlib.import_module("userapi.main")
    users_module = importlib.import_module("userapi.interfaces.api.routers.users")
    store_conn = importlib.import_module("userapi.infrastructure.store.connection")

    monkeypatch.setattr(store_conn, "init_store", lambda: None)
    monkeypatch.setattr(store_conn, "close_store", lambda: None)
    monkeypatch.setattr(store_conn, "store", store)
    app_module.app.dependency_overrides[store_conn.get_table] = lambda: "users"

    yield {
        "app": app_module.app,
        "users": users_module,
        "store": store,
    }
    app_module.app.dependency_overrides.clear()


@pytest.fixture
def client(app_modules):
    return TestClient(app_modules["app"])
