"""Pytest configuration to ensure local testing defaults."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

# Keep the default store away from backend/data during pytest runs; each test
# overrides it with a tmp_path-backed document anyway.
default_orders_file = (BACKEND_DIR / "tests" / "test_orders.json").resolve().as_posix()
os.environ.setdefault("ORDERS_FILE", default_orders_file)


@pytest.fixture
def orders_path(tmp_path):
    return tmp_path / "orders.json"


@pytest.fixture
def store(orders_path):
    from order_dashboard.storage import OrderStore

    return OrderStore(orders_path)


@pytest.fixture
def client(store):
    from fastapi.testclient import TestClient

    from order_dashboard.main import app
    from order_dashboard.storage import get_store

    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.pop(get_store, None)
