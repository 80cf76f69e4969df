"""Shared fixtures: a fresh SQLite-backed gateway per test."""
import os
import sys

import pytest
from fastapi.testclient import TestClient

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from timer_registry.api import create_app
from timer_registry.config import Settings
from timer_registry.controller import TimerController
from timer_registry.store import SqliteGateway


@pytest.fixture
def gateway(tmp_path):
    gw = SqliteGateway(tmp_path / "timers.db")
    yield gw
    gw.close()


@pytest.fixture
def controller(gateway):
    return TimerController(gateway)


@pytest.fixture
def settings(tmp_path):
    return Settings(store_backend="sqlite", sqlite_path=tmp_path / "timers.db")


@pytest.fixture
def client(settings, gateway):
    app = create_app(settings, gateway=gateway)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def timer_body():
    return {
        "timerid": "t1",
        "expires": "2023-06-26T13:40:17Z",
        "metaTags": {"a": "b"},
        "callbackReference": "cb",
        "deleteAfter": 0,
    }
