import os
import sys

import pytest
from fastapi.testclient import TestClient

# Test environment settings
os.environ["APP_ENV"] = "test"

# Add the project root to the path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from layoutlens.api.dependencies import get_store
from layoutlens.api.limiter import limiter
from layoutlens.api.main import app
from layoutlens.api.services.store import ProjectStore


@pytest.fixture
def store():
    return ProjectStore(lock_timeout=1.0)


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    limiter.reset()
    with TestClient(app) as c:
        yield c
    del app.dependency_overrides[get_store]


@pytest.fixture
def wall_payload():
    return {
        "id": "w1",
        "start": {"x": 0, "y": 0},
        "end": {"x": 10, "y": 0},
        "thickness": 0.2,
    }
