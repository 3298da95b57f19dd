from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from modules.expense_split.tool.app import app as split_app


@pytest.fixture
def participants():
    return ["ana", "bruno", "carla"]


@pytest.fixture
def split_client(monkeypatch):
    monkeypatch.delenv("TRIPSPLIT_BASE_CURRENCY", raising=False)
    monkeypatch.delenv("TRIPSPLIT_SPLIT_TOLERANCE", raising=False)
    return TestClient(split_app)
