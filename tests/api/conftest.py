from __future__ import annotations

import pytest

from app.api import deps
from tests.api.helpers import STORED_USERS, DummySessionLocal, StoredUsersRepo


@pytest.fixture(autouse=True)
def stored_users(monkeypatch):
    STORED_USERS.clear()
    monkeypatch.setattr(deps, "SessionLocal", DummySessionLocal())
    monkeypatch.setattr(deps, "UsersRepo", StoredUsersRepo)
    yield STORED_USERS
    STORED_USERS.clear()
