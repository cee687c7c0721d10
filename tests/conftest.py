import os
from types import SimpleNamespace

import pytest

os.environ.setdefault("DEBUG", "true")

from fastapi.testclient import TestClient  # noqa: E402

from app.api.deps import get_current_user  # noqa: E402
from app.main import app  # noqa: E402


class FakeDocument:
    """Stands in for a Beanie document class; records inserted instances."""

    inserted: list = []

    def __init__(self, **kwargs):
        self.__dict__.update(kwargs)
        self.id = f"doc-{len(type(self).inserted) + 1}"

    async def insert(self):
        type(self).inserted.append(self)
        return self


@pytest.fixture
def fake_document():
    """A fresh FakeDocument subclass with its own insert log."""
    return type("Doc", (FakeDocument,), {"inserted": []})


@pytest.fixture
def staff_user():
    return SimpleNamespace(id="user-1", email="staff@anini.in", full_name="Staff", phone=None, is_active=True)


@pytest.fixture
def client(staff_user):
    app.dependency_overrides[get_current_user] = lambda: staff_user
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client():
    app.dependency_overrides.clear()
    return TestClient(app)
