import pytest
from fastapi.testclient import TestClient

from momentum.config import settings
from momentum.main import create_app
from momentum.services.feedback import CompletionFeedback
from momentum.store import GoalStore


class MemoryKV:
    """dict-backed key-value collaborator"""

    def __init__(self, data=None):
        self.data = dict(data or {})
        self.writes = 0

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value
        self.writes += 1


class FixedClock:
    def __init__(self, day):
        self.day = day

    def __call__(self):
        return self.day


@pytest.fixture
def kv():
    return MemoryKV()


@pytest.fixture
def clock():
    return FixedClock("2024-01-15")


@pytest.fixture
def played():
    return []


@pytest.fixture
def store(kv, clock, played):
    feedback = CompletionFeedback(lambda: played.append)
    return GoalStore(kv, "momentumData", clock=clock, feedback=feedback).load()


@pytest.fixture
def client(store):
    app = create_app(store=store, start_jobs=False)
    with TestClient(app) as c:
        c.headers.update({"X-API-Key": settings.api_key})
        yield c
