import os
import sys

import fakeredis
import pytest
from fastapi.testclient import TestClient

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from core.config import Settings
from core.database import create_tables, make_engine, make_session_factory
from core.factory import Backends
from repositories.caches import RateLimitCache, SessionCache
from repositories.database_auth_repo import DatabaseAuthRepository
from repositories.database_rate_limiter import DatabaseRateLimiter
from repositories.database_storage import DatabaseStorage
from repositories.memory_auth_repo import InMemoryAuthRepository
from repositories.memory_rate_limiter import InMemoryRateLimiter
from repositories.memory_storage import InMemoryStorage
from schemas.auth import User
from schemas.flashcard import FlashcardSetRaw

HOUR_MS = 60 * 60 * 1000
DAY_MS = 24 * HOUR_MS


class FakeClock:
    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class StubGenerator:
    def __init__(self):
        self.fail = False
        self.calls = []

    async def generate(self, topic, count, user_query=""):
        self.calls.append(("generate", topic, count, user_query))
        if self.fail:
            return None
        raw = FlashcardSetRaw(
            topic=topic,
            flashcards=[{"front": f"{topic} {i}", "back": f"answer {i}"} for i in range(count)],
        )
        return raw.to_flashcard_set()

    async def regenerate(self, existing_set, regeneration_prompt=""):
        self.calls.append(("regenerate", existing_set.topic, regeneration_prompt))
        if self.fail:
            return None
        raw = FlashcardSetRaw(
            topic=existing_set.topic,
            flashcards=[{"front": c.front, "back": c.back.upper()} for c in existing_set.flashcards],
        )
        return raw.to_flashcard_set()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def session_factory():
    engine = make_engine("sqlite://")
    create_tables(engine)
    yield make_session_factory(engine)
    engine.dispose()


@pytest.fixture
def redis_client():
    return fakeredis.FakeRedis(server=fakeredis.FakeServer(), decode_responses=True)


@pytest.fixture(params=["memory", "database"])
def storage(request, session_factory):
    if request.param == "memory":
        return InMemoryStorage()
    return DatabaseStorage(session_factory)


@pytest.fixture(params=["memory", "database", "database+redis"])
def auth_repo(request, session_factory, redis_client, clock):
    if request.param == "memory":
        return InMemoryAuthRepository(clock=clock)
    cache = SessionCache(redis_client) if request.param == "database+redis" else None
    return DatabaseAuthRepository(session_factory, cache=cache, clock=clock)


@pytest.fixture(params=["memory", "database", "database+redis"])
def rate_limiter(request, session_factory, redis_client, clock):
    if request.param == "memory":
        return InMemoryRateLimiter(default_limit=3, window_ms=DAY_MS, clock=clock)
    cache = RateLimitCache(redis_client) if request.param == "database+redis" else None
    return DatabaseRateLimiter(session_factory, cache=cache, default_limit=3, window_ms=DAY_MS, clock=clock)


def make_set(user_id=None, topic="Spanish", cards=(("hola", "hello"), ("adios", "bye")), created_at=None):
    flashcard_set = FlashcardSetRaw(
        topic=topic,
        flashcards=[{"front": front, "back": back} for front, back in cards],
    ).to_flashcard_set(user_id=user_id)
    if created_at is not None:
        flashcard_set.created_at = created_at
    return flashcard_set


@pytest.fixture
def generator():
    return StubGenerator()


@pytest.fixture
def backends(clock):
    return Backends(
        storage=InMemoryStorage(),
        auth_repo=InMemoryAuthRepository(),
        rate_limiter=InMemoryRateLimiter(default_limit=2, window_ms=DAY_MS, clock=clock),
    )


@pytest.fixture
def app_factory(backends):
    from main import create_app

    def _make(generator=None):
        test_settings = Settings(STORAGE_BACKEND="memory", GENERATOR_URL=None, RATE_LIMIT_CLEANUP_INTERVAL_SECONDS=3600)
        return create_app(test_settings, backends=backends, generator=generator)

    return _make


@pytest.fixture
def client(app_factory, generator):
    with TestClient(app_factory(generator)) as test_client:
        yield test_client


def sign_in(test_client: TestClient, auth_id: str = "google-123", email: str = "alice@example.com"):
    """Open a session the way the OAuth callback would and return auth headers."""
    auth_service = test_client.app.state.auth_service
    session = auth_service.sign_in(User(auth_id=auth_id, email=email, name="Alice"))
    return {"Authorization": f"Bearer {session.token}"}, session
