import logging
from dataclasses import dataclass

from sqlalchemy.engine import Engine

from core.cache import make_redis_client
from core.config import Settings
from core.database import create_tables, make_engine, make_session_factory
from repositories.auth_repo import AuthRepository
from repositories.caches import RateLimitCache, SessionCache
from repositories.database_auth_repo import DatabaseAuthRepository
from repositories.database_rate_limiter import DatabaseRateLimiter
from repositories.database_storage import DatabaseStorage
from repositories.memory_auth_repo import InMemoryAuthRepository
from repositories.memory_rate_limiter import InMemoryRateLimiter
from repositories.memory_storage import InMemoryStorage
from repositories.rate_limiter import RateLimiter
from repositories.storage import Storage
from services.generation_service import FlashcardGenerator, HttpFlashcardGenerator

logger = logging.getLogger(__name__)


@dataclass
class Backends:
    storage: Storage
    auth_repo: AuthRepository
    rate_limiter: RateLimiter
    engine: Engine | None = None


def build_backends(settings: Settings) -> Backends:
    """Build the three stores for the configured STORAGE_BACKEND."""
    limiter_kwargs = {
        "default_limit": settings.DEFAULT_GENERATION_LIMIT,
        "window_ms": settings.rate_limit_window_ms,
    }

    if settings.STORAGE_BACKEND == "memory":
        logger.info("Using in-memory storage")
        return Backends(
            storage=InMemoryStorage(),
            auth_repo=InMemoryAuthRepository(),
            rate_limiter=InMemoryRateLimiter(**limiter_kwargs),
        )

    engine = make_engine(settings.DATABASE_URL)
    create_tables(engine)
    session_factory = make_session_factory(engine)

    session_cache = rate_limit_cache = None
    if settings.REDIS_URL:
        redis_client = make_redis_client(settings.REDIS_URL)
        session_cache = SessionCache(redis_client, ttl_seconds=settings.SESSION_CACHE_TTL_SECONDS)
        rate_limit_cache = RateLimitCache(redis_client, ttl_seconds=settings.RATE_LIMIT_CACHE_TTL_SECONDS)

    logger.info(f"Using database storage at {engine.url} (cache: {'redis' if settings.REDIS_URL else 'off'})")
    return Backends(
        storage=DatabaseStorage(session_factory),
        auth_repo=DatabaseAuthRepository(session_factory, cache=session_cache),
        rate_limiter=DatabaseRateLimiter(session_factory, cache=rate_limit_cache, **limiter_kwargs),
        engine=engine,
    )


def build_generator(settings: Settings) -> FlashcardGenerator | None:
    if not settings.GENERATOR_URL:
        logger.info("No GENERATOR_URL configured; generation endpoints are disabled")
        return None
    return HttpFlashcardGenerator(
        settings.GENERATOR_URL,
        api_key=settings.GENERATOR_API_KEY,
        timeout=settings.GENERATOR_TIMEOUT_SECONDS,
    )
