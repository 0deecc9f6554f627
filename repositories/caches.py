from redis import Redis

from schemas.auth import UserSession
from schemas.rate_limit import RateLimitResult, rate_limit_result_adapter

SESSION_KEY_PREFIX = "session"
RATE_LIMIT_KEY_PREFIX = "ratelimit"


class SessionCache:
    """Short-lived copy of session documents, keyed by token.

    Only sessions that exist are cached; a miss always falls through to the
    backing table.
    """

    def __init__(self, redis_client: Redis, ttl_seconds: int = 300):
        self._redis = redis_client
        self.ttl_seconds = ttl_seconds

    @staticmethod
    def _key(token: str) -> str:
        return f"{SESSION_KEY_PREFIX}:{token}"

    def get(self, token: str) -> UserSession | None:
        raw = self._redis.get(self._key(token))
        if raw is None:
            return None
        return UserSession.model_validate_json(raw)

    def put(self, session: UserSession) -> None:
        self._redis.set(self._key(session.token), session.model_dump_json(), ex=self.ttl_seconds)

    def invalidate(self, token: str) -> None:
        self._redis.delete(self._key(token))


class RateLimitCache:
    """Per-user rate limit check results."""

    def __init__(self, redis_client: Redis, ttl_seconds: int = 60):
        self._redis = redis_client
        self.ttl_seconds = ttl_seconds

    @staticmethod
    def _key(user_id: str) -> str:
        return f"{RATE_LIMIT_KEY_PREFIX}:{user_id}"

    def get(self, user_id: str) -> RateLimitResult | None:
        raw = self._redis.get(self._key(user_id))
        if raw is None:
            return None
        return rate_limit_result_adapter.validate_json(raw)

    def put(self, user_id: str, result: RateLimitResult) -> None:
        self._redis.set(
            self._key(user_id),
            rate_limit_result_adapter.dump_json(result),
            ex=self.ttl_seconds,
        )

    def invalidate(self, user_id: str) -> None:
        self._redis.delete(self._key(user_id))
