import threading

from repositories.rate_limiter import RateLimiter
from schemas.rate_limit import RateLimitResult


class InMemoryRateLimiter(RateLimiter):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._attempts: list[tuple[str, int]] = []
        self._limits: dict[str, int] = {}
        self._lock = threading.Lock()

    def set_user_limit(self, user_id: str, limit: int) -> None:
        self._validate_limit(limit)
        with self._lock:
            self._limits[user_id] = limit

    def get_user_limit(self, user_id: str) -> int:
        with self._lock:
            return self._limits.get(user_id, self.default_limit)

    def check_rate_limit(self, user_id: str) -> RateLimitResult:
        with self._lock:
            self._prune(self._cutoff())
            recent = [ts for uid, ts in self._attempts if uid == user_id]
            limit = self._limits.get(user_id, self.default_limit)
        return self._evaluate(recent, limit)

    def record_attempt(self, user_id: str) -> None:
        with self._lock:
            self._attempts.append((user_id, self.clock()))

    def cleanup_old_attempts(self) -> int:
        with self._lock:
            return self._prune(self._cutoff())

    def _prune(self, cutoff: int) -> int:
        before = len(self._attempts)
        self._attempts = [(uid, ts) for uid, ts in self._attempts if ts >= cutoff]
        return before - len(self._attempts)
