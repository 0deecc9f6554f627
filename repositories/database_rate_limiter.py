from sqlalchemy import delete, select
from sqlalchemy.orm import sessionmaker

from models.rate_limit import RateLimitAttemptRecord, RateLimitConfigRecord
from repositories.caches import RateLimitCache
from repositories.rate_limiter import RateLimiter
from schemas.rate_limit import RateLimitResult


class DatabaseRateLimiter(RateLimiter):
    """Attempts and per-user limits as database rows.

    Attempt ids are ``<user_id>_<timestamp>``, so two attempts by the same user
    in the same millisecond collapse into one row.
    """

    def __init__(self, session_factory: sessionmaker, cache: RateLimitCache | None = None, **kwargs):
        super().__init__(**kwargs)
        self.session_factory = session_factory
        self.cache = cache

    def set_user_limit(self, user_id: str, limit: int) -> None:
        self._validate_limit(limit)
        with self.session_factory() as db:
            db.merge(RateLimitConfigRecord(user_id=user_id, custom_limit=limit))
            db.commit()

        if self.cache:
            self.cache.invalidate(user_id)

    def get_user_limit(self, user_id: str) -> int:
        with self.session_factory() as db:
            config = db.get(RateLimitConfigRecord, user_id)
            return config.custom_limit if config else self.default_limit

    def check_rate_limit(self, user_id: str) -> RateLimitResult:
        if self.cache:
            cached = self.cache.get(user_id)
            if cached is not None:
                return cached

        stmt = select(RateLimitAttemptRecord.timestamp).where(
            RateLimitAttemptRecord.user_id == user_id,
            RateLimitAttemptRecord.timestamp >= self._cutoff(),
        )
        with self.session_factory() as db:
            timestamps = list(db.execute(stmt).scalars())

        result = self._evaluate(timestamps, self.get_user_limit(user_id))
        if self.cache:
            self.cache.put(user_id, result)
        return result

    def record_attempt(self, user_id: str) -> None:
        timestamp = self.clock()
        with self.session_factory() as db:
            db.merge(RateLimitAttemptRecord(id=f"{user_id}_{timestamp}", user_id=user_id, timestamp=timestamp))
            db.commit()

        if self.cache:
            self.cache.invalidate(user_id)

    def cleanup_old_attempts(self) -> int:
        with self.session_factory() as db:
            result = db.execute(delete(RateLimitAttemptRecord).where(RateLimitAttemptRecord.timestamp < self._cutoff()))
            db.commit()
        return result.rowcount or 0
