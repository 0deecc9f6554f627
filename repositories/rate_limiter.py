from abc import ABC, abstractmethod
from typing import Callable

from core.security import now_ms
from schemas.rate_limit import RateLimitExceeded, RateLimitOk, RateLimitResult

DEFAULT_RATE_LIMIT = 20
DEFAULT_WINDOW_MS = 24 * 60 * 60 * 1000


class InvalidRateLimitError(ValueError):
    pass


class RateLimiter(ABC):
    """Per-user sliding-window limit on generation attempts.

    Attempts are only counted when ``record_attempt`` is called; checking never
    records anything.
    """

    def __init__(
        self,
        default_limit: int = DEFAULT_RATE_LIMIT,
        window_ms: int = DEFAULT_WINDOW_MS,
        clock: Callable[[], int] = now_ms,
    ):
        self.default_limit = default_limit
        self.window_ms = window_ms
        self.clock = clock

    @abstractmethod
    def set_user_limit(self, user_id: str, limit: int) -> None:
        ...

    @abstractmethod
    def get_user_limit(self, user_id: str) -> int:
        ...

    @abstractmethod
    def check_rate_limit(self, user_id: str) -> RateLimitResult:
        ...

    @abstractmethod
    def record_attempt(self, user_id: str) -> None:
        ...

    @abstractmethod
    def cleanup_old_attempts(self) -> int:
        """Drop attempts older than the window; return how many were removed."""

    def _cutoff(self) -> int:
        return self.clock() - self.window_ms

    def _evaluate(self, timestamps: list[int], limit: int) -> RateLimitResult:
        # an empty window is never exceeded, even with a limit of zero
        if timestamps and len(timestamps) >= limit:
            return RateLimitExceeded(try_again_at=min(timestamps) + self.window_ms, count=len(timestamps))
        return RateLimitOk()

    @staticmethod
    def _validate_limit(limit: int) -> None:
        if limit < 0:
            raise InvalidRateLimitError("Rate limit must not be negative")
