from models.flashcard import FlashcardSetRecord
from models.rate_limit import RateLimitAttemptRecord, RateLimitConfigRecord
from models.session import SessionRecord
from models.user import AuthIdMapping, UserRecord

__all__ = [
    "AuthIdMapping",
    "FlashcardSetRecord",
    "RateLimitAttemptRecord",
    "RateLimitConfigRecord",
    "SessionRecord",
    "UserRecord",
]
