from sqlalchemy import BigInteger, Column, Index, Integer, String

from core.database import Base


class RateLimitAttemptRecord(Base):
    __tablename__ = "rate_limit_attempts"
    __table_args__ = (
        Index("ix_rate_limit_attempts_user_timestamp", "user_id", "timestamp"),
    )

    # "<user_id>_<timestamp>"
    id = Column(String(128), primary_key=True)
    user_id = Column(String(64), nullable=False)
    timestamp = Column(BigInteger, nullable=False, index=True)


class RateLimitConfigRecord(Base):
    __tablename__ = "rate_limit_configs"

    user_id = Column(String(64), primary_key=True)
    custom_limit = Column(Integer, nullable=False)
