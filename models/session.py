from sqlalchemy import BigInteger, Column, String

from core.database import Base


class SessionRecord(Base):
    __tablename__ = "sessions"

    token = Column(String(64), primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    created_at = Column(BigInteger, nullable=False)
    last_accessed_at = Column(BigInteger, nullable=False)
