from sqlalchemy import BigInteger, Column, String
from core.database import Base


class UserRecord(Base):
    __tablename__ = "users"

    id = Column(String(64), primary_key=True)
    auth_id = Column(String(255), nullable=False, index=True)
    email = Column(String(255), nullable=True)
    name = Column(String(255), nullable=True)
    picture = Column(String(1024), nullable=True)
    created_at = Column(BigInteger, nullable=False)


class AuthIdMapping(Base):
    """Secondary index: provider auth id -> internal user id."""

    __tablename__ = "users_by_auth_id"

    auth_id = Column(String(255), primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
