import logging
from typing import Callable

from sqlalchemy import delete, select, update
from sqlalchemy.orm import sessionmaker

from core.security import generate_session_token, now_ms
from models.session import SessionRecord
from models.user import AuthIdMapping, UserRecord
from repositories.auth_repo import AuthRepository
from repositories.caches import SessionCache
from schemas.auth import User, UserSession

logger = logging.getLogger(__name__)


class DatabaseAuthRepository(AuthRepository):
    """Users, the auth id index and sessions as database rows.

    Sessions are read on every authenticated request, so an optional
    ``SessionCache`` fronts them. The table is the source of truth: rows are
    deleted before their cache entries, and access updates only touch rows that
    still exist, so a deleted session is never written back. Multi-row deletes
    are committed step by step and are not transactional as a whole.
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        cache: SessionCache | None = None,
        clock: Callable[[], int] = now_ms,
    ):
        self.session_factory = session_factory
        self.cache = cache
        self.clock = clock

    def create_session(self, user_id: str) -> UserSession:
        now = self.clock()
        session = UserSession(token=generate_session_token(), user_id=user_id, created_at=now, last_accessed_at=now)
        with self.session_factory() as db:
            db.add(self._session_record(session))
            db.commit()

        if self.cache:
            self.cache.put(session)
        return session

    def get_session(self, token: str) -> UserSession | None:
        if self.cache:
            cached = self.cache.get(token)
            if cached is not None:
                if cached.is_expired():
                    self.invalidate_session(token)
                    return None
                return cached

        with self.session_factory() as db:
            record = db.get(SessionRecord, token)
            if record is None:
                return None
            session = UserSession.model_validate(record)

        if session.is_expired():
            self.invalidate_session(token)
            return None

        if self.cache:
            self.cache.put(session)
        return session

    def invalidate_session(self, token: str) -> None:
        with self.session_factory() as db:
            db.execute(delete(SessionRecord).where(SessionRecord.token == token))
            db.commit()

        if self.cache:
            self.cache.invalidate(token)

    def update_session_access(self, token: str) -> None:
        session = self.get_session(token)
        if session is None:
            return

        updated = session.touched(self.clock())
        stmt = (
            update(SessionRecord)
            .where(SessionRecord.token == token)
            .values(last_accessed_at=updated.last_accessed_at)
        )
        with self.session_factory() as db:
            result = db.execute(stmt)
            db.commit()

        if result.rowcount != 1:
            # row deleted since the read; drop whatever the read cached
            if self.cache:
                self.cache.invalidate(token)
            return

        if self.cache:
            self.cache.put(updated)

    def get_user_by_auth_id(self, auth_id: str) -> User | None:
        with self.session_factory() as db:
            mapping = db.get(AuthIdMapping, auth_id)
        if mapping is None:
            return None
        return self.get_user_by_id(mapping.user_id)

    def get_user_by_id(self, user_id: str) -> User | None:
        with self.session_factory() as db:
            record = db.get(UserRecord, user_id)
            return User.model_validate(record) if record else None

    def create_user(self, user: User) -> User:
        # user row first, index second; a reader can briefly see the user without its index entry
        with self.session_factory() as db:
            db.merge(
                UserRecord(
                    id=user.id,
                    auth_id=user.auth_id,
                    email=user.email,
                    name=user.name,
                    picture=user.picture,
                    created_at=user.created_at,
                )
            )
            db.commit()

        with self.session_factory() as db:
            db.merge(AuthIdMapping(auth_id=user.auth_id, user_id=user.id))
            db.commit()
        return user

    def delete_user_account(self, user_id: str) -> None:
        user = self.get_user_by_id(user_id)
        if user is None:
            return

        with self.session_factory() as db:
            tokens = list(db.execute(select(SessionRecord.token).where(SessionRecord.user_id == user_id)).scalars())
            db.execute(delete(SessionRecord).where(SessionRecord.user_id == user_id))
            db.commit()

        if self.cache:
            for token in tokens:
                self.cache.invalidate(token)

        with self.session_factory() as db:
            db.execute(delete(AuthIdMapping).where(AuthIdMapping.auth_id == user.auth_id))
            db.commit()

        with self.session_factory() as db:
            db.execute(delete(UserRecord).where(UserRecord.id == user_id))
            db.commit()

        logger.info(f"Deleted user {user_id} and {len(tokens)} session(s)")

    @staticmethod
    def _session_record(session: UserSession) -> SessionRecord:
        return SessionRecord(
            token=session.token,
            user_id=session.user_id,
            created_at=session.created_at,
            last_accessed_at=session.last_accessed_at,
        )
