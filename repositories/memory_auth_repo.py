import threading
from typing import Callable

from core.security import generate_session_token, now_ms
from repositories.auth_repo import AuthRepository
from schemas.auth import User, UserSession


class InMemoryAuthRepository(AuthRepository):
    """Sessions and users held in process memory; lost on restart."""

    def __init__(self, clock: Callable[[], int] = now_ms):
        self.clock = clock
        self._sessions: dict[str, UserSession] = {}
        self._users: dict[str, User] = {}
        self._auth_id_to_user_id: dict[str, str] = {}
        self._lock = threading.Lock()

    def create_session(self, user_id: str) -> UserSession:
        now = self.clock()
        session = UserSession(token=generate_session_token(), user_id=user_id, created_at=now, last_accessed_at=now)
        with self._lock:
            self._sessions[session.token] = session
        return session

    def get_session(self, token: str) -> UserSession | None:
        with self._lock:
            session = self._sessions.get(token)
            if session is not None and session.is_expired():
                del self._sessions[token]
                return None
            return session

    def invalidate_session(self, token: str) -> None:
        with self._lock:
            self._sessions.pop(token, None)

    def update_session_access(self, token: str) -> None:
        with self._lock:
            session = self._sessions.get(token)
            if session is not None:
                self._sessions[token] = session.touched(self.clock())

    def get_user_by_auth_id(self, auth_id: str) -> User | None:
        with self._lock:
            user_id = self._auth_id_to_user_id.get(auth_id)
            return self._users.get(user_id) if user_id else None

    def get_user_by_id(self, user_id: str) -> User | None:
        with self._lock:
            return self._users.get(user_id)

    def create_user(self, user: User) -> User:
        with self._lock:
            self._users[user.id] = user
            self._auth_id_to_user_id[user.auth_id] = user.id
        return user

    def delete_user_account(self, user_id: str) -> None:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return

            for token in [t for t, s in self._sessions.items() if s.user_id == user_id]:
                del self._sessions[token]
            self._auth_id_to_user_id.pop(user.auth_id, None)
            del self._users[user_id]
