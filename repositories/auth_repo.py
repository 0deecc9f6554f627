from abc import ABC, abstractmethod

from schemas.auth import User, UserSession


class AuthRepository(ABC):
    """Sessions and users.

    Missing records come back as ``None``; invalidating or deleting something
    that does not exist is a no-op.
    """

    @abstractmethod
    def create_session(self, user_id: str) -> UserSession:
        ...

    @abstractmethod
    def get_session(self, token: str) -> UserSession | None:
        """Return the session for ``token`` unless it is missing or expired."""

    @abstractmethod
    def invalidate_session(self, token: str) -> None:
        ...

    @abstractmethod
    def update_session_access(self, token: str) -> None:
        """Bump ``last_accessed_at`` on an existing session."""

    @abstractmethod
    def get_user_by_auth_id(self, auth_id: str) -> User | None:
        ...

    @abstractmethod
    def get_user_by_id(self, user_id: str) -> User | None:
        ...

    @abstractmethod
    def create_user(self, user: User) -> User:
        """Store the user together with its auth id index entry."""

    @abstractmethod
    def delete_user_account(self, user_id: str) -> None:
        """Delete the user's sessions, then the auth id mapping, then the user.

        Flashcard sets are not touched; callers remove them through Storage
        beforehand.
        """
