import logging

from repositories.auth_repo import AuthRepository
from schemas.auth import AuthenticatedUser, User, UserSession
from services.flashcard_service import FlashcardService

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, auth_repo: AuthRepository, flashcard_service: FlashcardService):
        self.repo = auth_repo
        self.flashcards = flashcard_service

    def sign_in(self, identity: User) -> UserSession:
        """Find or create the user for an externally verified identity and open a session.

        This is the last step of a Google or Apple OAuth callback. The callback
        route exchanges the provider code, builds ``identity`` with
        ``auth_id="google-<sub>"`` or ``"apple-<sub>"`` and returns the new
        session token to the client. No such route ships with this service, so
        a deployment adds one in ``routers/auth.py`` that calls this method.
        """
        user = self.repo.get_user_by_auth_id(identity.auth_id)
        if user is None:
            user = self.repo.create_user(identity)
            logger.info(f"Created user {user.id} for {user.auth_id}")

        session = self.repo.create_session(user.id)
        logger.info(f"Opened session for user {user.id}")
        return session

    def authenticate(self, token: str) -> AuthenticatedUser | None:
        session = self.repo.get_session(token)
        if session is None or session.is_expired():
            return None
        self.repo.update_session_access(token)
        return AuthenticatedUser(user_id=session.user_id, token=token)

    def logout(self, token: str) -> None:
        self.repo.invalidate_session(token)

    def get_user(self, user_id: str) -> User | None:
        return self.repo.get_user_by_id(user_id)

    def delete_account(self, user_id: str) -> None:
        self.flashcards.delete_all_for(user_id)
        self.repo.delete_user_account(user_id)
        logger.info(f"Deleted account {user_id}")
