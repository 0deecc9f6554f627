from uuid import uuid4

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from core.security import now_ms


class User(BaseModel):
    """A user known to the service.

    ``auth_id`` is the provider-namespaced subject, e.g. ``google-<sub>`` or
    ``apple-<sub>``. Exactly one user exists per ``auth_id``.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    auth_id: str
    email: EmailStr | None = None
    name: str | None = None
    picture: str | None = None
    created_at: int = Field(default_factory=now_ms)


class UserSession(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    token: str
    user_id: str
    created_at: int = Field(default_factory=now_ms)
    last_accessed_at: int = Field(default_factory=now_ms)

    def is_expired(self) -> bool:
        # sessions do not expire by age
        return False

    def touched(self, at: int | None = None) -> "UserSession":
        return self.model_copy(update={"last_accessed_at": now_ms() if at is None else at})


class AuthenticatedUser(BaseModel):
    user_id: str
    token: str


class MeOut(BaseModel):
    user: User
