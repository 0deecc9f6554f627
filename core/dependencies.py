from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from schemas.auth import AuthenticatedUser
from services.auth_services import AuthService
from services.flashcard_service import FlashcardService
from services.generation_service import GenerationService

bearer_scheme = HTTPBearer(auto_error=False)


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_flashcard_service(request: Request) -> FlashcardService:
    return request.app.state.flashcard_service


def get_generation_service(request: Request) -> GenerationService:
    return request.app.state.generation_service


def current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthenticatedUser:
    principal = auth_service.authenticate(credentials.credentials) if credentials else None
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return principal


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
FlashcardServiceDep = Annotated[FlashcardService, Depends(get_flashcard_service)]
GenerationServiceDep = Annotated[GenerationService, Depends(get_generation_service)]
CurrentUser = Annotated[AuthenticatedUser, Depends(current_user)]
