import logging

from fastapi import APIRouter, HTTPException, Response, status
from sqlalchemy.exc import SQLAlchemyError
from redis import RedisError

from core.dependencies import AuthServiceDep, CurrentUser
from schemas.auth import MeOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/me", response_model=MeOut)
async def me(principal: CurrentUser, auth_service: AuthServiceDep):
    user = auth_service.get_user(principal.user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return MeOut(user=user)


@router.post("/logout", status_code=204)
async def logout(principal: CurrentUser, auth_service: AuthServiceDep):
    auth_service.logout(principal.token)
    return Response(status_code=204)


@router.delete("/account", status_code=204)
async def delete_account(principal: CurrentUser, auth_service: AuthServiceDep):
    try:
        auth_service.delete_account(principal.user_id)
    except (SQLAlchemyError, RedisError) as exc:
        logger.error(f"Account deletion failed for user {principal.user_id}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete account"
        ) from exc
    return Response(status_code=204)
