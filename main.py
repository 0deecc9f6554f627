import asyncio
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from redis import RedisError
from sqlalchemy.exc import SQLAlchemyError

from core.config import Settings, settings
from core.factory import Backends, build_backends, build_generator
from repositories.rate_limiter import InvalidRateLimitError, RateLimiter
from routers import (
    auth as auth_router,
    flashcard as flashcard_router,
    generator as generator_router,
)
from schemas.common import ErrorResponse
from services.auth_services import AuthService
from services.flashcard_service import FlashcardService
from services.generation_service import FlashcardGenerator, GenerationService

API_PREFIX = "/api/v1"

logger = logging.getLogger(__name__)


async def cleanup_task(rate_limiter: RateLimiter, interval_seconds: int):
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            removed = await asyncio.to_thread(rate_limiter.cleanup_old_attempts)
            logger.info(f"Removed {removed} expired rate limit attempt(s)")
        except Exception:
            logger.exception("Rate limit cleanup failed")


def create_app(
    app_settings: Settings = settings,
    backends: Backends | None = None,
    generator: FlashcardGenerator | None = None,
) -> FastAPI:
    logging.basicConfig(
        level=app_settings.LOG_LEVEL.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        stores = backends or build_backends(app_settings)
        flashcard_service = FlashcardService(stores.storage)
        app.state.flashcard_service = flashcard_service
        app.state.auth_service = AuthService(stores.auth_repo, flashcard_service)
        app.state.generation_service = GenerationService(
            generator if generator is not None else build_generator(app_settings),
            stores.rate_limiter,
        )

        task = asyncio.create_task(
            cleanup_task(stores.rate_limiter, app_settings.RATE_LIMIT_CLEANUP_INTERVAL_SECONDS)
        )
        logger.info(f"{app_settings.APP_NAME} started")
        yield
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        if stores.engine is not None:
            stores.engine.dispose()
        logger.info(f"{app_settings.APP_NAME} stopped")

    app = FastAPI(title=app_settings.APP_NAME, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # stored documents that no longer validate count as storage errors too
    @app.exception_handler(SQLAlchemyError)
    @app.exception_handler(RedisError)
    @app.exception_handler(ValidationError)
    async def storage_error_handler(request: Request, exc: Exception):
        logger.error(f"Storage error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(message="Storage error", code="STORAGE_ERROR").model_dump(),
        )

    @app.exception_handler(InvalidRateLimitError)
    async def invalid_limit_handler(request: Request, exc: InvalidRateLimitError):
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(message=str(exc), code="BAD_REQUEST").model_dump(),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(message="Internal server error", code="INTERNAL_ERROR").model_dump(),
        )

    app.include_router(auth_router.router, prefix=API_PREFIX)
    app.include_router(flashcard_router.router, prefix=API_PREFIX)
    app.include_router(generator_router.router, prefix=API_PREFIX)

    @app.get(f"{API_PREFIX}/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run("main:app", reload=True, host="127.0.0.1", port=8000)
