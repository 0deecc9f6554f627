from fastapi import APIRouter, HTTPException, status
from fastapi.responses import JSONResponse

from core.dependencies import CurrentUser, GenerationServiceDep
from schemas.flashcard import FlashcardSet
from schemas.generate import GenerateRequest, GenerateResponse, RegenerateRequest
from schemas.rate_limit import RateLimitError, RateLimitExceeded
from services.generation_service import GenerationService

router = APIRouter(tags=["Generator"])


def _ensure_allowed(svc: GenerationService, user_id: str) -> None:
    if not svc.available:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Flashcard generation is not configured"
        )
    result = svc.check(user_id)
    if isinstance(result, RateLimitExceeded):
        error = RateLimitError(
            message="Rate limit exceeded",
            try_again_at=result.try_again_at,
            number_of_generations=result.count,
        )
        raise HTTPException(status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail=error.model_dump())


def _respond(flashcard_set: FlashcardSet | None, failure: str):
    if flashcard_set is None:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=GenerateResponse(error=failure).model_dump(mode="json"),
        )
    return GenerateResponse(flashcard_set=flashcard_set)


@router.post("/generate", response_model=GenerateResponse)
async def generate(data: GenerateRequest, principal: CurrentUser, svc: GenerationServiceDep):
    _ensure_allowed(svc, principal.user_id)
    flashcard_set = await svc.generate(principal.user_id, data.topic, data.count, data.user_query)
    return _respond(flashcard_set, "Failed to generate flashcards")


@router.post("/regenerate", response_model=GenerateResponse)
async def regenerate(data: RegenerateRequest, principal: CurrentUser, svc: GenerationServiceDep):
    _ensure_allowed(svc, principal.user_id)
    flashcard_set = await svc.regenerate(principal.user_id, data.flashcard_set, data.regeneration_prompt)
    return _respond(flashcard_set, "Failed to regenerate flashcards")
