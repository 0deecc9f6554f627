from fastapi import APIRouter, HTTPException, Response

from core.dependencies import CurrentUser, FlashcardServiceDep
from schemas.flashcard import Flashcard, FlashcardSet

router = APIRouter(prefix="/flashcards", tags=["Flashcard"])


@router.get(
    "/sets",
    response_model=list[FlashcardSet],
)
async def list_sets(principal: CurrentUser, svc: FlashcardServiceDep):
    return svc.get_all_for(principal.user_id)


@router.post(
    "/sets",
    response_model=FlashcardSet,
    status_code=201,
)
async def create_set(data: FlashcardSet, principal: CurrentUser, svc: FlashcardServiceDep):
    flashcard_set = svc.save_for(data, principal.user_id)
    if flashcard_set is None:
        raise HTTPException(status_code=404, detail="Flashcard set not found")
    return flashcard_set


@router.put(
    "/sets",
    response_model=FlashcardSet,
)
async def update_set(data: FlashcardSet, principal: CurrentUser, svc: FlashcardServiceDep):
    if svc.get_by_id_for(data.id, principal.user_id) is None:
        raise HTTPException(status_code=404, detail="Flashcard set not found")
    flashcard_set = svc.save_for(data, principal.user_id)
    if flashcard_set is None:
        raise HTTPException(status_code=404, detail="Flashcard set not found")
    return flashcard_set


@router.get(
    "/sets/{set_id}",
    response_model=FlashcardSet,
)
async def get_set(set_id: str, principal: CurrentUser, svc: FlashcardServiceDep):
    flashcard_set = svc.get_by_id_for(set_id, principal.user_id)
    if flashcard_set is None:
        raise HTTPException(status_code=404, detail="Flashcard set not found")
    return flashcard_set


@router.delete(
    "/sets/{set_id}",
    status_code=204,
)
async def delete_set(set_id: str, principal: CurrentUser, svc: FlashcardServiceDep):
    svc.delete_for(set_id, principal.user_id)
    return Response(status_code=204)


@router.get(
    "/sets/{set_id}/randomized",
    response_model=list[Flashcard],
)
async def get_randomized(set_id: str, principal: CurrentUser, svc: FlashcardServiceDep):
    cards = svc.get_randomized_for(set_id, principal.user_id)
    if cards is None:
        raise HTTPException(status_code=404, detail="Flashcard set not found")
    return cards
