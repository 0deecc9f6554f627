from pydantic import BaseModel, Field, constr, field_validator

from schemas.flashcard import FlashcardSet


class GenerateRequest(BaseModel):
    topic: constr(strip_whitespace=True, min_length=1, max_length=200)
    count: int = Field(..., ge=1, le=100)
    user_query: str = ""


class RegenerateRequest(BaseModel):
    flashcard_set: FlashcardSet
    regeneration_prompt: str = ""

    @field_validator("flashcard_set")
    @classmethod
    def _require_cards(cls, value: FlashcardSet) -> FlashcardSet:
        if not value.flashcards:
            raise ValueError("Must provide existing flashcards to regenerate")
        return value


class GenerateResponse(BaseModel):
    flashcard_set: FlashcardSet | None = None
    error: str | None = None
