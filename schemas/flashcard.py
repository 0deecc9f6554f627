from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, computed_field, constr

from core.security import now_ms


def _new_id() -> str:
    return str(uuid4())


class Flashcard(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=_new_id)
    set_id: str = ""
    front: str = ""
    back: str = ""
    created_at: int = Field(default_factory=now_ms)


class FlashcardSet(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=_new_id)
    user_id: str | None = None
    topic: str = ""
    flashcards: list[Flashcard] = Field(default_factory=list)
    created_at: int = Field(default_factory=now_ms)

    @computed_field
    @property
    def card_count(self) -> int:
        return len(self.flashcards)


class FlashcardRaw(BaseModel):
    """A generated card before ids and timestamps are assigned."""

    front: constr(strip_whitespace=True, min_length=1)
    back: constr(strip_whitespace=True, min_length=1)


class FlashcardSetRaw(BaseModel):
    topic: str
    flashcards: list[FlashcardRaw]

    def to_flashcard_set(self, *, user_id: str | None = None) -> FlashcardSet:
        flashcard_set = FlashcardSet(user_id=user_id, topic=self.topic)
        flashcard_set.flashcards = [
            Flashcard(set_id=flashcard_set.id, front=card.front, back=card.back)
            for card in self.flashcards
        ]
        return flashcard_set
