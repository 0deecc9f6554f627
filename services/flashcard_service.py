import random

from repositories.storage import Storage
from schemas.flashcard import Flashcard, FlashcardSet


class FlashcardService:
    """Flashcard sets on top of a Storage backend.

    Routes only use the ``*_for`` methods, which treat a set owned by someone
    else exactly like a missing one.
    """

    def __init__(self, storage: Storage):
        self.storage = storage

    def save_flashcard_set(self, flashcard_set: FlashcardSet) -> None:
        self.storage.save(flashcard_set)

    def get_all_flashcard_sets(self) -> list[FlashcardSet]:
        return sorted(self.storage.get_all(), key=lambda s: s.created_at, reverse=True)

    def get_flashcard_set(self, set_id: str) -> FlashcardSet | None:
        return self.storage.get_by_id(set_id)

    def delete_flashcard_set(self, set_id: str) -> None:
        self.storage.delete(set_id)

    def get_randomized_flashcards(self, set_id: str) -> list[Flashcard] | None:
        flashcard_set = self.storage.get_by_id(set_id)
        if flashcard_set is None:
            return None
        return self._shuffled(flashcard_set.flashcards)

    def get_all_for(self, user_id: str) -> list[FlashcardSet]:
        return [s for s in self.get_all_flashcard_sets() if s.user_id == user_id]

    def get_by_id_for(self, set_id: str, user_id: str) -> FlashcardSet | None:
        flashcard_set = self.storage.get_by_id(set_id)
        if flashcard_set is None or flashcard_set.user_id != user_id:
            return None
        return flashcard_set

    def save_for(self, flashcard_set: FlashcardSet, user_id: str) -> FlashcardSet | None:
        """Save the set as ``user_id``'s; ``None`` if its id belongs to another user's set."""
        stored = self.storage.get_by_id(flashcard_set.id)
        if stored is not None and stored.user_id != user_id:
            return None
        owned = flashcard_set.model_copy(update={"user_id": user_id})
        self.storage.save(owned)
        return owned

    def delete_for(self, set_id: str, user_id: str) -> None:
        if self.get_by_id_for(set_id, user_id) is not None:
            self.storage.delete(set_id)

    def get_randomized_for(self, set_id: str, user_id: str) -> list[Flashcard] | None:
        flashcard_set = self.get_by_id_for(set_id, user_id)
        if flashcard_set is None:
            return None
        return self._shuffled(flashcard_set.flashcards)

    def delete_all_for(self, user_id: str) -> None:
        self.storage.delete_all_by_user_id(user_id)

    @staticmethod
    def _shuffled(cards: list[Flashcard]) -> list[Flashcard]:
        cards = list(cards)
        random.shuffle(cards)
        return cards
