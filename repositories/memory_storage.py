import threading

from repositories.storage import Storage
from schemas.flashcard import FlashcardSet


class InMemoryStorage(Storage):
    """Process-local storage; a single lock guards the whole map."""

    def __init__(self):
        self._sets: dict[str, FlashcardSet] = {}
        self._lock = threading.Lock()

    def save(self, flashcard_set: FlashcardSet) -> None:
        with self._lock:
            self._sets[flashcard_set.id] = flashcard_set.model_copy(deep=True)

    def get_all(self) -> list[FlashcardSet]:
        with self._lock:
            return [s.model_copy(deep=True) for s in self._sets.values()]

    def get_by_id(self, set_id: str) -> FlashcardSet | None:
        with self._lock:
            stored = self._sets.get(set_id)
            return stored.model_copy(deep=True) if stored else None

    def delete(self, set_id: str) -> None:
        with self._lock:
            self._sets.pop(set_id, None)

    def delete_all_by_user_id(self, user_id: str) -> None:
        with self._lock:
            owned = [set_id for set_id, s in self._sets.items() if s.user_id == user_id]
            for set_id in owned:
                del self._sets[set_id]
