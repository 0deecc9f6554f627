from abc import ABC, abstractmethod

from schemas.flashcard import FlashcardSet


class Storage(ABC):
    """Key-value persistence for flashcard sets, keyed by set id."""

    @abstractmethod
    def save(self, flashcard_set: FlashcardSet) -> None:
        """Insert or overwrite the set stored under ``flashcard_set.id``."""

    @abstractmethod
    def get_all(self) -> list[FlashcardSet]:
        """Every stored set, in no particular order."""

    @abstractmethod
    def get_by_id(self, set_id: str) -> FlashcardSet | None:
        ...

    @abstractmethod
    def delete(self, set_id: str) -> None:
        """Remove the set; missing ids are ignored."""

    @abstractmethod
    def delete_all_by_user_id(self, user_id: str) -> None:
        """Remove every set owned by ``user_id``. Used for account deletion."""
