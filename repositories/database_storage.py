from sqlalchemy import delete, select
from sqlalchemy.orm import sessionmaker

from models.flashcard import FlashcardSetRecord
from repositories.storage import Storage
from schemas.flashcard import Flashcard, FlashcardSet


class DatabaseStorage(Storage):
    """Flashcard sets as documents in the ``flashcard_sets`` table.

    Each set is one row keyed by its id; the cards live in a JSON column.
    Database errors are not caught here.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def save(self, flashcard_set: FlashcardSet) -> None:
        with self.session_factory() as db:
            db.merge(self._to_record(flashcard_set))
            db.commit()

    def get_all(self) -> list[FlashcardSet]:
        stmt = select(FlashcardSetRecord).order_by(FlashcardSetRecord.created_at.desc())
        with self.session_factory() as db:
            return [self._to_model(record) for record in db.execute(stmt).scalars()]

    def get_by_id(self, set_id: str) -> FlashcardSet | None:
        with self.session_factory() as db:
            record = db.get(FlashcardSetRecord, set_id)
            return self._to_model(record) if record else None

    def delete(self, set_id: str) -> None:
        with self.session_factory() as db:
            db.execute(delete(FlashcardSetRecord).where(FlashcardSetRecord.id == set_id))
            db.commit()

    def delete_all_by_user_id(self, user_id: str) -> None:
        with self.session_factory() as db:
            db.execute(delete(FlashcardSetRecord).where(FlashcardSetRecord.user_id == user_id))
            db.commit()

    @staticmethod
    def _to_record(flashcard_set: FlashcardSet) -> FlashcardSetRecord:
        return FlashcardSetRecord(
            id=flashcard_set.id,
            user_id=flashcard_set.user_id,
            topic=flashcard_set.topic,
            flashcards=[card.model_dump() for card in flashcard_set.flashcards],
            created_at=flashcard_set.created_at,
        )

    @staticmethod
    def _to_model(record: FlashcardSetRecord) -> FlashcardSet:
        return FlashcardSet(
            id=record.id,
            user_id=record.user_id,
            topic=record.topic,
            flashcards=[Flashcard.model_validate(card) for card in record.flashcards or []],
            created_at=record.created_at,
        )
