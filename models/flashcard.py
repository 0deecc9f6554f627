from sqlalchemy import JSON, BigInteger, Column, String
from core.database import Base


class FlashcardSetRecord(Base):
    __tablename__ = "flashcard_sets"

    id = Column(String(64), primary_key=True)
    user_id = Column(String(64), nullable=True, index=True)
    topic = Column(String(255), nullable=False, default="")
    flashcards = Column(JSON, nullable=False, default=list)
    created_at = Column(BigInteger, nullable=False, index=True)
