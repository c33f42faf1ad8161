from sqlalchemy import Boolean, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from quizzical.database.base import Base


# ------------------------------
# Question Model
# ------------------------------
class QuestionRecord(Base):
    """
    SQLAlchemy model representing a question.

    `category` holds the category title. It is deliberately not a foreign key:
    the association is by name only.
    """
    __tablename__ = "questions"

    # Store-assigned identity (SERIAL on Postgres, ROWID alias on SQLite)
    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    text: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    # Indexed: every read path filters on it
    category: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<QuestionRecord(id={self.id!r}, category={self.category!r})>"


# ------------------------------
# Choice Model
# ------------------------------
class ChoiceRecord(Base):
    """
    SQLAlchemy model representing one answer option of a question.
    """
    __tablename__ = "choices"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    question_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("questions.id"),
        nullable=False,
        index=True,
    )

    text: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    correct: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<ChoiceRecord(id={self.id!r}, question_id={self.question_id!r}, correct={self.correct!r})>"
