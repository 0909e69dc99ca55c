from sqlmodel import Field
from sqlalchemy import Column, ForeignKey, Integer, UniqueConstraint

from trivia.db.models.base import BaseModelDB


class PlayerAnswerRow(BaseModelDB, table=True):
    __tablename__ = "player_answers"
    __table_args__ = (
        UniqueConstraint("player_id", "question_id", name="uq_player_answers_player_question"),
    )

    player_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("players.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
    )
    question_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("questions.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
    )

    selected_answer: int = Field(nullable=False)  # -1 = pas de réponse
    is_correct: bool = Field(nullable=False)
    time_spent: float = Field(nullable=False, ge=0)  # secondes
    points: int = Field(default=0, nullable=False, ge=0)
