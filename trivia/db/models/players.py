from datetime import datetime
from typing import Optional

from sqlmodel import Field
from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint

from trivia.db.models.base import BaseModelDB


class PlayerRow(BaseModelDB, table=True):
    __tablename__ = "players"
    __table_args__ = (
        # inscription idempotente : un seul joueur par (nom, téléphone, partie)
        UniqueConstraint("name", "phone", "game_id", name="uq_players_name_phone_game"),
    )

    game_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("games.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
    )

    name: str = Field(nullable=False)
    phone: str = Field(nullable=False, max_length=10)

    score: int = Field(default=0, nullable=False)
    correct_answers: int = Field(default=0, nullable=False)
    total_answers: int = Field(default=0, nullable=False)
    average_time: int = Field(default=0, nullable=False)  # secondes
    completed_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime, nullable=True))
