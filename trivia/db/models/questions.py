from typing import Any, Dict, List, Optional

from sqlmodel import Field
from sqlalchemy import JSON, Column, ForeignKey, Integer

from .base import BaseModelDB


class QuestionRow(BaseModelDB, table=True):
    """
    Question d'une partie, dans l'ordre canonique (order = position 1-based).
    Les options sont stockées en JSON : [{"text": ..., "image_url": ...}, ...]
    """

    __tablename__ = "questions"

    game_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("games.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
    )

    text: str = Field(nullable=False)
    image_url: Optional[str] = Field(default=None)
    options: List[Dict[str, Any]] = Field(sa_column=Column(JSON, nullable=False))
    correct_answer: int = Field(nullable=False)
    order: int = Field(nullable=False)
