from datetime import datetime

from sqlalchemy import Column, DateTime
from sqlmodel import Field

from trivia.db.models.base import BaseModelDB
from trivia.utils.clock import utcnow


class GameRow(BaseModelDB, table=True):
    __tablename__ = "games"

    # code saisi par les joueurs pour rejoindre
    code: str = Field(index=True, nullable=False, unique=True, max_length=6)
    name: str = Field(nullable=False)
    question_duration_seconds: int = Field(default=20, nullable=False)
    # UTC naïf : DateTime SQLAlchemy simple, sans exigence de fuseau
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime, index=True, nullable=False),
    )
    is_active: bool = Field(default=True, nullable=False)
