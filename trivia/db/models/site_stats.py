from datetime import datetime

from sqlalchemy import Column, DateTime
from sqlmodel import SQLModel, Field

from trivia.utils.clock import utcnow

MAIN_STATS_ID = "main"


class SiteStatsRow(SQLModel, table=True):
    """Enregistrement singleton (id = "main") du compteur de visiteurs."""

    __tablename__ = "site_stats"

    id: str = Field(default=MAIN_STATS_ID, primary_key=True)
    visitors: int = Field(default=0, nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime, nullable=False))
