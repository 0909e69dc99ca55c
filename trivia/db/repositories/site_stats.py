from datetime import datetime

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from trivia.db.models.site_stats import MAIN_STATS_ID, SiteStatsRow


class StatsRepository:
    """Implémentation SQL de StatsStore (compteur singleton)."""

    def __init__(self, session: Session):
        self.session = session

    def increment_visitors(self, at: datetime) -> int:
        # UPDATE visitors = visitors + 1 : l'incrément est fait par la base, pas en Python
        stmt = (
            update(SiteStatsRow)
            .where(SiteStatsRow.id == MAIN_STATS_ID)
            .values(visitors=SiteStatsRow.visitors + 1, updated_at=at)
        )
        try:
            result = self.session.execute(stmt)
            if result.rowcount == 0:
                # première visite : création du singleton
                self.session.add(SiteStatsRow(id=MAIN_STATS_ID, visitors=1, updated_at=at))
                self.session.flush()
            count = self.session.exec(
                select(SiteStatsRow.visitors).where(SiteStatsRow.id == MAIN_STATS_ID)
            ).one()
            self.session.commit()
        except IntegrityError:
            # un autre process a créé la ligne entre-temps : on rejoue l'UPDATE
            self.session.rollback()
            return self.increment_visitors(at)
        return int(count)

    def get_visitor_count(self) -> int:
        row = self.session.get(SiteStatsRow, MAIN_STATS_ID)
        return row.visitors if row else 0
