from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import select, func

from trivia.db.mappers import to_player, to_player_answer
from trivia.db.models.player_answers import PlayerAnswerRow
from trivia.db.models.players import PlayerRow
from trivia.db.repositories.base import BaseRepository
from trivia.domain.errors import DuplicateAnswerError, DuplicatePlayerError
from trivia.domain.models import Player, PlayerAnswer, ScoreSummary


class PlayerRepository(BaseRepository[PlayerRow]):
    """Implémentation SQL de PlayerStore (joueurs + réponses)."""

    model = PlayerRow

    # ---------- Joueurs ----------

    def find_player(self, name: str, phone: str, game_id: int) -> Optional[Player]:
        stmt = select(PlayerRow).where(
            PlayerRow.name == name,
            PlayerRow.phone == phone,
            PlayerRow.game_id == game_id,
        )
        row = self.session.exec(stmt).first()
        return to_player(row) if row else None

    def add_player(self, *, name: str, phone: str, game_id: int) -> Player:
        try:
            row = self._create(name=name, phone=phone, game_id=game_id)
        except IntegrityError as exc:
            # la contrainte uq_players_name_phone_game a gagné la course
            self.session.rollback()
            raise DuplicatePlayerError("PLAYER_ALREADY_REGISTERED") from exc
        return to_player(row)

    def get_player(self, player_id: int) -> Optional[Player]:
        row = self._get(player_id)
        return to_player(row) if row else None

    def list_players_by_game(self, game_id: int) -> List[Player]:
        stmt = (
            select(PlayerRow)
            .where(PlayerRow.game_id == game_id)
            .order_by(PlayerRow.score.desc(), PlayerRow.id.asc())
        )
        return [to_player(r) for r in self.session.exec(stmt).all()]

    def list_players(self) -> List[Player]:
        return [to_player(r) for r in self._all()]

    def update_score(self, player_id: int, summary: ScoreSummary) -> Optional[Player]:
        row = self._get(player_id)
        if not row:
            return None
        return to_player(self._update(row, **summary.model_dump()))

    def mark_completed(self, player_id: int, completed_at: datetime) -> Optional[Player]:
        row = self._get(player_id)
        if not row:
            return None
        return to_player(self._update(row, completed_at=completed_at))

    def finalize_player(
        self, player_id: int, summary: ScoreSummary, completed_at: datetime
    ) -> Optional[Player]:
        row = self._get(player_id)
        if not row:
            return None
        # un seul UPDATE : pas d'état intermédiaire "scoré mais pas terminé"
        return to_player(self._update(row, completed_at=completed_at, **summary.model_dump()))

    def count_games_with_completed_player(self) -> int:
        stmt = (
            select(func.count(func.distinct(PlayerRow.game_id)))
            .select_from(PlayerRow)
            .where(PlayerRow.completed_at.is_not(None))
        )
        return int(self.session.exec(stmt).one())

    # ---------- Réponses ----------

    def add_answer(
        self,
        *,
        player_id: int,
        question_id: int,
        selected_answer: int,
        is_correct: bool,
        time_spent: float,
        points: int,
    ) -> PlayerAnswer:
        row = PlayerAnswerRow(
            player_id=player_id,
            question_id=question_id,
            selected_answer=selected_answer,
            is_correct=is_correct,
            time_spent=time_spent,
            points=points,
        )
        self.session.add(row)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise DuplicateAnswerError("QUESTION_ALREADY_ANSWERED") from exc
        self.session.refresh(row)
        return to_player_answer(row)

    def find_answer(self, player_id: int, question_id: int) -> Optional[PlayerAnswer]:
        stmt = select(PlayerAnswerRow).where(
            PlayerAnswerRow.player_id == player_id,
            PlayerAnswerRow.question_id == question_id,
        )
        row = self.session.exec(stmt).first()
        return to_player_answer(row) if row else None

    def list_answers(self, player_id: int) -> List[PlayerAnswer]:
        stmt = (
            select(PlayerAnswerRow)
            .where(PlayerAnswerRow.player_id == player_id)
            .order_by(PlayerAnswerRow.id.asc())
        )
        return [to_player_answer(r) for r in self.session.exec(stmt).all()]
