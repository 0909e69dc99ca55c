from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from trivia.db.mappers import options_to_json, to_game, to_question
from trivia.db.models.games import GameRow
from trivia.db.models.player_answers import PlayerAnswerRow
from trivia.db.models.players import PlayerRow
from trivia.db.models.questions import QuestionRow
from trivia.db.repositories.base import BaseRepository
from trivia.domain.errors import ConflictError
from trivia.domain.models import Game, NewQuestion, Question


class GameRepository(BaseRepository[GameRow]):
    """Implémentation SQL de GameStore."""

    model = GameRow

    def code_exists(self, code: str) -> bool:
        stmt = select(GameRow.id).where(GameRow.code == code)
        return self.session.exec(stmt).first() is not None

    def add_game(
        self,
        *,
        code: str,
        name: str,
        question_duration_seconds: int,
        created_at: datetime,
        questions: Sequence[NewQuestion],
    ) -> Game:
        # Transaction globale : la partie n'est visible qu'avec toutes ses questions
        try:
            game = self._create(
                commit=False,
                code=code,
                name=name,
                question_duration_seconds=question_duration_seconds,
                created_at=created_at,
                is_active=True,
            )
            for q in questions:
                self.session.add(
                    QuestionRow(
                        game_id=game.id,
                        text=q.text,
                        image_url=q.image_url,
                        options=options_to_json(q.options),
                        correct_answer=q.correct_answer,
                        order=q.order,
                    )
                )
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ConflictError("GAME_CODE_TAKEN") from exc
        except Exception:
            self.session.rollback()
            raise

        self.session.refresh(game)
        return to_game(game)

    def get_game(self, game_id: int) -> Optional[Game]:
        row = self._get(game_id)
        return to_game(row) if row else None

    def get_game_by_code(self, code: str) -> Optional[Game]:
        stmt = select(GameRow).where(GameRow.code == code)
        row = self.session.exec(stmt).first()
        return to_game(row) if row else None

    def list_games(self) -> List[Game]:
        stmt = select(GameRow).order_by(GameRow.created_at.desc(), GameRow.id.desc())
        return [to_game(r) for r in self.session.exec(stmt).all()]

    def list_games_created_before(self, cutoff: datetime) -> List[Game]:
        stmt = (
            select(GameRow)
            .where(GameRow.created_at < cutoff)
            .order_by(GameRow.created_at.asc(), GameRow.id.asc())
        )
        return [to_game(r) for r in self.session.exec(stmt).all()]

    def list_questions(self, game_id: int) -> List[Question]:
        stmt = (
            select(QuestionRow)
            .where(QuestionRow.game_id == game_id)
            .order_by(QuestionRow.order.asc())
        )
        return [to_question(r) for r in self.session.exec(stmt).all()]

    def get_question(self, question_id: int) -> Optional[Question]:
        row = self.session.get(QuestionRow, question_id)
        return to_question(row) if row else None

    def delete_game(self, game_id: int) -> bool:
        game = self._get(game_id)
        if not game:
            return False

        try:
            player_ids = self.session.exec(
                select(PlayerRow.id).where(PlayerRow.game_id == game_id)
            ).all()
            question_ids = self.session.exec(
                select(QuestionRow.id).where(QuestionRow.game_id == game_id)
            ).all()

            # 1) réponses (des joueurs de la partie, ou sur ses questions)
            if player_ids or question_ids:
                answers = self.session.exec(
                    select(PlayerAnswerRow).where(
                        PlayerAnswerRow.player_id.in_(player_ids)
                        | PlayerAnswerRow.question_id.in_(question_ids)
                    )
                ).all()
                for a in answers:
                    self.session.delete(a)
                self.session.flush()

            # 2) joueurs
            for p in self.session.exec(select(PlayerRow).where(PlayerRow.game_id == game_id)).all():
                self.session.delete(p)
            self.session.flush()

            # 3) questions
            for q in self.session.exec(select(QuestionRow).where(QuestionRow.game_id == game_id)).all():
                self.session.delete(q)
            self.session.flush()

            # 4) la partie
            self._delete(game, commit=False)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return True
