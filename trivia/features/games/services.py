import logging
import random
from datetime import datetime
from typing import List, Optional

from trivia.domain.errors import NotFoundError
from trivia.domain.models import Game, NewQuestion, Question
from trivia.domain.repositories import GameStore
from trivia.features.games.codes import CodeGenerator
from trivia.features.games.randomizer import randomize
from trivia.features.games.schemas import GameCreateIn
from trivia.utils.clock import Clock, utcnow

logger = logging.getLogger(__name__)


class GameService:
    """
    Service métier Game : orchestre le store + les règles.

    - création atomique partie + questions avec code unique
    - lecture des questions toujours mélangée (jamais l'ordre canonique)
    - suppression en cascade (utilisée par la rétention)
    """

    def __init__(
        self,
        game_store: GameStore,
        *,
        code_generator: Optional[CodeGenerator] = None,
        clock: Clock = utcnow,
        rng: Optional[random.Random] = None,
    ):
        self.games = game_store
        self.codes = code_generator or CodeGenerator()
        self.clock = clock
        self.rng = rng

    # -----------------------------------
    # Helpers
    # -----------------------------------
    def _get_game_or_404(self, game_id: int) -> Game:
        game = self.games.get_game(game_id)
        if not game:
            raise NotFoundError("GAME_NOT_FOUND")
        return game

    # ---------------------------------------------------------------------
    # Create game
    # ---------------------------------------------------------------------

    def create_game(self, payload: GameCreateIn) -> Game:
        code = self.codes.generate_unique(self.games.code_exists)

        questions = [
            NewQuestion(
                text=draft.text,
                image_url=draft.image_url,
                options=draft.normalized_options(),
                correct_answer=draft.correct_answer,
                order=index,
            )
            for index, draft in enumerate(payload.questions, start=1)
        ]

        game = self.games.add_game(
            code=code,
            name=payload.name,
            question_duration_seconds=payload.question_duration_seconds,
            created_at=self.clock(),
            questions=questions,
        )
        logger.info("Game created id=%s code=%s questions=%s", game.id, game.code, len(questions))
        return game

    # ---------------------------------------------------------------------
    # Lecture
    # ---------------------------------------------------------------------

    def get_game(self, game_id: int) -> Game:
        return self._get_game_or_404(game_id)

    def get_game_by_code(self, code: str) -> Game:
        game = self.games.get_game_by_code(code.strip().upper())
        if not game:
            raise NotFoundError("GAME_NOT_FOUND")
        return game

    def get_all_games(self) -> List[Game]:
        return self.games.list_games()

    def get_games_created_before(self, cutoff: datetime) -> List[Game]:
        return self.games.list_games_created_before(cutoff)

    def get_game_questions(self, game_id: int) -> List[Question]:
        """Questions de la partie, mélangées à chaque appel (liste vide si aucune)."""
        return randomize(self.games.list_questions(game_id), self.rng)

    def get_question(self, question_id: int) -> Question:
        question = self.games.get_question(question_id)
        if not question:
            raise NotFoundError("QUESTION_NOT_FOUND")
        return question

    # ---------------------------------------------------------------------
    # Suppression
    # ---------------------------------------------------------------------

    def delete_game(self, game_id: int) -> None:
        if not self.games.delete_game(game_id):
            raise NotFoundError("GAME_NOT_FOUND")
        logger.info("Game deleted id=%s", game_id)
