import logging
from dataclasses import dataclass
from typing import List, Optional

from trivia.domain.errors import (
    ConflictError,
    DuplicateAnswerError,
    DuplicatePlayerError,
    NotFoundError,
)
from trivia.domain.models import Player, PlayerAnswer, ScoreSummary
from trivia.domain.repositories import GameStore, PlayerStore
from trivia.features.games import scoring
from trivia.features.players.schemas import PlayerAnswerIn, PlayerCreateIn
from trivia.utils.clock import Clock, utcnow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlayerRegistration:
    """Résultat d'une inscription : nouveau joueur, reprise, ou partie déjà terminée."""

    player: Player
    is_existing: bool
    has_completed: bool


@dataclass(frozen=True)
class AnswerSubmission:
    answer: PlayerAnswer
    already_answered: bool


class PlayerService:
    """
    Service métier Player.

    L'inscription est idempotente sur (name, phone, game_id) : rappeler
    create_player (retry réseau, rafraîchissement de page) retourne le même
    joueur sans remettre sa progression à zéro.
    """

    def __init__(self, player_store: PlayerStore, game_store: GameStore, *, clock: Clock = utcnow):
        self.players = player_store
        self.games = game_store
        self.clock = clock

    # -----------------------------------
    # Helpers
    # -----------------------------------
    def _get_player_or_404(self, player_id: int) -> Player:
        player = self.players.get_player(player_id)
        if not player:
            raise NotFoundError("PLAYER_NOT_FOUND")
        return player

    # ---------------------------------------------------------------------
    # Inscription
    # ---------------------------------------------------------------------

    def find_existing_player(self, name: str, phone: str, game_id: int) -> Optional[Player]:
        return self.players.find_player(name, phone, game_id)

    def create_player(self, payload: PlayerCreateIn) -> PlayerRegistration:
        if not self.games.get_game(payload.game_id):
            raise NotFoundError("GAME_NOT_FOUND")

        existing = self.find_existing_player(payload.name, payload.phone, payload.game_id)
        if existing:
            return self._resume(existing)

        try:
            player = self.players.add_player(
                name=payload.name, phone=payload.phone, game_id=payload.game_id
            )
        except DuplicatePlayerError:
            # inscription concurrente avec le même triplet : l'autre insert a gagné
            existing = self.find_existing_player(payload.name, payload.phone, payload.game_id)
            if not existing:
                raise
            return self._resume(existing)

        return PlayerRegistration(player=player, is_existing=False, has_completed=False)

    def _resume(self, player: Player) -> PlayerRegistration:
        logger.info(
            "Player re-registered id=%s game=%s completed=%s",
            player.id,
            player.game_id,
            player.has_completed,
        )
        return PlayerRegistration(player=player, is_existing=True, has_completed=player.has_completed)

    def get_player(self, player_id: int) -> Player:
        return self._get_player_or_404(player_id)

    # ---------------------------------------------------------------------
    # Réponses
    # ---------------------------------------------------------------------

    def create_player_answer(self, player_id: int, payload: PlayerAnswerIn) -> AnswerSubmission:
        """
        Enregistre une réponse et ses points (scoring.score).

        Une seule réponse par (joueur, question) : une resoumission retourne la
        réponse déjà stockée avec already_answered=True, sans nouveaux points.
        """
        player = self._get_player_or_404(player_id)
        if player.has_completed:
            raise ConflictError("PLAYER_ALREADY_COMPLETED")

        question = self.games.get_question(payload.question_id)
        if not question or question.game_id != player.game_id:
            raise ValueError("QUESTION_NOT_IN_GAME")
        if payload.selected_answer >= len(question.options):
            raise ValueError("SELECTED_ANSWER_OUT_OF_RANGE")

        existing = self.players.find_answer(player.id, question.id)
        if existing:
            return AnswerSubmission(answer=existing, already_answered=True)

        try:
            answer = self.players.add_answer(
                player_id=player.id,
                question_id=question.id,
                selected_answer=payload.selected_answer,
                is_correct=payload.is_correct,
                time_spent=payload.time_spent,
                points=scoring.score(payload.is_correct, payload.time_spent),
            )
        except DuplicateAnswerError:
            existing = self.players.find_answer(player.id, question.id)
            if not existing:
                raise
            return AnswerSubmission(answer=existing, already_answered=True)

        return AnswerSubmission(answer=answer, already_answered=False)

    def get_player_answers(self, player_id: int) -> List[PlayerAnswer]:
        return self.players.list_answers(player_id)

    # ---------------------------------------------------------------------
    # Score & fin de partie
    # ---------------------------------------------------------------------

    def update_player_score(
        self,
        player_id: int,
        score: int,
        correct_answers: int,
        total_answers: int,
        average_time: int,
    ) -> Player:
        summary = ScoreSummary(
            score=score,
            correct_answers=correct_answers,
            total_answers=total_answers,
            average_time=average_time,
        )
        player = self.players.update_score(player_id, summary)
        if not player:
            raise NotFoundError("PLAYER_NOT_FOUND")
        return player

    def complete_player(self, player_id: int) -> Player:
        """Marque le joueur comme terminé. État terminal : un 2e appel ne change rien."""
        player = self._get_player_or_404(player_id)
        if player.has_completed:
            return player
        return self.players.mark_completed(player_id, self.clock()) or player

    def finish_player(self, player_id: int) -> Player:
        """
        Fin de partie d'un joueur : agrège ses réponses puis écrit score ET
        completed_at en une seule écriture (pas de joueur "scoré mais pas terminé").

        Idempotent : un joueur déjà terminé est retourné tel quel, sans re-score.
        """
        player = self._get_player_or_404(player_id)
        if player.has_completed:
            return player

        summary = scoring.aggregate_answers(self.players.list_answers(player_id))
        finished = self.players.finalize_player(player_id, summary, self.clock())
        if not finished:
            raise NotFoundError("PLAYER_NOT_FOUND")
        logger.info(
            "Player finished id=%s game=%s score=%s correct=%s/%s",
            finished.id,
            finished.game_id,
            finished.score,
            finished.correct_answers,
            finished.total_answers,
        )
        return finished

    # ---------------------------------------------------------------------
    # Classement & stats
    # ---------------------------------------------------------------------

    def get_players_by_game(self, game_id: int) -> List[Player]:
        """Classement : score décroissant, égalités dans l'ordre d'inscription."""
        return self.players.list_players_by_game(game_id)

    def get_all_players(self) -> List[Player]:
        return self.players.list_players()

    def get_winners_count(self) -> int:
        return self.players.count_games_with_completed_player()
