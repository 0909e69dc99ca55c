"""
➡️ But : Décrire les capacités de persistance attendues par les services.

GameStore, PlayerStore, StatsStore : interfaces (Protocol) implémentées une fois
par backend :
- SQL (SQLModel) : trivia/db/repositories/*
- mémoire : trivia/db/memory.py

Aucune logique métier ici : pas de validation, pas de score, pas de mélange.
Les services (trivia/features/*/services.py) s'appuient uniquement sur ces contrats.
"""

from datetime import datetime
from typing import List, Optional, Protocol, Sequence

from trivia.domain.models import (
    Game,
    NewQuestion,
    Player,
    PlayerAnswer,
    Question,
    ScoreSummary,
)


class GameStore(Protocol):
    def code_exists(self, code: str) -> bool: ...

    def add_game(
        self,
        *,
        code: str,
        name: str,
        question_duration_seconds: int,
        created_at: datetime,
        questions: Sequence[NewQuestion],
    ) -> Game:
        """Persiste la partie ET ses questions de façon atomique."""
        ...

    def get_game(self, game_id: int) -> Optional[Game]: ...

    def get_game_by_code(self, code: str) -> Optional[Game]: ...

    def list_games(self) -> List[Game]:
        """Toutes les parties, les plus récentes d'abord."""
        ...

    def list_games_created_before(self, cutoff: datetime) -> List[Game]: ...

    def list_questions(self, game_id: int) -> List[Question]:
        """Questions dans l'ordre canonique (champ order croissant)."""
        ...

    def get_question(self, question_id: int) -> Optional[Question]: ...

    def delete_game(self, game_id: int) -> bool:
        """
        Suppression en cascade : réponses -> joueurs -> questions -> partie.
        Retourne False si la partie n'existait pas.
        """
        ...


class PlayerStore(Protocol):
    def find_player(self, name: str, phone: str, game_id: int) -> Optional[Player]: ...

    def add_player(self, *, name: str, phone: str, game_id: int) -> Player:
        """Lève DuplicatePlayerError si le triplet existe déjà."""
        ...

    def get_player(self, player_id: int) -> Optional[Player]: ...

    def list_players_by_game(self, game_id: int) -> List[Player]:
        """Classement : score décroissant, puis ordre d'inscription."""
        ...

    def list_players(self) -> List[Player]: ...

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
        """Lève DuplicateAnswerError si la question a déjà une réponse."""
        ...

    def find_answer(self, player_id: int, question_id: int) -> Optional[PlayerAnswer]: ...

    def list_answers(self, player_id: int) -> List[PlayerAnswer]: ...

    def update_score(self, player_id: int, summary: ScoreSummary) -> Optional[Player]: ...

    def mark_completed(self, player_id: int, completed_at: datetime) -> Optional[Player]: ...

    def finalize_player(
        self, player_id: int, summary: ScoreSummary, completed_at: datetime
    ) -> Optional[Player]:
        """Score + completed_at en une seule écriture."""
        ...

    def count_games_with_completed_player(self) -> int: ...


class StatsStore(Protocol):
    def increment_visitors(self, at: datetime) -> int:
        """Incrément atomique, retourne la nouvelle valeur."""
        ...

    def get_visitor_count(self) -> int: ...
