"""
➡️ But : Backend de stockage en mémoire, interchangeable avec le backend SQL.

MemoryDatabase : l'état partagé (dicts + verrou + compteurs d'id).
InMemoryGameStore / InMemoryPlayerStore / InMemoryStatsStore : implémentations
des protocoles de trivia.domain.repositories au-dessus de cet état.

Les mêmes contraintes que la base SQL sont appliquées (code unique, triplet
joueur unique, une réponse par (joueur, question)) pour que les tests contre
ce fake restent représentatifs.

🔹 Avantages :

Tests rapides sans base.

Mode "démo" sans fichier SQLite (STORAGE_BACKEND=memory).
"""

import itertools
import threading
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from trivia.domain.errors import ConflictError, DuplicateAnswerError, DuplicatePlayerError
from trivia.domain.models import (
    Game,
    NewQuestion,
    Player,
    PlayerAnswer,
    Question,
    ScoreSummary,
)


class MemoryDatabase:
    def __init__(self):
        self.lock = threading.RLock()
        self.games: Dict[int, Game] = {}
        self.questions: Dict[int, Question] = {}
        self.players: Dict[int, Player] = {}
        self.answers: Dict[int, PlayerAnswer] = {}
        self.visitors: int = 0
        self.visitors_updated_at: Optional[datetime] = None
        self._ids = {
            "games": itertools.count(1),
            "questions": itertools.count(1),
            "players": itertools.count(1),
            "answers": itertools.count(1),
        }

    def next_id(self, table: str) -> int:
        return next(self._ids[table])


class InMemoryGameStore:
    def __init__(self, db: MemoryDatabase):
        self.db = db

    def code_exists(self, code: str) -> bool:
        with self.db.lock:
            return any(g.code == code for g in self.db.games.values())

    def add_game(
        self,
        *,
        code: str,
        name: str,
        question_duration_seconds: int,
        created_at: datetime,
        questions: Sequence[NewQuestion],
    ) -> Game:
        with self.db.lock:
            if self.code_exists(code):
                raise ConflictError("GAME_CODE_TAKEN")

            game = Game(
                id=self.db.next_id("games"),
                code=code,
                name=name,
                question_duration_seconds=question_duration_seconds,
                created_at=created_at,
                is_active=True,
            )
            # questions construites avant toute écriture : pas de partie à moitié visible
            rows = [
                Question(
                    id=self.db.next_id("questions"),
                    game_id=game.id,
                    text=q.text,
                    image_url=q.image_url,
                    options=list(q.options),
                    correct_answer=q.correct_answer,
                    order=q.order,
                )
                for q in questions
            ]
            for row in rows:
                self.db.questions[row.id] = row
            self.db.games[game.id] = game
            return game.model_copy()

    def get_game(self, game_id: int) -> Optional[Game]:
        with self.db.lock:
            game = self.db.games.get(game_id)
            return game.model_copy() if game else None

    def get_game_by_code(self, code: str) -> Optional[Game]:
        with self.db.lock:
            for game in self.db.games.values():
                if game.code == code:
                    return game.model_copy()
            return None

    def list_games(self) -> List[Game]:
        with self.db.lock:
            games = sorted(self.db.games.values(), key=lambda g: (g.created_at, g.id), reverse=True)
            return [g.model_copy() for g in games]

    def list_games_created_before(self, cutoff: datetime) -> List[Game]:
        with self.db.lock:
            games = sorted(
                (g for g in self.db.games.values() if g.created_at < cutoff),
                key=lambda g: (g.created_at, g.id),
            )
            return [g.model_copy() for g in games]

    def list_questions(self, game_id: int) -> List[Question]:
        with self.db.lock:
            questions = sorted(
                (q for q in self.db.questions.values() if q.game_id == game_id),
                key=lambda q: q.order,
            )
            return [q.model_copy(deep=True) for q in questions]

    def get_question(self, question_id: int) -> Optional[Question]:
        with self.db.lock:
            q = self.db.questions.get(question_id)
            return q.model_copy(deep=True) if q else None

    def delete_game(self, game_id: int) -> bool:
        with self.db.lock:
            if game_id not in self.db.games:
                return False

            player_ids = {p.id for p in self.db.players.values() if p.game_id == game_id}
            question_ids = {q.id for q in self.db.questions.values() if q.game_id == game_id}

            for answer_id in [
                a.id
                for a in self.db.answers.values()
                if a.player_id in player_ids or a.question_id in question_ids
            ]:
                del self.db.answers[answer_id]
            for player_id in player_ids:
                del self.db.players[player_id]
            for question_id in question_ids:
                del self.db.questions[question_id]
            del self.db.games[game_id]
            return True


class InMemoryPlayerStore:
    def __init__(self, db: MemoryDatabase):
        self.db = db

    # ---------- Joueurs ----------

    def find_player(self, name: str, phone: str, game_id: int) -> Optional[Player]:
        with self.db.lock:
            for p in self.db.players.values():
                if p.name == name and p.phone == phone and p.game_id == game_id:
                    return p.model_copy()
            return None

    def add_player(self, *, name: str, phone: str, game_id: int) -> Player:
        with self.db.lock:
            if self.find_player(name, phone, game_id):
                raise DuplicatePlayerError("PLAYER_ALREADY_REGISTERED")
            player = Player(id=self.db.next_id("players"), game_id=game_id, name=name, phone=phone)
            self.db.players[player.id] = player
            return player.model_copy()

    def get_player(self, player_id: int) -> Optional[Player]:
        with self.db.lock:
            p = self.db.players.get(player_id)
            return p.model_copy() if p else None

    def list_players_by_game(self, game_id: int) -> List[Player]:
        with self.db.lock:
            players = sorted(
                (p for p in self.db.players.values() if p.game_id == game_id),
                key=lambda p: (-p.score, p.id),
            )
            return [p.model_copy() for p in players]

    def list_players(self) -> List[Player]:
        with self.db.lock:
            return [self.db.players[k].model_copy() for k in sorted(self.db.players)]

    def _replace(self, player_id: int, **changes) -> Optional[Player]:
        with self.db.lock:
            p = self.db.players.get(player_id)
            if not p:
                return None
            updated = p.model_copy(update=changes)
            self.db.players[player_id] = updated
            return updated.model_copy()

    def update_score(self, player_id: int, summary: ScoreSummary) -> Optional[Player]:
        return self._replace(player_id, **summary.model_dump())

    def mark_completed(self, player_id: int, completed_at: datetime) -> Optional[Player]:
        return self._replace(player_id, completed_at=completed_at)

    def finalize_player(
        self, player_id: int, summary: ScoreSummary, completed_at: datetime
    ) -> Optional[Player]:
        return self._replace(player_id, completed_at=completed_at, **summary.model_dump())

    def count_games_with_completed_player(self) -> int:
        with self.db.lock:
            return len({p.game_id for p in self.db.players.values() if p.completed_at is not None})

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
        with self.db.lock:
            if self.find_answer(player_id, question_id):
                raise DuplicateAnswerError("QUESTION_ALREADY_ANSWERED")
            answer = PlayerAnswer(
                id=self.db.next_id("answers"),
                player_id=player_id,
                question_id=question_id,
                selected_answer=selected_answer,
                is_correct=is_correct,
                time_spent=time_spent,
                points=points,
            )
            self.db.answers[answer.id] = answer
            return answer.model_copy()

    def find_answer(self, player_id: int, question_id: int) -> Optional[PlayerAnswer]:
        with self.db.lock:
            for a in self.db.answers.values():
                if a.player_id == player_id and a.question_id == question_id:
                    return a.model_copy()
            return None

    def list_answers(self, player_id: int) -> List[PlayerAnswer]:
        with self.db.lock:
            return [
                self.db.answers[k].model_copy()
                for k in sorted(self.db.answers)
                if self.db.answers[k].player_id == player_id
            ]


class InMemoryStatsStore:
    def __init__(self, db: MemoryDatabase):
        self.db = db

    def increment_visitors(self, at: datetime) -> int:
        with self.db.lock:
            self.db.visitors += 1
            self.db.visitors_updated_at = at
            return self.db.visitors

    def get_visitor_count(self) -> int:
        with self.db.lock:
            return self.db.visitors
