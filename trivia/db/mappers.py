"""
➡️ But : Convertir explicitement les lignes SQL en entités métier (et inversement).

Un adaptateur par entité. Le reste du code ne voit jamais une ligne SQLModel :
les repositories retournent toujours des objets de trivia.domain.models.
"""

from typing import Any, Dict, List, Sequence

from trivia.db.models.games import GameRow
from trivia.db.models.player_answers import PlayerAnswerRow
from trivia.db.models.players import PlayerRow
from trivia.db.models.questions import QuestionRow
from trivia.domain.models import (
    Game,
    Player,
    PlayerAnswer,
    Question,
    QuestionOption,
)


# ---------- Game ----------

def to_game(row: GameRow) -> Game:
    return Game(
        id=row.id,
        code=row.code,
        name=row.name,
        question_duration_seconds=row.question_duration_seconds,
        created_at=row.created_at,
        is_active=row.is_active,
    )


# ---------- Question ----------

def options_to_json(options: Sequence[QuestionOption]) -> List[Dict[str, Any]]:
    return [opt.model_dump() for opt in options]


def options_from_json(raw: Sequence[Any]) -> List[QuestionOption]:
    # anciennes lignes : simple liste de chaînes
    return [
        QuestionOption(text=item) if isinstance(item, str) else QuestionOption(**item)
        for item in raw
    ]


def to_question(row: QuestionRow) -> Question:
    return Question(
        id=row.id,
        game_id=row.game_id,
        text=row.text,
        image_url=row.image_url,
        options=options_from_json(row.options),
        correct_answer=row.correct_answer,
        order=row.order,
    )


# ---------- Player ----------

def to_player(row: PlayerRow) -> Player:
    return Player(
        id=row.id,
        game_id=row.game_id,
        name=row.name,
        phone=row.phone,
        score=row.score,
        correct_answers=row.correct_answers,
        total_answers=row.total_answers,
        average_time=row.average_time,
        completed_at=row.completed_at,
    )


# ---------- PlayerAnswer ----------

def to_player_answer(row: PlayerAnswerRow) -> PlayerAnswer:
    return PlayerAnswer(
        id=row.id,
        player_id=row.player_id,
        question_id=row.question_id,
        selected_answer=row.selected_answer,
        is_correct=row.is_correct,
        time_spent=row.time_spent,
        points=row.points,
    )
