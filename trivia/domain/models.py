"""
➡️ But : Définir les entités métier manipulées par les services.

Ces modèles Pydantic sont indépendants du stockage : les backends (SQL, mémoire)
convertissent leurs lignes en ces objets (voir trivia/db/mappers.py), si bien que
le reste du code ne voit jamais une ligne brute.

🔹 Avantages :

Les services et les tests ne dépendent pas de SQLModel.

Un même service tourne contre la base SQL ou contre le fake en mémoire.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

# Réponse "pas de réponse / temps écoulé"
NO_ANSWER = -1


class QuestionOption(BaseModel):
    text: str
    image_url: Optional[str] = None

    model_config = {"from_attributes": True, "frozen": True}


class Game(BaseModel):
    id: int
    code: str
    name: str
    question_duration_seconds: int = 20
    created_at: datetime
    is_active: bool = True

    model_config = {"from_attributes": True}


class Question(BaseModel):
    id: int
    game_id: int
    text: str
    image_url: Optional[str] = None
    options: List[QuestionOption]
    correct_answer: int
    order: int

    model_config = {"from_attributes": True}


class Player(BaseModel):
    id: int
    game_id: int
    name: str
    phone: str
    score: int = 0
    correct_answers: int = 0
    total_answers: int = 0
    average_time: int = 0  # secondes
    completed_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @property
    def has_completed(self) -> bool:
        return self.completed_at is not None


class PlayerAnswer(BaseModel):
    id: int
    player_id: int
    question_id: int
    selected_answer: int
    is_correct: bool
    time_spent: float = Field(ge=0)
    points: int = Field(ge=0)

    model_config = {"from_attributes": True}


class ScoreSummary(BaseModel):
    """Agrégat final d'un joueur, calculé à partir de ses réponses."""

    score: int = 0
    correct_answers: int = 0
    total_answers: int = 0
    average_time: int = 0


class NewQuestion(BaseModel):
    """Question prête à être persistée (ordre attribué, pas encore d'id)."""

    text: str
    image_url: Optional[str] = None
    options: List[QuestionOption]
    correct_answer: int
    order: int
