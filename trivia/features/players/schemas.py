from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from trivia.domain.models import NO_ANSWER

# Numéro local : "05" + 8 chiffres ASCII
PHONE_PATTERN = r"^05[0-9]{8}$"


# -----------------------------
# Registration
# -----------------------------

class PlayerCreateIn(BaseModel):
    name: str = Field(min_length=1, max_length=80)
    phone: str = Field(pattern=PHONE_PATTERN, examples=["0512345678"])
    game_id: int = Field(ge=1)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be empty")
        return value

    @field_validator("phone", mode="before")
    @classmethod
    def _strip_phone(cls, value):
        return value.strip() if isinstance(value, str) else value


class PlayerOut(BaseModel):
    id: int
    game_id: int
    name: str
    phone: str
    score: int
    correct_answers: int
    total_answers: int
    average_time: int
    completed_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class PlayerRegistrationOut(BaseModel):
    player: PlayerOut
    is_existing: bool
    has_completed: bool


# -----------------------------
# Answers
# -----------------------------

class PlayerAnswerIn(BaseModel):
    question_id: int = Field(ge=1)
    # -1 = temps écoulé / pas de réponse
    selected_answer: int = Field(ge=NO_ANSWER, le=5)
    is_correct: bool
    time_spent: float = Field(ge=0, le=3600)

    @model_validator(mode="after")
    def _no_answer_is_never_correct(self):
        if self.selected_answer == NO_ANSWER and self.is_correct:
            raise ValueError("a timed-out answer cannot be correct")
        return self


class PlayerAnswerOut(BaseModel):
    id: int
    player_id: int
    question_id: int
    selected_answer: int
    is_correct: bool
    time_spent: float
    points: int

    model_config = {"from_attributes": True}


class AnswerSubmissionOut(BaseModel):
    answer: PlayerAnswerOut
    already_answered: bool
