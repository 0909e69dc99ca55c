from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from trivia.domain.models import QuestionOption


# -----------------------------
# Game creation
# -----------------------------

def _strip_non_empty(value: str, field: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError(f"{field} must not be empty")
    return value


class OptionIn(BaseModel):
    text: str = Field(min_length=1, max_length=500)
    image_url: Optional[str] = None

    @field_validator("text")
    @classmethod
    def _strip_text(cls, value: str) -> str:
        return _strip_non_empty(value, "option text")


class QuestionDraftIn(BaseModel):
    text: str = Field(min_length=1, max_length=1000)
    image_url: Optional[str] = None
    # une option = texte simple ou {text, image_url}
    options: List[Union[str, OptionIn]] = Field(min_length=2, max_length=6)
    correct_answer: int = Field(ge=0)

    @field_validator("text")
    @classmethod
    def _strip_text(cls, value: str) -> str:
        return _strip_non_empty(value, "question text")

    @field_validator("options")
    @classmethod
    def _non_empty_options(cls, options):
        return [
            _strip_non_empty(opt, "option text") if isinstance(opt, str) else opt
            for opt in options
        ]

    @model_validator(mode="after")
    def _correct_answer_in_range(self):
        if self.correct_answer >= len(self.options):
            raise ValueError("correct_answer must be a valid index into options")
        return self

    def normalized_options(self) -> List[QuestionOption]:
        return [
            QuestionOption(text=opt) if isinstance(opt, str) else QuestionOption(**opt.model_dump())
            for opt in self.options
        ]


class GameCreateIn(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    question_duration_seconds: int = Field(default=20, ge=5, le=120)
    questions: List[QuestionDraftIn] = Field(min_length=1, max_length=50)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be empty")
        return value


# -----------------------------
# Outputs
# -----------------------------

class OptionOut(BaseModel):
    text: str
    image_url: Optional[str] = None


class GameOut(BaseModel):
    id: int
    code: str
    name: str
    question_duration_seconds: int
    created_at: datetime
    is_active: bool

    model_config = {"from_attributes": True}


class QuestionOut(BaseModel):
    id: int
    game_id: int
    text: str
    image_url: Optional[str] = None
    options: List[OptionOut]
    correct_answer: int
    order: int

    model_config = {"from_attributes": True}
