from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel

from trivia.db.session import MemoryBackend, SqlBackend, build_engine, get_backend
from trivia.features.games.schemas import GameCreateIn
from trivia.features.games.services import GameService
from trivia.features.players.schemas import PlayerCreateIn
from trivia.features.players.services import PlayerService
from trivia.main import app


class FakeClock:
    """Horloge contrôlée par le test."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta) -> None:
        self.now += timedelta(**delta)


def make_game_payload(
    n_questions: int = 3,
    *,
    name: str = "Quiz du vendredi",
    duration: int = 20,
    questions: Optional[List[Dict[str, Any]]] = None,
) -> GameCreateIn:
    if questions is None:
        questions = [
            {
                "text": f"Question {i}",
                "options": [f"Q{i}-A", f"Q{i}-B", f"Q{i}-C", f"Q{i}-D"],
                "correct_answer": i % 4,
            }
            for i in range(1, n_questions + 1)
        ]
    return GameCreateIn(name=name, question_duration_seconds=duration, questions=questions)


def make_player_payload(game_id: int, name: str = "Alice", phone: str = "0512345678") -> PlayerCreateIn:
    return PlayerCreateIn(name=name, phone=phone, game_id=game_id)


def _make_backend(kind: str):
    if kind == "memory":
        return MemoryBackend()
    return SqlBackend(build_engine("sqlite://"))


@pytest.fixture(params=["memory", "sql"])
def backend(request):
    b = _make_backend(request.param)
    b.init()
    yield b
    if isinstance(b, SqlBackend):
        SQLModel.metadata.drop_all(b.engine)
        b.engine.dispose()


@pytest.fixture()
def stores(backend):
    with backend.stores() as s:
        yield s


@pytest.fixture()
def clock():
    return FakeClock(datetime(2026, 3, 14, 12, 0, 0))


@pytest.fixture()
def game_service(stores, clock):
    return GameService(stores.games, clock=clock)


@pytest.fixture()
def player_service(stores, clock):
    return PlayerService(stores.players, stores.games, clock=clock)


@pytest.fixture()
def game(game_service):
    return game_service.create_game(make_game_payload())


@pytest.fixture()
def client():
    # backend mémoire isolé ; sans "with", les hooks startup/shutdown ne tournent pas
    test_backend = MemoryBackend()
    app.dependency_overrides[get_backend] = lambda: test_backend
    yield TestClient(app)
    app.dependency_overrides.clear()
