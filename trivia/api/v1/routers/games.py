from typing import List

from fastapi import APIRouter, Depends, Path, status

from trivia.api.v1.dependencies import get_game_service, get_player_service
from trivia.features.games.schemas import GameCreateIn, GameOut, QuestionOut
from trivia.features.games.services import GameService
from trivia.features.players.schemas import PlayerOut
from trivia.features.players.services import PlayerService


router = APIRouter(
    prefix="/games",
    tags=["games"],
    responses={404: {"description": "Not Found"}},
)

# -----------------------------
# Create game
# -----------------------------
@router.post(
    "",
    summary="Créer une partie avec ses questions",
    status_code=status.HTTP_201_CREATED,
    response_model=GameOut,
)
def create_game(
    payload: GameCreateIn,
    svc: GameService = Depends(get_game_service),
):
    return svc.create_game(payload)

# -----------------------------
# Lookup
# -----------------------------
@router.get(
    "/code/{code}",
    summary="Trouver une partie par son code",
    response_model=GameOut,
)
def get_game_by_code(
    code: str = Path(..., min_length=1, max_length=8),
    svc: GameService = Depends(get_game_service),
):
    return svc.get_game_by_code(code)


@router.get(
    "/{game_id}",
    summary="Détail d'une partie",
    response_model=GameOut,
)
def get_game(
    game_id: int = Path(..., ge=1),
    svc: GameService = Depends(get_game_service),
):
    return svc.get_game(game_id)

# -----------------------------
# Play
# -----------------------------
@router.get(
    "/{game_id}/questions",
    summary="Questions de la partie (ordre et options mélangés à chaque appel)",
    response_model=List[QuestionOut],
)
def get_game_questions(
    game_id: int = Path(..., ge=1),
    svc: GameService = Depends(get_game_service),
):
    return svc.get_game_questions(game_id)


@router.get(
    "/{game_id}/leaderboard",
    summary="Classement de la partie (score décroissant)",
    response_model=List[PlayerOut],
)
def get_leaderboard(
    game_id: int = Path(..., ge=1),
    svc: PlayerService = Depends(get_player_service),
):
    return svc.get_players_by_game(game_id)
