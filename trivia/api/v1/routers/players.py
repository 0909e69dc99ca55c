from typing import List

from fastapi import APIRouter, Depends, Path

from trivia.api.v1.dependencies import get_player_service
from trivia.features.players.schemas import (
    AnswerSubmissionOut,
    PlayerAnswerIn,
    PlayerAnswerOut,
    PlayerCreateIn,
    PlayerOut,
    PlayerRegistrationOut,
)
from trivia.features.players.services import PlayerService


router = APIRouter(
    prefix="/players",
    tags=["players"],
    responses={404: {"description": "Not Found"}},
)

# -----------------------------
# Registration (idempotente)
# -----------------------------
@router.post(
    "",
    summary="Inscrire un joueur (ou le retrouver s'il existe déjà)",
    response_model=PlayerRegistrationOut,
)
def register_player(
    payload: PlayerCreateIn,
    svc: PlayerService = Depends(get_player_service),
):
    reg = svc.create_player(payload)
    return PlayerRegistrationOut(
        player=PlayerOut.model_validate(reg.player.model_dump()),
        is_existing=reg.is_existing,
        has_completed=reg.has_completed,
    )


@router.get(
    "/{player_id}",
    summary="Détail d'un joueur",
    response_model=PlayerOut,
)
def get_player(
    player_id: int = Path(..., ge=1),
    svc: PlayerService = Depends(get_player_service),
):
    return svc.get_player(player_id)

# -----------------------------
# Answers
# -----------------------------
@router.post(
    "/{player_id}/answers",
    summary="Soumettre la réponse d'un joueur à une question",
    response_model=AnswerSubmissionOut,
)
def submit_answer(
    payload: PlayerAnswerIn,
    player_id: int = Path(..., ge=1),
    svc: PlayerService = Depends(get_player_service),
):
    sub = svc.create_player_answer(player_id, payload)
    return AnswerSubmissionOut(
        answer=PlayerAnswerOut.model_validate(sub.answer.model_dump()),
        already_answered=sub.already_answered,
    )


@router.get(
    "/{player_id}/answers",
    summary="Réponses d'un joueur",
    response_model=List[PlayerAnswerOut],
)
def list_answers(
    player_id: int = Path(..., ge=1),
    svc: PlayerService = Depends(get_player_service),
):
    svc.get_player(player_id)
    return svc.get_player_answers(player_id)

# -----------------------------
# Completion
# -----------------------------
@router.post(
    "/{player_id}/complete",
    summary="Terminer la partie d'un joueur (calcul du score final)",
    response_model=PlayerOut,
)
def complete_player(
    player_id: int = Path(..., ge=1),
    svc: PlayerService = Depends(get_player_service),
):
    return svc.finish_player(player_id)
