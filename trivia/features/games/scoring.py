"""
Règles de score : points par réponse et agrégat final d'un joueur.

Seule source de vérité pour les points : aucun autre module ne les calcule.
"""

import math
from typing import Iterable

from trivia.domain.models import PlayerAnswer, ScoreSummary

BASE_POINTS = 1000
MAX_SPEED_BONUS = 500
BONUS_DECAY_PER_SECOND = 25


def round_half_up(value: float) -> int:
    """Arrondi "au demi supérieur" (12.5 -> 13), pas l'arrondi bancaire de round()."""
    return int(math.floor(value + 0.5))


def score(is_correct: bool, time_spent: float) -> int:
    """
    Points d'une réponse.

    Mauvaise réponse : 0. Bonne réponse : 1000 + bonus de rapidité (max 500,
    -25 par seconde), soit 1500 pour une réponse instantanée et 1000 à partir
    de 20 secondes. Un temps négatif est ramené à 0.
    """
    if not is_correct:
        return 0
    t = max(0.0, float(time_spent))
    if not math.isfinite(t):
        return BASE_POINTS
    return round_half_up(BASE_POINTS + max(0.0, MAX_SPEED_BONUS - t * BONUS_DECAY_PER_SECOND))


def aggregate_answers(answers: Iterable[PlayerAnswer]) -> ScoreSummary:
    """
    Score final, bonnes réponses et temps moyen à partir des réponses stockées.

    Les points stockés sont sommés tels quels (jamais recalculés depuis les
    questions, dont l'ordre des options varie d'une lecture à l'autre).
    Aucune réponse : temps moyen 0.
    """
    answers = list(answers)
    total = len(answers)
    if not total:
        return ScoreSummary()
    return ScoreSummary(
        score=sum(a.points for a in answers),
        correct_answers=sum(1 for a in answers if a.is_correct),
        total_answers=total,
        average_time=round_half_up(sum(a.time_spent for a in answers) / total),
    )
