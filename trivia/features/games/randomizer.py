import random
from typing import List, Optional, Sequence

from trivia.domain.models import Question


def randomize(questions: Sequence[Question], rng: Optional[random.Random] = None) -> List[Question]:
    """
    Vue mélangée d'une liste de questions, recalculée à chaque lecture.

    - l'ordre des questions est permuté uniformément (Fisher–Yates via random.shuffle)
    - les options de chaque question sont permutées indépendamment
    - correct_answer est recalculé pour pointer sur la même option qu'avant

    La liste d'entrée et ses questions ne sont jamais modifiées.
    """
    rng = rng or random.Random()

    shuffled = list(questions)
    rng.shuffle(shuffled)

    view: List[Question] = []
    for q in shuffled:
        positions = list(range(len(q.options)))
        rng.shuffle(positions)
        view.append(
            q.model_copy(
                update={
                    "options": [q.options[i] for i in positions],
                    "correct_answer": positions.index(q.correct_answer),
                }
            )
        )
    return view
