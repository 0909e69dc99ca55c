import math

import pytest

from trivia.domain.models import PlayerAnswer
from trivia.features.games.scoring import aggregate_answers, round_half_up, score


def _answer(i, is_correct, time_spent):
    return PlayerAnswer(
        id=i,
        player_id=1,
        question_id=i,
        selected_answer=0 if is_correct else 1,
        is_correct=is_correct,
        time_spent=time_spent,
        points=score(is_correct, time_spent),
    )


@pytest.mark.parametrize(
    "time_spent, expected",
    [(0, 1500), (1, 1475), (5, 1375), (10, 1250), (19.9, 1003), (20, 1000), (45, 1000)],
)
def test_correct_answer_points(time_spent, expected):
    assert score(True, time_spent) == expected


def test_wrong_answer_is_zero():
    assert score(False, 0) == 0
    assert score(False, 3) == 0


def test_points_bounds_and_monotonic():
    previous = score(True, 0)
    for tenth in range(0, 400):
        points = score(True, tenth / 10)
        assert 1000 <= points <= 1500
        assert points <= previous
        previous = points


def test_negative_time_counts_as_instant():
    assert score(True, -3) == 1500


def test_non_finite_time_gets_base_points():
    assert score(True, math.inf) == 1000


def test_round_half_up():
    assert round_half_up(12.5) == 13
    assert round_half_up(2.5) == 3
    assert round_half_up(2.4999) == 2
    # 1000 + 500 - 0.1 * 25 = 1497.5
    assert score(True, 0.1) == 1498


def test_aggregate_answers():
    summary = aggregate_answers([_answer(1, True, 5), _answer(2, False, 20)])
    assert summary.score == 1375
    assert summary.correct_answers == 1
    assert summary.total_answers == 2
    assert summary.average_time == 13


def test_aggregate_no_answers():
    summary = aggregate_answers([])
    assert (summary.score, summary.correct_answers, summary.total_answers, summary.average_time) == (0, 0, 0, 0)


def test_aggregate_sums_stored_points():
    stored = _answer(1, True, 0).model_copy(update={"points": 42})
    assert aggregate_answers([stored]).score == 42
