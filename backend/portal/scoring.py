"""Points, ranking and grade rules.

POINTS
    * 10 points for every question answered correctly.
    * 5 bonus points when the correct choice was also the first click on
      the user's first attempt at the quiz.
    * A question is therefore worth at most 15 points.

RANKING
    Users are ranked by total score, highest first.  Equal scores share
    the same (best) rank.  Percentile is the share of the *other* members
    of the population scoring strictly below a user; the user's own score
    is part of the population passed in.

GRADES
    A: percentile >= 90, B: 66-89, C: 33-65, D: below 33.
"""

import math
from typing import Iterable, Sequence

POINTS_PER_QUESTION = 10
FIRST_TRY_BONUS = 5

GRADE_A_MIN = 90
GRADE_B_MIN = 66
GRADE_C_MIN = 33


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def calc_quiz_points(correct_answers: int, first_try_correct: int) -> int:
    return correct_answers * POINTS_PER_QUESTION + first_try_correct * FIRST_TRY_BONUS


def max_points(total_questions: int) -> int:
    """Highest score achievable on a quiz with ``total_questions`` questions."""
    return total_questions * (POINTS_PER_QUESTION + FIRST_TRY_BONUS)


def rank_position(score: float, all_scores: Iterable[float]) -> int:
    """1-based rank; only strictly higher scores push a user down."""
    return sum(1 for s in all_scores if s > score) + 1


def percentile(score: float, all_scores: Sequence[float]) -> int:
    """Percentage (0-100) of the rest of the population scoring below ``score``."""
    if len(all_scores) <= 1:
        return 100
    below = sum(1 for s in all_scores if s < score)
    return round_half_up(below / (len(all_scores) - 1) * 100)


def grade(pct: float) -> str:
    if pct >= GRADE_A_MIN:
        return "A"
    if pct >= GRADE_B_MIN:
        return "B"
    if pct >= GRADE_C_MIN:
        return "C"
    return "D"


def leaderboard(entries: Iterable[dict], limit: int = 10) -> list[dict]:
    """Return the top ``limit`` entries by ``score`` with a 1-based ``position``.

    ``sorted`` is stable, so users with equal scores keep the order they
    were supplied in.
    """
    ordered = sorted(entries, key=lambda e: e["score"], reverse=True)[:limit]
    return [{**entry, "position": idx + 1} for idx, entry in enumerate(ordered)]
