"""Reduce attempt histories to the numbers shown on dashboards.

A quiz contributes to a total through its most recently completed attempt
only: retrying replaces the earlier contribution and can never add to it.
Every function here accepts any objects carrying the attempt fields
(``quiz_id``, ``completed_at``, ``score_earned``, ``correct_answers``,
``total_questions``), normally :class:`portal.models.QuizAttempt` rows.
"""

from collections import defaultdict
from datetime import datetime
from typing import Iterable, Sequence, TypeVar

from portal.scoring import round_half_up

A = TypeVar("A")


def latest_per_quiz(attempts: Iterable[A]) -> list[A]:
    """Keep the latest completed attempt for each quiz.

    Attempts without ``completed_at`` are ignored.  When two attempts for
    the same quiz share a completion time the one seen first wins, so
    callers pass attempts in ascending completion order.
    """
    latest: dict[str, A] = {}
    for attempt in attempts:
        if attempt.completed_at is None:
            continue
        current = latest.get(attempt.quiz_id)
        if current is None or attempt.completed_at > current.completed_at:
            latest[attempt.quiz_id] = attempt
    return list(latest.values())


def sum_score(attempts: Iterable) -> int:
    return sum(a.score_earned for a in attempts)


def total_score(attempts: Iterable) -> int:
    """Score of a raw history: latest attempt per quiz, summed."""
    return sum_score(latest_per_quiz(attempts))


def accuracy(attempts: Sequence) -> int:
    """Percentage of questions answered correctly across ``attempts``."""
    answered = sum(a.total_questions for a in attempts)
    if answered <= 0:
        return 0
    correct = sum(a.correct_answers for a in attempts)
    return round_half_up(correct / answered * 100)


def completed_before(attempts: Iterable[A], cutoff: datetime) -> list[A]:
    return [
        a for a in attempts if a.completed_at is not None and a.completed_at < cutoff
    ]


def group_by_user(attempts: Iterable[A]) -> dict[int, list[A]]:
    """Bucket attempts by ``user_id`` keeping their relative order."""
    grouped: dict[int, list[A]] = defaultdict(list)
    for attempt in attempts:
        grouped[attempt.user_id].append(attempt)
    return grouped
