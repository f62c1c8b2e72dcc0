"""Tests for latest-attempt-per-quiz aggregation."""

import pathlib
import sys
from datetime import datetime, timedelta

sys.path.append(str(pathlib.Path(__file__).resolve().parents[2]))

from portal.aggregation import (
    accuracy,
    completed_before,
    group_by_user,
    latest_per_quiz,
    sum_score,
    total_score,
)
from portal.models import QuizAttempt

BASE = datetime(2026, 10, 1, 9, 0)


def _attempt(quiz_id, score, day, user_id=1, correct=0, total=3, number=1):
    return QuizAttempt(
        user_id=user_id,
        quiz_id=quiz_id,
        attempt_number=number,
        completed_at=None if day is None else BASE + timedelta(days=day),
        score_earned=score,
        correct_answers=correct,
        total_questions=total,
    )


def test_latest_attempt_replaces_earlier_one():
    first = _attempt("q1", 5, 0)
    second = _attempt("q1", 15, 1, number=2)
    latest = latest_per_quiz([first, second])
    assert latest == [second]
    assert sum_score(latest) == 15


def test_retries_never_accumulate():
    attempts = [_attempt("q1", 45, day, number=day + 1) for day in range(5)]
    attempts.append(_attempt("q1", 10, 6, number=6))
    assert total_score(attempts) == 10


def test_lower_later_score_still_wins():
    attempts = [_attempt("q1", 45, 0), _attempt("q1", 20, 2, number=2)]
    assert total_score(attempts) == 20


def test_incomplete_attempts_are_ignored():
    attempts = [_attempt("q1", 30, 0), _attempt("q1", 45, None, number=2)]
    assert total_score(attempts) == 30
    assert latest_per_quiz([_attempt("q2", 10, None)]) == []


def test_ties_keep_first_seen():
    a = _attempt("q1", 10, 3)
    b = _attempt("q1", 20, 3, number=2)
    assert latest_per_quiz([a, b]) == [a]
    assert latest_per_quiz([b, a]) == [b]


def test_latest_per_quiz_is_a_fixed_point():
    attempts = [
        _attempt("q1", 5, 0),
        _attempt("q2", 25, 1),
        _attempt("q1", 15, 2, number=2),
        _attempt("q3", 0, None),
    ]
    once = latest_per_quiz(attempts)
    assert latest_per_quiz(once) == once
    assert sum_score(once) == 40


def test_sum_score_of_nothing_is_zero():
    assert sum_score([]) == 0
    assert total_score([]) == 0


def test_accuracy_rounds_half_up():
    attempts = [_attempt("q1", 0, 0, correct=1, total=8)]
    # 12.5% rounds to 13
    assert accuracy(attempts) == 13
    assert accuracy([_attempt("q1", 0, 0, correct=2, total=3)]) == 67
    assert accuracy([]) == 0
    assert accuracy([_attempt("q1", 0, 0, correct=0, total=0)]) == 0


def test_completed_before_is_strict():
    cutoff = BASE + timedelta(days=2)
    attempts = [
        _attempt("q1", 5, 1),
        _attempt("q1", 15, 2, number=2),
        _attempt("q2", 10, None),
    ]
    assert [a.score_earned for a in completed_before(attempts, cutoff)] == [5]


def test_group_by_user_keeps_order():
    attempts = [
        _attempt("q1", 5, 0, user_id=2),
        _attempt("q1", 10, 0, user_id=1),
        _attempt("q2", 20, 1, user_id=2),
    ]
    grouped = group_by_user(attempts)
    assert [a.score_earned for a in grouped[2]] == [5, 20]
    assert [a.score_earned for a in grouped[1]] == [10]
