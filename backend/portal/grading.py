"""Server-side grading of a single quiz attempt."""

from typing import Any, Iterable, Sequence

from portal.models import QuizQuestion
from portal.schemas.quiz import ScoredResult
from portal.scoring import calc_quiz_points


def _get(answer: Any, name: str):
    if isinstance(answer, dict):
        return answer.get(name)
    return getattr(answer, name, None)


def _selected(answer: Any, name: str) -> int | None:
    value = _get(answer, name)
    # bool is an int subclass; True must not match choice 1
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def score_attempt(
    questions: Sequence[QuizQuestion],
    answers: Iterable[Any],
    is_first_attempt: bool,
) -> ScoredResult:
    """Grade ``answers`` against the authoritative ``questions``.

    Only the final selection decides correctness.  The first-try bonus
    additionally needs the first click to be right and this to be the
    user's first attempt at the quiz.  Questions without a submitted
    answer are skipped, and malformed answers simply do not score.
    """
    by_question = {}
    for answer in answers:
        question_id = _get(answer, "question_id")
        if isinstance(question_id, str):
            by_question[question_id] = answer

    correct = 0
    first_try = 0
    for q in questions:
        answer = by_question.get(q.question_id)
        if answer is None:
            continue
        final_ok = _selected(answer, "final_selected_index") == q.answer_index
        first_ok = _selected(answer, "first_selected_index") == q.answer_index
        if final_ok:
            correct += 1
            if first_ok and is_first_attempt:
                first_try += 1

    return ScoredResult(
        total_questions=len(questions),
        correct_answers=correct,
        first_try_correct=first_try,
        score_earned=calc_quiz_points(correct, first_try),
    )
