"""Request and response bodies for quiz submission and history."""

from datetime import datetime
from typing import Any, List, Optional

from sqlmodel import SQLModel


class AnswerSubmission(SQLModel):
    """Answer to one question; ``-1`` (or missing) means unanswered.

    Indices are taken as sent; grading treats anything that is not an
    integer as a wrong choice.
    """

    question_id: str
    first_selected_index: Any = -1
    final_selected_index: Any = -1


class QuizSubmit(SQLModel):
    # checked by ScoringService.submit_attempt so bad input gets a 400
    quiz_id: Any = None
    answers: Any = None


class ScoredResult(SQLModel):
    total_questions: int
    correct_answers: int
    first_try_correct: int
    score_earned: int


class AttemptRead(SQLModel):
    id: int
    quiz_id: str
    attempt_number: int
    total_questions: int
    correct_answers: int
    first_try_correct: int
    score_earned: int
    completed_at: Optional[datetime] = None
    is_first_attempt: bool = False


class SubmitResult(SQLModel):
    attempt: AttemptRead


class AttemptHistory(SQLModel):
    attempts: List[AttemptRead]
    best: Optional[AttemptRead] = None


class QuestionRead(SQLModel):
    question_id: str
    prompt: str
    choices: List[str]


class VideoRead(SQLModel):
    id: str
    step_id: str
    title: str
    channel: str
    url: str
    level: str
    duration: str
    questions: List[QuestionRead]
