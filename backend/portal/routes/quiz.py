"""Routes for submitting quizzes and reading attempt history."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portal.auth import get_current_user
from portal.crud import get_attempts_for_quiz
from portal.database import get_session
from portal.models import User
from portal.schemas import AttemptHistory, AttemptRead, QuizSubmit, SubmitResult
from portal.service import ScoringService, get_scoring_service

router = APIRouter(prefix="/quiz", tags=["quiz"])


@router.post("/submit", response_model=SubmitResult)
async def submit_quiz(
    submission: QuizSubmit,
    user: User = Depends(get_current_user),
    service: ScoringService = Depends(get_scoring_service),
):
    return await service.submit_attempt(user.id, submission.quiz_id, submission.answers)


@router.get("/{video_id}", response_model=AttemptHistory)
async def quiz_history(
    video_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    attempts = [
        AttemptRead(
            id=a.id,
            quiz_id=a.quiz_id,
            attempt_number=a.attempt_number,
            total_questions=a.total_questions,
            correct_answers=a.correct_answers,
            first_try_correct=a.first_try_correct,
            score_earned=a.score_earned,
            completed_at=a.completed_at,
            is_first_attempt=a.attempt_number == 1,
        )
        for a in await get_attempts_for_quiz(db, user.id, video_id)
    ]
    best = None
    for attempt in attempts:
        if best is None or attempt.score_earned > best.score_earned:
            best = attempt
    return AttemptHistory(attempts=attempts, best=best)
