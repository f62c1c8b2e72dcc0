"""Scoring service: the façade used by the quiz and dashboard routes.

The service wires grading, aggregation and ranking to a storage
collaborator.  It is the only part of the scoring code with side effects,
and its single write (a new attempt) relies on the storage unique
constraint to reject double submissions.  Callers must have authorized
the request before calling in.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Callable, Sequence

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portal import activity, aggregation, scoring
from portal.database import get_session
from portal.errors import (
    ConflictError,
    InternalError,
    NotFoundError,
    ScoringError,
    ValidationError,
)
from portal.grading import score_attempt
from portal.models import QuizAttempt
from portal.schemas import (
    AnswerSubmission,
    AttemptRead,
    LeaderboardEntry,
    PersonalKpis,
    SubmitResult,
    TeamMember,
    TeamMetrics,
    TeamMetricsRow,
)
from portal.storage import DatabaseStore, ScoringStore

logger = logging.getLogger(__name__)

SCORE_DELTA_WINDOW = timedelta(days=7)
LEADERBOARD_SIZE = 10


def _answer_payload(answer: Any) -> dict:
    if isinstance(answer, AnswerSubmission):
        return answer.model_dump()
    if isinstance(answer, dict):
        return dict(answer)
    return {"raw": repr(answer)}


class ScoringService:
    def __init__(
        self,
        store: ScoringStore,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.store = store
        self.clock = clock

    async def _call(self, what: str, coro):
        """Await a storage call, turning unexpected failures into InternalError."""
        try:
            return await coro
        except ScoringError:
            raise
        except Exception as exc:
            logger.exception("Storage call %s failed", what)
            raise InternalError(f"Storage failure during {what}") from exc

    async def submit_attempt(
        self, user_id: int, quiz_id: str, answers: Sequence[Any]
    ) -> SubmitResult:
        """Grade and record one quiz attempt for ``user_id``."""

        if not quiz_id or not isinstance(quiz_id, str):
            raise ValidationError("quiz_id and answers required")
        if not isinstance(answers, (list, tuple)):
            raise ValidationError("quiz_id and answers required")

        questions = await self._call("get_questions", self.store.get_questions(quiz_id))
        if not questions:
            raise NotFoundError(f"Video or quiz {quiz_id!r} not found")

        previous = await self._call(
            "count_attempts", self.store.count_attempts(user_id, quiz_id)
        )
        attempt_number = previous + 1
        is_first_attempt = attempt_number == 1
        scored = score_attempt(questions, answers, is_first_attempt)

        record = QuizAttempt(
            user_id=user_id,
            quiz_id=quiz_id,
            attempt_number=attempt_number,
            completed_at=self.clock(),
            total_questions=scored.total_questions,
            correct_answers=scored.correct_answers,
            first_try_correct=scored.first_try_correct,
            score_earned=scored.score_earned,
            answers=[_answer_payload(a) for a in answers],
        )
        try:
            attempt = await self._call("create_attempt", self.store.create_attempt(record))
        except ConflictError:
            logger.warning(
                "Duplicate submission for user %s quiz %s attempt %s",
                user_id,
                quiz_id,
                attempt_number,
            )
            raise
        logger.info(
            "User %s scored %s on %s (attempt %s)",
            user_id,
            scored.score_earned,
            quiz_id,
            attempt_number,
        )
        return SubmitResult(
            attempt=AttemptRead(
                id=attempt.id,
                quiz_id=quiz_id,
                attempt_number=attempt_number,
                total_questions=scored.total_questions,
                correct_answers=scored.correct_answers,
                first_try_correct=scored.first_try_correct,
                score_earned=scored.score_earned,
                completed_at=attempt.completed_at,
                is_first_attempt=is_first_attempt,
            )
        )

    async def personal_kpis(self, user_id: int) -> PersonalKpis:
        """Dashboard figures for one user, ranked against every user."""

        now = self.clock()
        own = await self._call("find_attempts", self.store.find_attempts(user_id))
        latest = aggregation.latest_per_quiz(own)
        logins = await self._call(
            "find_login_timestamps", self.store.find_login_timestamps(user_id)
        )

        users = await self._call("list_users", self.store.list_users())
        by_user = aggregation.group_by_user(
            await self._call("find_attempts", self.store.find_attempts())
        )
        user_scores = {u.id: aggregation.total_score(by_user.get(u.id, [])) for u in users}
        all_scores = [user_scores[u.id] for u in users]
        my_score = user_scores.get(user_id, aggregation.sum_score(latest))
        pct = scoring.percentile(my_score, all_scores)

        top10 = scoring.leaderboard(
            (
                {"id": u.external_id, "name": u.name, "score": user_scores[u.id]}
                for u in users
            ),
            limit=LEADERBOARD_SIZE,
        )
        return PersonalKpis(
            total_score=aggregation.sum_score(latest),
            quizzes_completed=len(latest),
            accuracy=aggregation.accuracy(latest),
            streak=activity.weekday_streak(logins, now.date()),
            rank=scoring.rank_position(my_score, all_scores),
            total=len(users),
            percentile=pct,
            grade=scoring.grade(pct),
            top10=[LeaderboardEntry(**entry) for entry in top10],
        )

    async def team_metrics(self, team_id: str) -> TeamMetrics:
        """Per-member progress table for a manager's team."""

        now = self.clock()
        cutoff = now - SCORE_DELTA_WINDOW
        monday = activity.week_start(now.date())
        catalog_size = await self._call(
            "total_video_count", self.store.total_video_count()
        )
        members = await self._call("list_users", self.store.list_users(team_id))

        rows = []
        for member in members:
            attempts = await self._call(
                "find_attempts", self.store.find_attempts(member.id)
            )
            latest = aggregation.latest_per_quiz(attempts)
            current = aggregation.sum_score(latest)
            before = aggregation.total_score(
                aggregation.completed_before(attempts, cutoff)
            )

            logins = await self._call(
                "find_login_timestamps",
                self.store.find_login_timestamps(member.id, min(cutoff, monday)),
            )
            videos_done = await self._call(
                "count_completed_videos", self.store.count_completed_videos(member.id)
            )
            completion = (
                scoring.round_half_up(videos_done / catalog_size * 100)
                if catalog_size > 0
                else 0
            )

            rows.append(
                TeamMetricsRow(
                    member=TeamMember(
                        id=member.external_id, name=member.name, role=member.role
                    ),
                    current_score=current,
                    score_delta=current - before,
                    logins_7d=activity.count_since(logins, cutoff),
                    work_week_days=activity.work_week_presence(logins, now.date()),
                    quizzes_completed=len(latest),
                    accuracy=aggregation.accuracy(latest),
                    videos_completed=videos_done,
                    completion_pct=completion,
                )
            )

        rows.sort(key=lambda r: r.current_score, reverse=True)
        return TeamMetrics(rows=rows, team_id=team_id)


def get_clock() -> Callable[[], datetime]:
    """Dependency returning the wall clock; tests override it."""
    return datetime.utcnow


def get_scoring_service(
    db: AsyncSession = Depends(get_session),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> ScoringService:
    return ScoringService(DatabaseStore(db), clock=clock)
