"""Storage collaborator used by :class:`portal.service.ScoringService`.

The service only depends on the :class:`ScoringStore` protocol, so tests
and other deployments can hand it any object with these coroutines.
:class:`DatabaseStore` is the implementation backed by the application's
SQLModel tables.
"""

from datetime import datetime
from typing import Protocol, Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from portal import crud
from portal.errors import ConflictError
from portal.models import QuizAttempt, QuizQuestion, User

# SQLite reports the columns, other backends the constraint name.
_DUPLICATE_ATTEMPT_MARKERS = (
    "uq_quiz_attempt_number",
    "quizattempt.user_id, quizattempt.quiz_id, quizattempt.attempt_number",
)


def _is_duplicate_attempt(exc: IntegrityError) -> bool:
    message = str(exc.orig)
    return any(marker in message for marker in _DUPLICATE_ATTEMPT_MARKERS)


class ScoringStore(Protocol):
    async def get_questions(self, quiz_id: str) -> Sequence[QuizQuestion] | None: ...

    async def count_attempts(self, user_id: int, quiz_id: str) -> int: ...

    async def create_attempt(self, attempt: QuizAttempt) -> QuizAttempt: ...

    async def find_attempts(self, user_id: int | None = None) -> Sequence[QuizAttempt]: ...

    async def find_login_timestamps(
        self, user_id: int, since: datetime | None = None
    ) -> Sequence[datetime]: ...

    async def list_users(self, team_id: str | None = None) -> Sequence[User]: ...

    async def total_video_count(self) -> int: ...

    async def count_completed_videos(self, user_id: int) -> int: ...


class DatabaseStore:
    """:class:`ScoringStore` over an ``AsyncSession``."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_questions(self, quiz_id: str):
        return await crud.get_questions_for_video(self.db, quiz_id)

    async def count_attempts(self, user_id: int, quiz_id: str) -> int:
        return await crud.count_attempts(self.db, user_id, quiz_id)

    async def create_attempt(self, attempt: QuizAttempt) -> QuizAttempt:
        try:
            return await crud.create_attempt(self.db, attempt)
        except IntegrityError as exc:
            if not _is_duplicate_attempt(exc):
                raise
            raise ConflictError("Attempt already recorded") from exc

    async def find_attempts(self, user_id: int | None = None):
        """Completed attempts ordered by completion time, then insertion."""
        return await crud.get_completed_attempts(self.db, user_id)

    async def find_login_timestamps(self, user_id: int, since: datetime | None = None):
        return await crud.get_login_timestamps(self.db, user_id, since)

    async def list_users(self, team_id: str | None = None):
        if team_id is None:
            return await crud.get_all_users(self.db)
        return await crud.get_users_by_team(self.db, team_id)

    async def total_video_count(self) -> int:
        return await crud.count_videos(self.db)

    async def count_completed_videos(self, user_id: int) -> int:
        return await crud.count_completed_videos(self.db, user_id)
