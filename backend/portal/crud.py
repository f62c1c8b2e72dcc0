"""Asynchronous CRUD helpers for the application's data models.

Each function in this module encapsulates a specific database operation
using SQLModel and SQLAlchemy.  Centralizing the logic keeps route
handlers and the scoring service light and makes behavior easier to test.
"""

from datetime import datetime

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlmodel import select, delete

from portal.auth import get_password_hash
from portal.models import (
    Team,
    User,
    Video,
    QuizQuestion,
    QuizAttempt,
    LoginEvent,
    VideoProgress,
)


async def create_user(db: AsyncSession, user: User) -> User:
    """Create a new user, hashing the password if it is still plain text."""

    if not user.password_hash.startswith("$2b$"):
        user.password_hash = get_password_hash(user.password_hash)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def get_user_by_external_id(db: AsyncSession, external_id: str) -> User | None:
    """Return a user by login handle or ``None`` if not found."""
    result = await db.execute(select(User).where(User.external_id == external_id))
    return result.scalar_one_or_none()


async def get_user(db: AsyncSession, user_id: int) -> User | None:
    return await db.get(User, user_id)


async def get_all_users(db: AsyncSession) -> list[User]:
    result = await db.execute(select(User).order_by(User.id))
    return result.scalars().all()


async def get_users_by_team(db: AsyncSession, team_id: str) -> list[User]:
    result = await db.execute(
        select(User).where(User.team_id == team_id).order_by(User.id)
    )
    return result.scalars().all()


async def count_users(db: AsyncSession) -> int:
    result = await db.execute(select(func.count()).select_from(User))
    return result.scalar()


async def save_user(db: AsyncSession, user: User) -> User:
    """Persist changes to an existing user."""

    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def delete_user(db: AsyncSession, user: User) -> None:
    """Remove a user together with their attempts, logins and progress."""
    await db.execute(delete(QuizAttempt).where(QuizAttempt.user_id == user.id))
    await db.execute(delete(LoginEvent).where(LoginEvent.user_id == user.id))
    await db.execute(delete(VideoProgress).where(VideoProgress.user_id == user.id))
    await db.delete(user)
    await db.commit()


async def create_team(db: AsyncSession, team: Team) -> Team:
    db.add(team)
    await db.commit()
    await db.refresh(team)
    return team


async def get_team(db: AsyncSession, team_id: str) -> Team | None:
    return await db.get(Team, team_id)


async def get_all_teams(db: AsyncSession) -> list[Team]:
    result = await db.execute(select(Team).order_by(Team.id))
    return result.scalars().all()


async def save_team(db: AsyncSession, team: Team) -> Team:
    db.add(team)
    await db.commit()
    await db.refresh(team)
    return team


async def count_team_members(db: AsyncSession, team_id: str) -> int:
    result = await db.execute(
        select(func.count()).select_from(User).where(User.team_id == team_id)
    )
    return result.scalar()


async def delete_team(db: AsyncSession, team: Team) -> None:
    await db.delete(team)
    await db.commit()


async def record_login(
    db: AsyncSession, user_id: int, when: datetime | None = None
) -> LoginEvent:
    """Store a login event; these drive streaks and weekly presence."""

    event = LoginEvent(user_id=user_id, created_at=when or datetime.utcnow())
    db.add(event)
    await db.commit()
    await db.refresh(event)
    return event


async def get_login_timestamps(
    db: AsyncSession, user_id: int, since: datetime | None = None
) -> list[datetime]:
    query = select(LoginEvent.created_at).where(LoginEvent.user_id == user_id)
    if since is not None:
        query = query.where(LoginEvent.created_at >= since)
    result = await db.execute(query.order_by(LoginEvent.created_at.desc()))
    return list(result.scalars().all())


async def ensure_training_content(db: AsyncSession) -> None:
    """Seed the database with the built-in video catalog and quizzes."""

    from portal.training_content import TRAINING_STEPS

    for step in TRAINING_STEPS:
        for data in step["videos"]:
            video = await db.get(Video, data["id"])
            if video:
                continue
            db.add(
                Video(
                    id=data["id"],
                    step_id=step["id"],
                    title=data["title"],
                    channel=data["channel"],
                    url=data["url"],
                    level=data.get("level", "Beginner"),
                    duration=data.get("duration", ""),
                )
            )
            for q in data.get("questions", []):
                db.add(
                    QuizQuestion(
                        video_id=data["id"],
                        question_id=q["id"],
                        prompt=q["prompt"],
                        choices=q["choices"],
                        answer_index=q["answer"],
                        explanation=q.get("explanation", ""),
                    )
                )
    await db.commit()


async def get_all_videos(db: AsyncSession) -> list[Video]:
    result = await db.execute(
        select(Video).options(selectinload(Video.questions)).order_by(Video.step_id, Video.id)
    )
    return result.scalars().all()


async def count_videos(db: AsyncSession) -> int:
    result = await db.execute(select(func.count()).select_from(Video))
    return result.scalar()


async def get_questions_for_video(
    db: AsyncSession, video_id: str
) -> list[QuizQuestion] | None:
    """Return the quiz for a video, or ``None`` when the video is unknown."""

    video = await db.get(Video, video_id)
    if video is None:
        return None
    result = await db.execute(
        select(QuizQuestion)
        .where(QuizQuestion.video_id == video_id)
        .order_by(QuizQuestion.id)
    )
    return result.scalars().all()


async def count_attempts(db: AsyncSession, user_id: int, quiz_id: str) -> int:
    result = await db.execute(
        select(func.count())
        .select_from(QuizAttempt)
        .where(QuizAttempt.user_id == user_id, QuizAttempt.quiz_id == quiz_id)
    )
    return result.scalar()


async def create_attempt(db: AsyncSession, attempt: QuizAttempt) -> QuizAttempt:
    """Insert a scored attempt.

    A duplicate ``(user_id, quiz_id, attempt_number)`` raises
    :class:`IntegrityError` after the session has been rolled back.
    """
    db.add(attempt)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise
    await db.refresh(attempt)
    return attempt


async def get_completed_attempts(
    db: AsyncSession, user_id: int | None = None
) -> list[QuizAttempt]:
    """Completed attempts in ascending completion order, optionally for one user."""

    query = select(QuizAttempt).where(QuizAttempt.completed_at.is_not(None))
    if user_id is not None:
        query = query.where(QuizAttempt.user_id == user_id)
    result = await db.execute(
        query.order_by(QuizAttempt.completed_at, QuizAttempt.id)
    )
    return result.scalars().all()


async def get_attempts_for_quiz(
    db: AsyncSession, user_id: int, quiz_id: str
) -> list[QuizAttempt]:
    result = await db.execute(
        select(QuizAttempt)
        .where(QuizAttempt.user_id == user_id, QuizAttempt.quiz_id == quiz_id)
        .order_by(QuizAttempt.attempt_number)
    )
    return result.scalars().all()


async def get_progress_by_user(db: AsyncSession, user_id: int) -> list[VideoProgress]:
    result = await db.execute(
        select(VideoProgress).where(VideoProgress.user_id == user_id)
    )
    return result.scalars().all()


async def set_video_progress(
    db: AsyncSession, user_id: int, video_id: str, done: bool
) -> VideoProgress:
    """Create or update the watched flag for one video."""

    result = await db.execute(
        select(VideoProgress).where(
            VideoProgress.user_id == user_id, VideoProgress.video_id == video_id
        )
    )
    progress = result.scalar_one_or_none()
    if not progress:
        progress = VideoProgress(user_id=user_id, video_id=video_id)
    progress.done = done
    progress.completed_at = datetime.utcnow() if done else None
    db.add(progress)
    await db.commit()
    await db.refresh(progress)
    return progress


async def count_completed_videos(db: AsyncSession, user_id: int) -> int:
    result = await db.execute(
        select(func.count())
        .select_from(VideoProgress)
        .where(VideoProgress.user_id == user_id, VideoProgress.done == True)  # noqa: E712
    )
    return result.scalar()
