"""Database models used by the training portal.

The models are defined with SQLModel (built on SQLAlchemy and Pydantic)
and represent teams, users, the video/quiz catalog, scored quiz attempts
and the login history used for streaks.
"""

from typing import Optional, List
from datetime import datetime
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, JSON, UniqueConstraint


class Team(SQLModel, table=True):
    """Group of learners reporting to one manager."""

    id: str = Field(primary_key=True)
    name: str
    track: str = "dev"  # 'dev' or 'business'

    members: List["User"] = Relationship(back_populates="team")


class User(SQLModel, table=True):
    """Portal user identified by a company handle."""

    id: Optional[int] = Field(default=None, primary_key=True)
    external_id: str = Field(unique=True, index=True)
    name: str
    password_hash: str
    role: str = "learner"  # 'learner', 'manager', 'admin'
    team_id: Optional[str] = Field(default=None, foreign_key="team.id")
    created_at: datetime = Field(default_factory=datetime.utcnow)

    team: Optional[Team] = Relationship(back_populates="members")


class Video(SQLModel, table=True):
    """Training video; its id doubles as the quiz id."""

    id: str = Field(primary_key=True)
    step_id: str
    title: str
    channel: str
    url: str
    level: str = "Beginner"
    duration: str = ""

    questions: List["QuizQuestion"] = Relationship(back_populates="video")


class QuizQuestion(SQLModel, table=True):
    """Canonical multiple choice question attached to a video."""

    id: Optional[int] = Field(default=None, primary_key=True)
    video_id: str = Field(foreign_key="video.id", index=True)
    question_id: str
    prompt: str
    choices: List[str] = Field(sa_column=Column(JSON), default_factory=list)
    answer_index: int
    explanation: str = ""

    video: Video = Relationship(back_populates="questions")


class QuizAttempt(SQLModel, table=True):
    """One scored quiz submission. Never updated after it is written."""

    __table_args__ = (
        UniqueConstraint(
            "user_id", "quiz_id", "attempt_number", name="uq_quiz_attempt_number"
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    quiz_id: str = Field(index=True)
    attempt_number: int
    completed_at: Optional[datetime] = None
    total_questions: int = 0
    correct_answers: int = 0
    first_try_correct: int = 0
    score_earned: int = 0
    answers: List[dict] = Field(sa_column=Column(JSON), default_factory=list)


class LoginEvent(SQLModel, table=True):
    """Successful login, kept as the user's activity history."""

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)


class VideoProgress(SQLModel, table=True):
    """Per-user "watched" flag for a video."""

    __table_args__ = (
        UniqueConstraint("user_id", "video_id", name="uq_video_progress"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    video_id: str = Field(foreign_key="video.id")
    done: bool = False
    completed_at: Optional[datetime] = None

