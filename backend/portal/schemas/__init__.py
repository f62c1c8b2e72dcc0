"""Convenience imports for all schema classes used by the API."""

from .user import UserCreate, UserUpdate, UserResponse, UserLogin, RegisterRequest
from .team import TeamCreate, TeamRead, TeamUpdate
from .quiz import (
    AnswerSubmission,
    QuizSubmit,
    ScoredResult,
    AttemptRead,
    SubmitResult,
    AttemptHistory,
    QuestionRead,
    VideoRead,
)
from .dashboard import (
    LeaderboardEntry,
    PersonalKpis,
    TeamMember,
    TeamMetricsRow,
    TeamMetrics,
)
from .progress import ProgressUpdate, ProgressEntry, ProgressRead

__all__ = [
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "UserLogin",
    "RegisterRequest",
    "TeamCreate",
    "TeamRead",
    "TeamUpdate",
    "AnswerSubmission",
    "QuizSubmit",
    "ScoredResult",
    "AttemptRead",
    "SubmitResult",
    "AttemptHistory",
    "QuestionRead",
    "VideoRead",
    "LeaderboardEntry",
    "PersonalKpis",
    "TeamMember",
    "TeamMetricsRow",
    "TeamMetrics",
    "ProgressUpdate",
    "ProgressEntry",
    "ProgressRead",
]
