"""Response bodies for the personal and manager dashboards."""

from typing import List

from pydantic import BaseModel


class LeaderboardEntry(BaseModel):
    id: str
    name: str
    score: int
    position: int


class PersonalKpis(BaseModel):
    total_score: int
    quizzes_completed: int
    accuracy: int
    streak: int
    rank: int
    total: int
    percentile: int
    grade: str
    top10: List[LeaderboardEntry]


class TeamMember(BaseModel):
    id: str
    name: str
    role: str


class TeamMetricsRow(BaseModel):
    member: TeamMember
    current_score: int
    score_delta: int
    logins_7d: int
    work_week_days: List[bool]
    quizzes_completed: int
    accuracy: int
    videos_completed: int
    completion_pct: int


class TeamMetrics(BaseModel):
    rows: List[TeamMetricsRow]
    team_id: str | None = None
