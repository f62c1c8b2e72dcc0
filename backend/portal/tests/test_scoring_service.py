"""Tests for the scoring service against an in-memory database."""

import asyncio
import pathlib
import sys
from datetime import datetime, timedelta

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker
from sqlmodel import SQLModel, select

sys.path.append(str(pathlib.Path(__file__).resolve().parents[2]))

from portal.crud import ensure_training_content, record_login, set_video_progress
from portal.errors import ConflictError, InternalError, NotFoundError, ValidationError
from portal.models import QuizAttempt, Team, User
from portal.service import ScoringService
from portal.storage import DatabaseStore

# Wednesday
NOW = datetime(2026, 10, 14, 12, 0)

INTRO_RIGHT = [
    {"question_id": "q1", "first_selected_index": 0, "final_selected_index": 0},
    {"question_id": "q2", "first_selected_index": 1, "final_selected_index": 1},
    {"question_id": "q3", "first_selected_index": 2, "final_selected_index": 2},
]
INTRO_ONE_RIGHT = [
    {"question_id": "q1", "first_selected_index": 3, "final_selected_index": 0},
]


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


async def _setup_db():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    TestSession = async_sessionmaker(engine, expire_on_commit=False)

    async with TestSession() as session:
        await ensure_training_content(session)
        session.add(Team(id="alpha", name="Alpha"))
        session.add(Team(id="beta", name="Beta"))
        for ext, role, team in [
            ("sara", "manager", "alpha"),
            ("alex", "learner", "alpha"),
            ("mike", "learner", "alpha"),
            ("nina", "learner", "beta"),
        ]:
            session.add(
                User(
                    external_id=ext,
                    name=ext.title(),
                    password_hash="x",
                    role=role,
                    team_id=team,
                )
            )
        await session.commit()
    return TestSession


async def _user_id(session, external_id):
    result = await session.execute(select(User).where(User.external_id == external_id))
    return result.scalar_one().id


def test_submit_scores_and_numbers_attempts():
    async def run():
        TestSession = await _setup_db()
        clock = FakeClock(NOW)
        async with TestSession() as session:
            service = ScoringService(DatabaseStore(session), clock=clock)
            alex = await _user_id(session, "alex")

            first = await service.submit_attempt(alex, "intro-to-llms", INTRO_RIGHT)
            assert first.attempt.attempt_number == 1
            assert first.attempt.is_first_attempt is True
            assert first.attempt.score_earned == 45
            assert first.attempt.completed_at == NOW

            clock.now = NOW + timedelta(hours=1)
            second = await service.submit_attempt(alex, "intro-to-llms", INTRO_RIGHT)
            assert second.attempt.attempt_number == 2
            assert second.attempt.is_first_attempt is False
            assert second.attempt.first_try_correct == 0
            assert second.attempt.score_earned == 30

            result = await session.execute(
                select(QuizAttempt).where(QuizAttempt.user_id == alex)
            )
            stored = result.scalars().all()
            assert len(stored) == 2
            assert stored[0].answers[0]["question_id"] == "q1"

    asyncio.run(run())


def test_submit_rejects_unknown_quiz_and_bad_input():
    async def run():
        TestSession = await _setup_db()
        async with TestSession() as session:
            service = ScoringService(DatabaseStore(session), clock=FakeClock(NOW))
            alex = await _user_id(session, "alex")
            with pytest.raises(NotFoundError):
                await service.submit_attempt(alex, "no-such-video", INTRO_RIGHT)
            # video exists but carries no quiz
            with pytest.raises(NotFoundError):
                await service.submit_attempt(alex, "policy-walkthrough", [])
            with pytest.raises(ValidationError):
                await service.submit_attempt(alex, "", INTRO_RIGHT)
            with pytest.raises(ValidationError):
                await service.submit_attempt(alex, "intro-to-llms", "q1=0")

    asyncio.run(run())


class StaleCountStore(DatabaseStore):
    """Simulates a concurrent writer by always reporting zero prior attempts."""

    async def count_attempts(self, user_id, quiz_id):
        return 0


def test_double_submit_is_a_conflict():
    async def run():
        TestSession = await _setup_db()
        async with TestSession() as session:
            service = ScoringService(StaleCountStore(session), clock=FakeClock(NOW))
            alex = await _user_id(session, "alex")
            await service.submit_attempt(alex, "intro-to-llms", INTRO_RIGHT)
            with pytest.raises(ConflictError):
                await service.submit_attempt(alex, "intro-to-llms", INTRO_RIGHT)

            result = await session.execute(
                select(QuizAttempt).where(QuizAttempt.user_id == alex)
            )
            attempts = result.scalars().all()
            assert len(attempts) == 1
            assert attempts[0].score_earned == 45

    asyncio.run(run())


class NullQuizStore(DatabaseStore):
    """Writes a row that breaks a NOT NULL column instead of the unique key."""

    async def create_attempt(self, attempt):
        attempt.quiz_id = None
        return await super().create_attempt(attempt)


def test_other_integrity_errors_are_not_conflicts():
    async def run():
        TestSession = await _setup_db()
        async with TestSession() as session:
            service = ScoringService(NullQuizStore(session), clock=FakeClock(NOW))
            alex = await _user_id(session, "alex")
            with pytest.raises(InternalError) as excinfo:
                await service.submit_attempt(alex, "intro-to-llms", INTRO_RIGHT)
            assert not isinstance(excinfo.value, ConflictError)
            assert isinstance(excinfo.value.__cause__, IntegrityError)

            result = await session.execute(select(QuizAttempt))
            assert result.scalars().all() == []

    asyncio.run(run())


class BrokenStore(DatabaseStore):
    async def find_attempts(self, user_id=None):
        raise OperationalError("SELECT", {}, Exception("database is locked"))


def test_storage_failures_become_internal_errors():
    async def run():
        TestSession = await _setup_db()
        async with TestSession() as session:
            service = ScoringService(BrokenStore(session), clock=FakeClock(NOW))
            alex = await _user_id(session, "alex")
            with pytest.raises(InternalError):
                await service.personal_kpis(alex)

    asyncio.run(run())


def test_personal_kpis_rank_against_everyone():
    async def run():
        TestSession = await _setup_db()
        clock = FakeClock(NOW - timedelta(days=1))
        async with TestSession() as session:
            service = ScoringService(DatabaseStore(session), clock=clock)
            alex = await _user_id(session, "alex")
            mike = await _user_id(session, "mike")
            nina = await _user_id(session, "nina")

            # alex: perfect first, then a weaker retry that replaces it
            await service.submit_attempt(alex, "intro-to-llms", INTRO_RIGHT)
            await service.submit_attempt(
                mike,
                "prompting-basics",
                [
                    {"question_id": "q1", "first_selected_index": 1, "final_selected_index": 1},
                    {"question_id": "q2", "first_selected_index": 0, "final_selected_index": 0},
                ],
            )
            await service.submit_attempt(nina, "intro-to-llms", INTRO_RIGHT)
            clock.now = NOW
            await service.submit_attempt(alex, "intro-to-llms", INTRO_ONE_RIGHT)

            for day in (NOW, NOW - timedelta(days=1), NOW - timedelta(days=2)):
                await record_login(session, alex, day)

            kpis = await service.personal_kpis(alex)
            assert kpis.total_score == 10
            assert kpis.quizzes_completed == 1
            assert kpis.accuracy == 33
            assert kpis.streak == 3
            # scores: sara 0, alex 10, mike 30, nina 45
            assert kpis.total == 4
            assert kpis.rank == 3
            assert kpis.percentile == 33
            assert kpis.grade == "C"
            assert [e.id for e in kpis.top10] == ["nina", "mike", "alex", "sara"]
            assert [e.position for e in kpis.top10] == [1, 2, 3, 4]

            top = await service.personal_kpis(nina)
            assert top.rank == 1
            assert top.percentile == 100
            assert top.grade == "A"
            assert top.streak == 0

    asyncio.run(run())


def test_team_metrics_rows():
    async def run():
        TestSession = await _setup_db()
        clock = FakeClock(NOW - timedelta(days=10))
        async with TestSession() as session:
            service = ScoringService(DatabaseStore(session), clock=clock)
            alex = await _user_id(session, "alex")
            mike = await _user_id(session, "mike")

            # ten days ago alex got 10 on intro; today he retakes it for 30
            await service.submit_attempt(alex, "intro-to-llms", INTRO_ONE_RIGHT)
            clock.now = NOW
            await service.submit_attempt(alex, "intro-to-llms", INTRO_RIGHT)
            await service.submit_attempt(
                mike,
                "data-handling",
                [{"question_id": "q1", "first_selected_index": 1, "final_selected_index": 1}],
            )

            await record_login(session, alex, datetime(2026, 10, 12, 8))
            await record_login(session, alex, datetime(2026, 10, 14, 8))
            await record_login(session, alex, datetime(2026, 10, 14, 15))
            await record_login(session, alex, datetime(2026, 10, 1, 8))
            await set_video_progress(session, alex, "intro-to-llms", True)
            await set_video_progress(session, alex, "prompting-basics", True)
            await set_video_progress(session, mike, "data-handling", False)

            metrics = await service.team_metrics("alpha")
            assert metrics.team_id == "alpha"
            assert [r.member.id for r in metrics.rows] == ["alex", "mike", "sara"]

            alex_row, mike_row, sara_row = metrics.rows
            assert alex_row.current_score == 30
            assert alex_row.score_delta == 20
            assert alex_row.logins_7d == 3
            assert alex_row.work_week_days == [True, False, True, False, False]
            assert alex_row.quizzes_completed == 1
            assert alex_row.accuracy == 100
            assert alex_row.videos_completed == 2
            assert alex_row.completion_pct == 50

            assert mike_row.current_score == 15
            assert mike_row.score_delta == 15
            assert mike_row.accuracy == 33
            assert mike_row.videos_completed == 0

            assert sara_row.member.role == "manager"
            assert sara_row.current_score == 0
            assert sara_row.work_week_days == [False] * 5

            other = await service.team_metrics("beta")
            assert [r.member.id for r in other.rows] == ["nina"]

    asyncio.run(run())
