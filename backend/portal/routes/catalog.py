"""Read-only access to the training video catalog."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portal.auth import get_current_user
from portal.crud import get_all_videos
from portal.database import get_session
from portal.models import User
from portal.schemas import QuestionRead, VideoRead

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("/videos", response_model=list[VideoRead])
async def list_videos(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    # answer keys stay on the server; grading happens in /quiz/submit
    videos = await get_all_videos(db)
    return [
        VideoRead(
            id=v.id,
            step_id=v.step_id,
            title=v.title,
            channel=v.channel,
            url=v.url,
            level=v.level,
            duration=v.duration,
            questions=[
                QuestionRead(question_id=q.question_id, prompt=q.prompt, choices=q.choices)
                for q in sorted(v.questions, key=lambda q: q.id)
            ],
        )
        for v in videos
    ]
