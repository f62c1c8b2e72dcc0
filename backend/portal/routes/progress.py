"""Per-user video completion flags."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from portal.auth import get_current_user
from portal.crud import get_progress_by_user, set_video_progress
from portal.database import get_session
from portal.models import User, Video
from portal.schemas import ProgressEntry, ProgressRead, ProgressUpdate

router = APIRouter(prefix="/progress", tags=["progress"])


@router.get("", response_model=ProgressRead)
async def read_progress(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    progress = await get_progress_by_user(db, user.id)
    return ProgressRead(
        videos={
            p.video_id: ProgressEntry(done=p.done, completed_at=p.completed_at)
            for p in progress
        }
    )


@router.post("")
async def update_progress(
    data: ProgressUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    if await db.get(Video, data.video_id) is None:
        raise HTTPException(status_code=404, detail="Video not found")
    record = await set_video_progress(db, user.id, data.video_id, data.done)
    return {"video_id": record.video_id, "done": record.done}
