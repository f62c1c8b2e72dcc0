from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel


class ProgressUpdate(BaseModel):
    video_id: str
    done: bool


class ProgressEntry(BaseModel):
    done: bool
    completed_at: Optional[datetime] = None


class ProgressRead(BaseModel):
    videos: Dict[str, ProgressEntry]
