from fastapi import APIRouter, Depends

from portal.auth import get_current_user
from portal.models import User
from portal.schemas import PersonalKpis
from portal.service import ScoringService, get_scoring_service

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/kpis", response_model=PersonalKpis)
async def personal_kpis(
    user: User = Depends(get_current_user),
    service: ScoringService = Depends(get_scoring_service),
):
    """Score, accuracy, streak and company-wide standing of the caller."""
    return await service.personal_kpis(user.id)
