from fastapi import APIRouter, Depends

from portal.acl import TEAM_METRICS_ROLES
from portal.auth import require_role
from portal.models import User
from portal.schemas import TeamMetrics
from portal.service import ScoringService, get_scoring_service

router = APIRouter(prefix="/manager", tags=["manager"])


@router.get("/metrics", response_model=TeamMetrics)
async def team_metrics(
    user: User = Depends(require_role(*TEAM_METRICS_ROLES)),
    service: ScoringService = Depends(get_scoring_service),
):
    """Progress table for the members of the manager's own team."""
    if user.team_id is None:
        return TeamMetrics(rows=[], team_id=None)
    return await service.team_metrics(user.team_id)
