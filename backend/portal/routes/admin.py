import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from portal.acl import USER_ADMIN_ROLES, is_valid_role
from portal.auth import require_role
from portal.crud import (
    count_team_members,
    create_team,
    create_user,
    delete_team,
    delete_user,
    get_all_teams,
    get_all_users,
    get_team,
    get_user,
    get_user_by_external_id,
    save_team,
    save_user,
)
from portal.database import get_session
from portal.models import Team, User
from portal.schemas import (
    TeamCreate,
    TeamRead,
    TeamUpdate,
    UserCreate,
    UserResponse,
    UserUpdate,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/users", response_model=list[UserResponse])
async def admin_list_users(
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(*USER_ADMIN_ROLES)),
):
    return await get_all_users(db)


@router.post("/users", response_model=UserResponse)
async def admin_create_user(
    data: UserCreate,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(*USER_ADMIN_ROLES)),
):
    if not is_valid_role(data.role):
        raise HTTPException(status_code=400, detail="Unknown role")
    if data.team_id is not None and not await get_team(db, data.team_id):
        raise HTTPException(status_code=404, detail="Team not found")
    if await get_user_by_external_id(db, data.external_id):
        raise HTTPException(status_code=400, detail="User id already registered")
    user = await create_user(
        db,
        User(
            external_id=data.external_id,
            name=data.name,
            password_hash=data.password,
            role=data.role,
            team_id=data.team_id,
        ),
    )
    logger.info("Admin %s created user %s", current_user.external_id, user.external_id)
    return user


@router.patch("/users/{user_id}", response_model=UserResponse)
async def admin_update_user(
    user_id: int,
    data: UserUpdate,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(*USER_ADMIN_ROLES)),
):
    user = await get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    updates = data.model_dump(exclude_unset=True)
    for field in ("name", "role"):
        if not updates.get(field):
            updates.pop(field, None)
    if "role" in updates and not is_valid_role(updates["role"]):
        raise HTTPException(status_code=400, detail="Unknown role")
    if updates.get("team_id") is not None and not await get_team(db, updates["team_id"]):
        raise HTTPException(status_code=404, detail="Team not found")
    for field, value in updates.items():
        setattr(user, field, value)
    user = await save_user(db, user)
    logger.info("Admin %s updated user %s", current_user.external_id, user.external_id)
    return user


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def admin_delete_user(
    user_id: int,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(*USER_ADMIN_ROLES)),
):
    user = await get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    if user.id == current_user.id:
        raise HTTPException(status_code=400, detail="Cannot delete yourself")
    await delete_user(db, user)
    logger.info("Admin %s deleted user %s", current_user.external_id, user_id)


@router.get("/teams", response_model=list[TeamRead])
async def admin_list_teams(
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(*USER_ADMIN_ROLES)),
):
    return await get_all_teams(db)


@router.post("/teams", response_model=TeamRead)
async def admin_create_team(
    data: TeamCreate,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(*USER_ADMIN_ROLES)),
):
    if await get_team(db, data.id):
        raise HTTPException(status_code=400, detail="Team already exists")
    return await create_team(db, Team(id=data.id, name=data.name, track=data.track))


@router.patch("/teams/{team_id}", response_model=TeamRead)
async def admin_update_team(
    team_id: str,
    data: TeamUpdate,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(*USER_ADMIN_ROLES)),
):
    team = await get_team(db, team_id)
    if not team:
        raise HTTPException(status_code=404, detail="Team not found")
    for field, value in data.model_dump(exclude_unset=True).items():
        if value:
            setattr(team, field, value)
    return await save_team(db, team)


@router.delete("/teams/{team_id}", status_code=status.HTTP_204_NO_CONTENT)
async def admin_delete_team(
    team_id: str,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(*USER_ADMIN_ROLES)),
):
    team = await get_team(db, team_id)
    if not team:
        raise HTTPException(status_code=404, detail="Team not found")
    members = await count_team_members(db, team_id)
    if members:
        raise HTTPException(
            status_code=409,
            detail=f"Cannot delete a team with {members} user(s). Reassign users first.",
        )
    await delete_team(db, team)
    logger.info("Admin %s deleted team %s", current_user.external_id, team_id)
