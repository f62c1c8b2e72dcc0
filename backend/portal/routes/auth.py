# portal/routes/auth.py
"""Authentication endpoints: login, token generation and registration."""

import logging
from datetime import datetime
from typing import Callable

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession

from portal.acl import ROLE_ADMIN, ROLE_LEARNER
from portal.auth import create_access_token, authenticate_user
from portal.crud import count_users, create_user, get_user_by_external_id, record_login
from portal.database import get_session
from portal.models import User
from portal.schemas.user import RegisterRequest, UserLogin, UserResponse
from portal.service import get_clock

logger = logging.getLogger(__name__)
router = APIRouter()

INVALID_CREDENTIALS = {
    "code": "auth_invalid_credentials",
    "message": "Invalid user id or password",
}


async def _issue_token(
    db: AsyncSession, user: User, clock: Callable[[], datetime]
) -> dict:
    await record_login(db, user.id, clock())
    access_token = create_access_token(data={"sub": user.external_id})
    return {"access_token": access_token, "token_type": "bearer"}


@router.post("/token")
async def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_session),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """OAuth2 password flow used by interactive docs and external clients."""

    user = await authenticate_user(db, form_data.username, form_data.password)
    if not user:
        logger.warning("Failed OAuth login for %s", form_data.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS
        )
    logger.info("User %s logged in via OAuth form", user.external_id)
    return await _issue_token(db, user, clock)


@router.post("/login")
async def login(
    user_in: UserLogin,
    db: AsyncSession = Depends(get_session),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """JSON-based login used by the frontend."""

    user = await authenticate_user(db, user_in.external_id, user_in.password)
    if not user:
        logger.warning("Failed login for %s", user_in.external_id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS
        )
    logger.info("User %s logged in", user.external_id)
    return await _issue_token(db, user, clock)


@router.post("/register", response_model=UserResponse)
async def register(user_in: RegisterRequest, db: AsyncSession = Depends(get_session)):
    """Self-registration; the very first account becomes the admin."""

    is_first_user = await count_users(db) == 0
    if await get_user_by_external_id(db, user_in.external_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "code": "auth_user_registered",
                "message": "User id is already registered.",
            },
        )

    new_user = await create_user(
        db,
        User(
            external_id=user_in.external_id,
            name=user_in.name,
            password_hash=user_in.password,
            role=ROLE_ADMIN if is_first_user else ROLE_LEARNER,
        ),
    )
    logger.info(
        "User %s registered%s",
        new_user.external_id,
        " as initial admin" if is_first_user else "",
    )
    return new_user
