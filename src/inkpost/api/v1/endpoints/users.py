"""Profile management endpoints for the authenticated user."""

from __future__ import annotations

from fastapi import APIRouter

from inkpost.models import User
from inkpost.schemas import MessageResponse, UserResponse, UserUpdate
from inkpost.services import user_service

from ..dependencies import CurrentUserDep, SessionDep, SettingsDep

router = APIRouter(prefix="/users", tags=["users"])


@router.patch("/me", response_model=UserResponse)
async def update_me(
    payload: UserUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
    settings: SettingsDep,
) -> User:
    """Update the caller's name, email, password, or avatar."""
    changes = payload.model_dump(exclude_unset=True)
    return user_service.update_user(db, settings, current_user.id, changes)


@router.delete("/me", response_model=MessageResponse)
async def delete_me(current_user: CurrentUserDep, db: SessionDep) -> MessageResponse:
    """Delete the caller's account, keeping their content anonymized."""
    user_service.delete_user(db, current_user.id)
    return MessageResponse(message="Account deleted; posts and comments were anonymized")
