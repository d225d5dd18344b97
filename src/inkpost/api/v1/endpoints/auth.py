# src/inkpost/api/v1/endpoints/auth.py
"""Authentication endpoints for the Inkpost API."""

from __future__ import annotations

from fastapi import APIRouter, status

from inkpost.core.security import create_access_token
from inkpost.models import User
from inkpost.schemas import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from inkpost.services import user_service

from ..dependencies import CurrentUserDep, SessionDep, SettingsDep

router = APIRouter(prefix="/auth", tags=["authentication"])


def _auth_response(user: User, token: str) -> AuthResponse:
    return AuthResponse(**UserResponse.model_validate(user).model_dump(), token=token)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    db: SessionDep,
    settings: SettingsDep,
) -> AuthResponse:
    """Create an account and return it with an access token."""
    user = user_service.register_user(
        db,
        settings,
        fullname=payload.fullname,
        email=payload.email,
        password=payload.password,
        avatar_url=payload.avatar_url,
    )
    return _auth_response(user, create_access_token(user.id, settings))


@router.post("/login", response_model=AuthResponse)
async def login(
    payload: LoginRequest,
    db: SessionDep,
    settings: SettingsDep,
) -> AuthResponse:
    """Exchange email and password for an access token."""
    user = user_service.authenticate(db, email=payload.email, password=payload.password)
    return _auth_response(user, create_access_token(user.id, settings))


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: CurrentUserDep) -> User:
    """Return the authenticated user's profile."""
    return current_user
