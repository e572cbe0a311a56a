"""Authentication and profile API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_user
from src.database import get_db
from src.errors import NotFound
from src.models.user import User
from src.schemas.auth import (
    AuthResponse,
    LoginRequest,
    ProfileResponse,
    ProfileUpdate,
    SignupRequest,
    UserResponse,
)
from src.schemas.base import MessageResponse
from src.services.auth import (
    authenticate_user,
    create_access_token,
    create_user,
    get_user_by_email,
    update_profile,
)

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(
    user_data: SignupRequest,
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new credentials user."""
    if get_user_by_email(db, user_data.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already exists",
        )

    user = create_user(db, user_data.email, user_data.password, user_data.name)
    access_token = create_access_token(user.id, user.email, user.name)

    return AuthResponse(
        access_token=access_token,
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
):
    """Login with email and password."""
    user = authenticate_user(db, credentials.email, credentials.password)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = create_access_token(user.id, user.email, user.name)

    return AuthResponse(
        access_token=access_token,
        user=UserResponse.model_validate(user),
    )


@router.get("/profile", response_model=ProfileResponse)
def get_profile(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get the signed-in user's profile."""
    user = get_user_by_email(db, current_user.email)
    if user is None:
        raise NotFound("User profile not found")
    return user


@router.put("/profile", response_model=MessageResponse)
def put_profile(
    updates: ProfileUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update the signed-in user's name or image."""
    changed = update_profile(db, current_user.email, updates.model_dump(exclude_unset=True))
    if not changed:
        return MessageResponse(message="No changes were made to the profile")
    return MessageResponse(message="Profile updated successfully")
