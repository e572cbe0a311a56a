"""Favorites API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.dependencies import get_current_user, get_favorites_service
from src.models.user import User
from src.schemas.base import MessageResponse
from src.schemas.favorite import (
    FavoriteCountResponse,
    FavoriteListResponse,
    FavoriteRequest,
    FavoriteResponse,
)
from src.services.favorites import FavoritesService

router = APIRouter(prefix="/api/v1/favorites", tags=["favorites"])


@router.get("", response_model=FavoriteListResponse | FavoriteCountResponse)
def get_favorites(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[FavoritesService, Depends(get_favorites_service)],
    action: str = "list",
):
    """List the user's favorites, or just count them with ``action=count``."""
    if action == "count":
        return FavoriteCountResponse(count=service.count(current_user.email))

    favorites = service.list_favorites(current_user.email)
    return FavoriteListResponse(
        favorites=[FavoriteResponse.model_validate(favorite) for favorite in favorites]
    )


@router.post("", response_model=MessageResponse)
def add_favorite(
    request: FavoriteRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[FavoritesService, Depends(get_favorites_service)],
):
    """Favorite a recipe. Favoriting it again is not an error."""
    if service.add(current_user.email, request.recipe_id):
        return MessageResponse(message="Recipe added to favorites")
    return MessageResponse(message="Recipe already in favorites")


@router.delete("", response_model=MessageResponse)
def remove_favorite(
    request: FavoriteRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[FavoritesService, Depends(get_favorites_service)],
):
    """Unfavorite a recipe."""
    service.remove(current_user.email, request.recipe_id)
    return MessageResponse(message="Recipe removed from favorites")
