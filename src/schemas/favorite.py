"""Favorite schemas."""

from datetime import datetime

from pydantic import ConfigDict, StrictInt

from src.schemas.base import CamelModel, RequestModel


class FavoriteRequest(RequestModel):
    """Add or remove a favorite."""

    recipe_id: StrictInt


class FavoriteResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_email: str
    recipe_id: int
    created_at: datetime


class FavoriteListResponse(CamelModel):
    favorites: list[FavoriteResponse]


class FavoriteCountResponse(CamelModel):
    count: int
