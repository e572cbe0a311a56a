"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import AuthResponse, LoginRequest, SignupRequest, UserResponse
from src.schemas.favorite import FavoriteRequest, FavoriteResponse
from src.schemas.recipe import RecipeCreate, RecipePageResponse, RecipeResponse
from src.schemas.review import ReviewCreate, ReviewUpdate
from src.schemas.shopping_list import ItemCreate, ShoppingListCreate, ShoppingListResponse

__all__ = [
    "SignupRequest",
    "LoginRequest",
    "AuthResponse",
    "UserResponse",
    "RecipeCreate",
    "RecipeResponse",
    "RecipePageResponse",
    "ReviewCreate",
    "ReviewUpdate",
    "FavoriteRequest",
    "FavoriteResponse",
    "ItemCreate",
    "ShoppingListCreate",
    "ShoppingListResponse",
]
