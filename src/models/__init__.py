"""SQLAlchemy models."""

from src.models.catalog import Allergen, Category
from src.models.favorite import Favorite
from src.models.recipe import Recipe, RecipeIngredient, RecipeTag
from src.models.shopping_list import ShoppingList
from src.models.user import User

__all__ = [
    "User",
    "Recipe",
    "RecipeTag",
    "RecipeIngredient",
    "Favorite",
    "ShoppingList",
    "Category",
    "Allergen",
]
