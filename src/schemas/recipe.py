"""Recipe schemas."""

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from src.models.recipe import Recipe
from src.schemas.base import CamelModel, RequestModel

# Column widths of recipe_tags.name, recipe_ingredients.name and .quantity
MAX_TAG_LENGTH = 100
MAX_INGREDIENT_NAME_LENGTH = 255
MAX_QUANTITY_LENGTH = 100


class RecipeCreate(RequestModel):
    """Create a new recipe."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=5000)
    category: str | None = Field(None, max_length=255)
    prep_time: str | None = Field(None, pattern=r"^\d+$")
    cook_time: str | None = Field(None, pattern=r"^\d+$")
    servings: int | None = Field(None, ge=1)
    ingredients: dict[str, str | None] = {}
    instructions: list[str] = []
    tags: list[str] = []
    images: list[str] = []
    nutrition: dict[str, Any] | list[dict[str, Any]] | None = None

    @field_validator("tags")
    @classmethod
    def strip_tags(cls, value: list[str]) -> list[str]:
        seen: list[str] = []
        for tag in value:
            tag = tag.strip()
            if len(tag) > MAX_TAG_LENGTH:
                raise ValueError(f"Tags must be at most {MAX_TAG_LENGTH} characters")
            if tag and tag not in seen:
                seen.append(tag)
        return seen

    @field_validator("ingredients")
    @classmethod
    def strip_ingredient_names(cls, value: dict[str, str | None]) -> dict[str, str | None]:
        cleaned: dict[str, str | None] = {}
        for name, quantity in value.items():
            name = name.strip()
            if not name:
                continue
            if name in cleaned:
                raise ValueError(f"Duplicate ingredient: {name}")
            if len(name) > MAX_INGREDIENT_NAME_LENGTH:
                raise ValueError(
                    f"Ingredient names must be at most {MAX_INGREDIENT_NAME_LENGTH} characters"
                )
            if quantity is not None and len(quantity) > MAX_QUANTITY_LENGTH:
                raise ValueError(f"Quantities must be at most {MAX_QUANTITY_LENGTH} characters")
            cleaned[name] = quantity
        return cleaned


class RecipeDescriptionUpdate(RequestModel):
    """Edit a recipe's description."""

    description: str = Field(..., max_length=5000)


class RecipeResponse(CamelModel):
    """Full recipe document."""

    id: int
    title: str
    description: str | None
    category: str | None
    prep_time: str | None
    cook_time: str | None
    servings: int | None
    ingredients: dict[str, str | None]
    instructions: list[str]
    step_count: int
    tags: list[str]
    images: list[str]
    nutrition: dict[str, Any] | list[dict[str, Any]] | None
    reviews: list[dict[str, Any]]
    average_rating: float
    review_count: int
    last_edited_by: str | None
    last_edited_at: datetime | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_recipe(cls, recipe: Recipe) -> "RecipeResponse":
        return cls(
            id=recipe.id,
            title=recipe.title,
            description=recipe.description,
            category=recipe.category,
            prep_time=recipe.prep_time,
            cook_time=recipe.cook_time,
            servings=recipe.servings,
            ingredients=recipe.ingredient_map,
            instructions=recipe.instructions or [],
            step_count=recipe.step_count,
            tags=recipe.tag_names,
            images=recipe.images or [],
            nutrition=recipe.nutrition,
            reviews=recipe.reviews or [],
            average_rating=recipe.average_rating,
            review_count=recipe.review_count,
            last_edited_by=recipe.last_edited_by,
            last_edited_at=recipe.last_edited_at,
            created_at=recipe.created_at,
            updated_at=recipe.updated_at,
        )


class AppliedFilters(CamelModel):
    """Normalised filter parameters echoed back with a recipe page."""

    page: int
    limit: int
    search: str | None
    tags: list[str]
    ingredients: list[str]
    match_type: str
    category: str | None
    number_of_steps: int | None
    sort_by: str
    order: str


class RecipePageResponse(CamelModel):
    """One page of recipes with pagination metadata."""

    recipes: list[RecipeResponse]
    total: int
    total_pages: int
    current_page: int
    limit: int
    has_next_page: bool
    has_previous_page: bool
    applied_filters: AppliedFilters


class RecommendedResponse(CamelModel):
    """Top-rated recipes."""

    recipes: list[RecipeResponse]


class Suggestion(CamelModel):
    """Title suggestion for the search box."""

    id: int
    title: str
    category: str | None


class SuggestionsResponse(CamelModel):
    suggestions: list[Suggestion]


class AllergensResponse(CamelModel):
    allergens: list[str]
