"""Recipe API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_user, get_recipe_service
from src.database import get_db
from src.models.user import User
from src.schemas.recipe import (
    AllergensResponse,
    AppliedFilters,
    RecipeCreate,
    RecipeDescriptionUpdate,
    RecipePageResponse,
    RecipeResponse,
)
from src.services.catalog import recipe_allergens
from src.services.recipe_query import RecipeSearchParams, search_recipes
from src.services.recipe_service import RecipeService

router = APIRouter(prefix="/api/v1/recipes", tags=["recipes"])


@router.get("", response_model=RecipePageResponse)
def list_recipes(
    db: Annotated[Session, Depends(get_db)],
    page: str | None = None,
    limit: str | None = None,
    search: str | None = None,
    tags: Annotated[list[str] | None, Query(alias="tags[]")] = None,
    ingredients: Annotated[list[str] | None, Query(alias="ingredients[]")] = None,
    match_type: Annotated[str | None, Query(alias="matchType")] = None,
    category: str | None = None,
    number_of_steps: Annotated[str | None, Query(alias="numberOfSteps")] = None,
    sort_by: Annotated[str | None, Query(alias="sortBy")] = None,
    order: str | None = None,
):
    """Browse recipes with search, tag/ingredient filters, sorting and pagination."""
    params = RecipeSearchParams.from_raw(
        page=page,
        limit=limit,
        search=search,
        tags=tags,
        ingredients=ingredients,
        match_type=match_type,
        category=category,
        number_of_steps=number_of_steps,
        sort_by=sort_by,
        order=order,
    )
    result = search_recipes(db, params)

    return RecipePageResponse(
        recipes=[RecipeResponse.from_recipe(recipe) for recipe in result.recipes],
        total=result.total,
        total_pages=result.total_pages,
        current_page=params.page,
        limit=params.limit,
        has_next_page=result.has_next_page,
        has_previous_page=result.has_previous_page,
        applied_filters=AppliedFilters(**params.as_dict()),
    )


@router.post("", response_model=RecipeResponse, status_code=status.HTTP_201_CREATED)
def create_recipe(
    recipe_data: RecipeCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Add a recipe to the catalog."""
    recipe = service.create_recipe(recipe_data)
    return RecipeResponse.from_recipe(recipe)


@router.get("/{recipe_id}", response_model=RecipeResponse)
def get_recipe(
    recipe_id: int,
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Get a single recipe."""
    return RecipeResponse.from_recipe(service.get_recipe(recipe_id))


@router.put("/{recipe_id}", response_model=RecipeResponse)
def update_recipe_description(
    recipe_id: int,
    update: RecipeDescriptionUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Edit a recipe's description."""
    recipe = service.update_description(
        recipe_id, update.description, current_user.name or current_user.email
    )
    return RecipeResponse.from_recipe(recipe)


@router.get("/{recipe_id}/allergens", response_model=AllergensResponse)
def get_recipe_allergens(
    recipe_id: int,
    db: Annotated[Session, Depends(get_db)],
):
    """Common allergens found among a recipe's ingredients."""
    return AllergensResponse(allergens=recipe_allergens(db, recipe_id))
