"""Catalog lookup endpoints: tags, ingredients, categories, suggestions, recommendations."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from src.database import get_db
from src.schemas.recipe import RecipeResponse, RecommendedResponse, Suggestion, SuggestionsResponse
from src.services import catalog

router = APIRouter(prefix="/api/v1", tags=["catalog"])


@router.get("/tags", response_model=list[str])
def get_tags(db: Annotated[Session, Depends(get_db)]):
    """All tags used by any recipe."""
    return catalog.distinct_tags(db)


@router.get("/ingredients", response_model=list[str])
def get_ingredients(db: Annotated[Session, Depends(get_db)]):
    """All ingredient names used by any recipe."""
    return catalog.distinct_ingredients(db)


@router.get("/categories", response_model=list[str])
def get_categories(db: Annotated[Session, Depends(get_db)]):
    return catalog.category_names(db)


@router.get("/suggestions", response_model=SuggestionsResponse)
def get_suggestions(
    db: Annotated[Session, Depends(get_db)],
    q: str = "",
    limit: int = catalog.MAX_SUGGESTIONS,
):
    """Title suggestions for a partial search query."""
    recipes = catalog.title_suggestions(db, q, limit)
    return SuggestionsResponse(
        suggestions=[
            Suggestion(id=recipe.id, title=recipe.title, category=recipe.category)
            for recipe in recipes
        ]
    )


@router.get("/recommended", response_model=RecommendedResponse)
def get_recommended(db: Annotated[Session, Depends(get_db)]):
    """Top rated recipes."""
    return RecommendedResponse(
        recipes=[RecipeResponse.from_recipe(recipe) for recipe in catalog.recommended_recipes(db)]
    )
