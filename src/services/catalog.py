"""Read-only lookups over the recipe catalog: tags, ingredients, categories,
title suggestions, top-rated recipes and allergens."""

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from src.errors import NotFound
from src.models.catalog import Allergen, Category
from src.models.recipe import Recipe, RecipeIngredient, RecipeTag
from src.services.recipe_query import escape_like

MAX_SUGGESTIONS = 10
RECOMMENDED_LIMIT = 10


def distinct_tags(db: Session) -> list[str]:
    return [name for (name,) in db.query(RecipeTag.name).distinct().order_by(RecipeTag.name)]


def distinct_ingredients(db: Session) -> list[str]:
    return [
        name
        for (name,) in db.query(RecipeIngredient.name)
        .distinct()
        .order_by(RecipeIngredient.name)
    ]


def category_names(db: Session) -> list[str]:
    return [name for (name,) in db.query(Category.name).order_by(Category.name)]


def title_suggestions(db: Session, query: str, limit: int = MAX_SUGGESTIONS) -> list[Recipe]:
    """Recipes whose title contains ``query``, alphabetically, at most ten."""
    query = query.strip()
    if not query:
        return []
    limit = max(1, min(limit, MAX_SUGGESTIONS))
    return (
        db.query(Recipe)
        .filter(Recipe.title.ilike(f"%{escape_like(query)}%", escape="\\"))
        .order_by(Recipe.title, Recipe.id)
        .limit(limit)
        .all()
    )


def recommended_recipes(db: Session) -> list[Recipe]:
    """Highest rated recipes that have at least one review."""
    return (
        db.query(Recipe)
        .options(selectinload(Recipe.tags), selectinload(Recipe.ingredients))
        .filter(Recipe.average_rating > 0)
        .order_by(Recipe.average_rating.desc(), Recipe.review_count.desc(), Recipe.id)
        .limit(RECOMMENDED_LIMIT)
        .all()
    )


def recipe_allergens(db: Session, recipe_id: int) -> list[str]:
    """Allergens whose name appears inside any of the recipe's ingredient names."""
    if db.query(Recipe.id).filter(Recipe.id == recipe_id).first() is None:
        raise NotFound("Recipe not found")

    ingredient_names = [
        name.lower()
        for (name,) in db.query(func.lower(RecipeIngredient.name)).filter(
            RecipeIngredient.recipe_id == recipe_id
        )
    ]
    allergens = [name for (name,) in db.query(Allergen.name).order_by(Allergen.id)]
    return [
        allergen
        for allergen in allergens
        if any(allergen.lower() in ingredient for ingredient in ingredient_names)
    ]
