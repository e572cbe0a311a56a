"""Recipe service for creating, reading and editing recipe documents."""

import logging
from datetime import UTC, datetime

from sqlalchemy.orm import Session, selectinload

from src.errors import NotFound
from src.models.recipe import Recipe, RecipeIngredient, RecipeTag
from src.schemas.recipe import RecipeCreate

logger = logging.getLogger(__name__)


class RecipeService:
    """Service for recipe document operations."""

    def __init__(self, db: Session):
        self.db = db

    def get_recipe(self, recipe_id: int) -> Recipe:
        recipe = (
            self.db.query(Recipe)
            .options(selectinload(Recipe.tags), selectinload(Recipe.ingredients))
            .filter(Recipe.id == recipe_id)
            .first()
        )
        if recipe is None:
            raise NotFound("Recipe not found")
        return recipe

    def create_recipe(self, data: RecipeCreate) -> Recipe:
        """Store a recipe; tags and ingredients become child rows so they can be filtered."""
        recipe = Recipe(
            title=data.title,
            description=data.description,
            category=data.category,
            prep_time=data.prep_time,
            cook_time=data.cook_time,
            servings=data.servings,
            instructions=list(data.instructions),
            step_count=len(data.instructions),
            images=list(data.images),
            nutrition=data.nutrition,
            reviews=[],
            average_rating=0,
            review_count=0,
        )
        for tag in data.tags:
            recipe.tags.append(RecipeTag(name=tag))
        for name, quantity in data.ingredients.items():
            recipe.ingredients.append(RecipeIngredient(name=name, quantity=quantity))

        self.db.add(recipe)
        self.db.commit()
        self.db.refresh(recipe)
        logger.info(f"Created recipe {recipe.id} '{recipe.title}'")
        return recipe

    def update_description(self, recipe_id: int, description: str, edited_by: str) -> Recipe:
        """Replace a recipe's description and record who edited it."""
        recipe = self.get_recipe(recipe_id)
        recipe.description = description
        recipe.last_edited_by = edited_by
        recipe.last_edited_at = datetime.now(UTC)
        self.db.commit()
        logger.info(f"Recipe {recipe_id} description edited by {edited_by}")
        return self.get_recipe(recipe_id)
