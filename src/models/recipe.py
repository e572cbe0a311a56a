"""Recipe, RecipeTag and RecipeIngredient models."""

from sqlalchemy import (
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import JSONDocument, TimestampMixin


class Recipe(Base, TimestampMixin):
    """Recipe document.

    Reviews are embedded as a JSON array; ``average_rating`` and
    ``review_count`` are derived from it and rewritten by the rating
    aggregator after every review mutation.
    """

    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    category = Column(String(255), nullable=True, index=True)
    prep_time = Column(String(20), nullable=True)  # minutes, numeric string
    cook_time = Column(String(20), nullable=True)
    servings = Column(Integer, nullable=True)
    instructions = Column(JSONDocument, nullable=False, default=list)
    step_count = Column(Integer, nullable=False, default=0, index=True)
    images = Column(JSONDocument, nullable=False, default=list)
    nutrition = Column(JSONDocument, nullable=True)

    reviews = Column(JSONDocument, nullable=False, default=list)
    average_rating = Column(Float, nullable=False, default=0)
    review_count = Column(Integer, nullable=False, default=0)

    last_edited_by = Column(String(255), nullable=True)
    last_edited_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    tags = relationship("RecipeTag", back_populates="recipe", cascade="all, delete-orphan")
    ingredients = relationship(
        "RecipeIngredient", back_populates="recipe", cascade="all, delete-orphan"
    )

    @property
    def tag_names(self) -> list[str]:
        return sorted(tag.name for tag in self.tags)

    @property
    def ingredient_map(self) -> dict[str, str | None]:
        return {ingredient.name: ingredient.quantity for ingredient in self.ingredients}


class RecipeTag(Base):
    """Tag attached to a recipe."""

    __tablename__ = "recipe_tags"
    __table_args__ = (UniqueConstraint("recipe_id", "name", name="uq_recipe_tags_recipe_name"),)

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False, index=True)

    # Relationships
    recipe = relationship("Recipe", back_populates="tags")


class RecipeIngredient(Base):
    """Ingredient within a recipe, keyed by name."""

    __tablename__ = "recipe_ingredients"
    __table_args__ = (
        UniqueConstraint("recipe_id", "name", name="uq_recipe_ingredients_recipe_name"),
    )

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False, index=True)
    quantity = Column(String(100), nullable=True)

    # Relationships
    recipe = relationship("Recipe", back_populates="ingredients")
