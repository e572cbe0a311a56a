"""Keeps a recipe's derived rating fields in step with its embedded reviews."""

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.models.recipe import Recipe

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RatingSummary:
    average_rating: float
    review_count: int


def summarize_reviews(reviews: list[dict]) -> RatingSummary:
    """Average rating rounded half-up to one decimal (0 with no reviews) and review count."""
    count = len(reviews)
    if count == 0:
        return RatingSummary(average_rating=0, review_count=0)
    total = sum(review["rating"] for review in reviews)
    average = (Decimal(total) / Decimal(count)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return RatingSummary(average_rating=float(average), review_count=count)


def recompute_rating(db: Session, recipe_id: int) -> RatingSummary | None:
    """Re-read a recipe's reviews and persist averageRating and reviewCount together.

    Returns None when the recipe no longer exists. Safe to call repeatedly.
    """
    recipe = db.query(Recipe).populate_existing().filter(Recipe.id == recipe_id).first()
    if recipe is None:
        return None

    summary = summarize_reviews(recipe.reviews or [])
    recipe.average_rating = summary.average_rating
    recipe.review_count = summary.review_count
    db.commit()
    return summary


def refresh_rating(db: Session, recipe_id: int) -> bool:
    """Recompute a recipe's rating after a committed review change.

    The review change is never undone: if the recompute fails the session is
    rolled back and True is returned so the caller can report the rating as
    stale.
    """
    try:
        recompute_rating(db, recipe_id)
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning(f"Rating recompute failed for recipe {recipe_id}, rating is stale: {e}")
        return True
    return False
