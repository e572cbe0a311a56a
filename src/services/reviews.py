"""Reviews embedded in recipe documents."""

import logging
import math
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from src.errors import Conflict, NotFound, Unauthorized, ValidationError
from src.models.recipe import Recipe
from src.services.auth import Identity
from src.services.rating import refresh_rating

logger = logging.getLogger(__name__)


@dataclass
class ReviewPage:
    reviews: list[dict]
    total_reviews: int
    average_rating: float
    review_count: int
    current_page: int
    total_pages: int


def is_review_owner(review: dict, identity: Identity | None) -> bool:
    """Whether ``identity`` wrote ``review``.

    Older reviews only carry a display name, so a name match also counts.
    """
    if identity is None:
        return False
    if review.get("ownerId") is not None and review["ownerId"] == identity.owner_id:
        return True
    display_name = review.get("ownerDisplayName")
    return bool(display_name) and display_name == identity.name


def _get_recipe(db: Session, recipe_id: int) -> Recipe:
    recipe = db.query(Recipe).filter(Recipe.id == recipe_id).first()
    if recipe is None:
        raise NotFound("Recipe not found")
    return recipe


def _find_review(recipe: Recipe, review_id: str) -> int:
    for index, review in enumerate(recipe.reviews or []):
        if review.get("id") == review_id:
            return index
    raise NotFound("Review not found")


def list_reviews(
    db: Session,
    recipe_id: int,
    viewer: Identity | None = None,
    sort_by: str = "createdAt",
    order: str = "desc",
    page: int = 1,
    limit: int = 10,
) -> ReviewPage:
    """Return a page of reviews, each flagged with whether ``viewer`` owns it.

    Stored reviews are never modified here.
    """
    recipe = _get_recipe(db, recipe_id)
    reviews = [dict(review) for review in recipe.reviews or []]

    if sort_by == "rating":
        reviews.sort(key=lambda review: review.get("rating", 0), reverse=order != "asc")
    else:
        reviews.sort(key=lambda review: review.get("createdAt") or "", reverse=order != "asc")

    for review in reviews:
        review["isOwner"] = is_review_owner(review, viewer)

    start = (page - 1) * limit
    return ReviewPage(
        reviews=reviews[start : start + limit],
        total_reviews=len(reviews),
        average_rating=recipe.average_rating or 0,
        review_count=recipe.review_count or 0,
        current_page=page,
        total_pages=math.ceil(len(reviews) / limit),
    )


def add_review(
    db: Session, recipe_id: int, identity: Identity, rating: int, comment: str
) -> tuple[dict, bool]:
    """Append a review by ``identity``.

    Returns the stored review and whether the recipe's rating is now stale.
    """
    recipe = _get_recipe(db, recipe_id)
    reviews = list(recipe.reviews or [])

    if any(review.get("ownerId") == identity.owner_id for review in reviews):
        raise Conflict("You have already reviewed this recipe", status_code=400)

    now = datetime.now(UTC).isoformat()
    review = {
        "id": uuid.uuid4().hex,
        "ownerId": identity.owner_id,
        "ownerDisplayName": identity.name or identity.email,
        "rating": rating,
        "comment": comment,
        "createdAt": now,
        "updatedAt": now,
    }
    recipe.reviews = reviews + [review]
    db.commit()
    logger.info(f"User {identity.id} reviewed recipe {recipe_id} ({rating}/5)")

    return review, refresh_rating(db, recipe_id)


def update_review(
    db: Session,
    recipe_id: int,
    identity: Identity,
    review_id: str,
    rating: int,
    comment: str,
) -> bool:
    """Change the rating and comment of the caller's review. Returns the stale flag."""
    recipe = _get_recipe(db, recipe_id)
    index = _find_review(recipe, review_id)
    reviews = [dict(review) for review in recipe.reviews]

    if not is_review_owner(reviews[index], identity):
        raise Unauthorized("Not authorized to modify this review")

    reviews[index].update(
        rating=rating,
        comment=comment,
        updatedAt=datetime.now(UTC).isoformat(),
    )
    recipe.reviews = reviews
    db.commit()
    logger.info(f"User {identity.id} updated review {review_id} on recipe {recipe_id}")

    return refresh_rating(db, recipe_id)


def delete_review(db: Session, recipe_id: int, identity: Identity, review_id: str | None) -> bool:
    """Remove the caller's review. Returns the stale flag."""
    if not review_id:
        raise ValidationError("Review ID is required")

    recipe = _get_recipe(db, recipe_id)
    index = _find_review(recipe, review_id)
    reviews = list(recipe.reviews)

    if not is_review_owner(reviews[index], identity):
        raise Unauthorized("Not authorized to delete this review")

    recipe.reviews = reviews[:index] + reviews[index + 1 :]
    db.commit()
    logger.info(f"User {identity.id} deleted review {review_id} on recipe {recipe_id}")

    return refresh_rating(db, recipe_id)
