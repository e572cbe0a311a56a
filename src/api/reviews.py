"""Review API endpoints, nested under a recipe."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_user, get_optional_user
from src.database import get_db
from src.models.user import User
from src.schemas.review import (
    CurrentUser,
    Review,
    ReviewCreate,
    ReviewCreatedResponse,
    ReviewListResponse,
    ReviewMutationResponse,
    ReviewUpdate,
    ReviewView,
)
from src.services.auth import Identity
from src.services.reviews import add_review, delete_review, list_reviews, update_review

router = APIRouter(prefix="/api/v1/recipes/{recipe_id}/reviews", tags=["reviews"])


def _page_number(value: str | None, default: int) -> int:
    try:
        number = int(value) if value is not None else default
    except ValueError:
        return default
    return number if number > 0 else default


@router.get("", response_model=ReviewListResponse)
def get_reviews(
    recipe_id: int,
    db: Annotated[Session, Depends(get_db)],
    viewer: Annotated[User | None, Depends(get_optional_user)],
    sort_by: Annotated[str, Query(alias="sortBy")] = "createdAt",
    order: str = "desc",
    page: str | None = None,
    limit: str | None = None,
):
    """List a recipe's reviews. Anonymous viewers are allowed."""
    identity = Identity.from_user(viewer) if viewer else None
    result = list_reviews(
        db,
        recipe_id,
        viewer=identity,
        sort_by=sort_by,
        order=order,
        page=_page_number(page, 1),
        limit=_page_number(limit, 10),
    )

    return ReviewListResponse(
        reviews=[ReviewView.model_validate(review) for review in result.reviews],
        total_reviews=result.total_reviews,
        average_rating=result.average_rating,
        review_count=result.review_count,
        current_user=(
            CurrentUser(id=viewer.id, email=viewer.email, name=viewer.name) if viewer else None
        ),
        current_page=result.current_page,
        total_pages=result.total_pages,
    )


@router.post("", response_model=ReviewCreatedResponse, status_code=status.HTTP_201_CREATED)
def post_review(
    recipe_id: int,
    review_data: ReviewCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Review a recipe. Each user may review a recipe once."""
    review, rating_stale = add_review(
        db,
        recipe_id,
        Identity.from_user(current_user),
        review_data.rating,
        review_data.comment,
    )
    return ReviewCreatedResponse(review=Review.model_validate(review), rating_stale=rating_stale)


@router.put("", response_model=ReviewMutationResponse)
def put_review(
    recipe_id: int,
    review_data: ReviewUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Edit the caller's own review."""
    rating_stale = update_review(
        db,
        recipe_id,
        Identity.from_user(current_user),
        review_data.review_id,
        review_data.rating,
        review_data.comment,
    )
    return ReviewMutationResponse(rating_stale=rating_stale)


@router.delete("", response_model=ReviewMutationResponse)
def remove_review(
    recipe_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    review_id: Annotated[str | None, Query(alias="reviewId")] = None,
):
    """Delete the caller's own review."""
    rating_stale = delete_review(db, recipe_id, Identity.from_user(current_user), review_id)
    return ReviewMutationResponse(rating_stale=rating_stale)
