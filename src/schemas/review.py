"""Review schemas."""

from datetime import datetime

from pydantic import Field, StrictInt, StrictStr, field_validator

from src.schemas.base import CamelModel, RequestModel


class ReviewCreate(RequestModel):
    """Submit a review."""

    rating: StrictInt = Field(..., ge=1, le=5)
    comment: StrictStr | None = Field("", max_length=5000, validate_default=True)

    @field_validator("comment")
    @classmethod
    def strip_comment(cls, value: str | None) -> str:
        return value.strip() if value else ""


class ReviewUpdate(ReviewCreate):
    """Edit an existing review."""

    review_id: str = Field(..., min_length=1)


class Review(CamelModel):
    """Review embedded in a recipe document."""

    id: str
    owner_id: str | None = None
    owner_display_name: str | None = None
    rating: int
    comment: str = ""
    created_at: datetime
    updated_at: datetime

    @field_validator("comment", mode="before")
    @classmethod
    def comment_or_empty(cls, value: str | None) -> str:
        return "" if value is None else value


class ReviewView(Review):
    """Review as seen by a particular viewer."""

    is_owner: bool = False


class CurrentUser(CamelModel):
    id: int
    email: str
    name: str | None


class ReviewListResponse(CamelModel):
    reviews: list[ReviewView]
    total_reviews: int
    average_rating: float
    review_count: int
    current_user: CurrentUser | None
    current_page: int
    total_pages: int


class ReviewCreatedResponse(CamelModel):
    review: Review
    rating_stale: bool = False


class ReviewMutationResponse(CamelModel):
    success: bool = True
    rating_stale: bool = False
