"""Favorite model."""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, Integer, String, UniqueConstraint

from src.database import Base


class Favorite(Base):
    """A recipe bookmarked by a user, keyed by the user's email.

    recipe_id carries no foreign key: favorites outlive the recipes they point at.
    """

    __tablename__ = "favorites"
    __table_args__ = (
        UniqueConstraint("user_email", "recipe_id", name="uq_favorites_user_recipe"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_email = Column(String(255), nullable=False, index=True)
    recipe_id = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)
