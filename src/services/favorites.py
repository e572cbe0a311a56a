"""Favorites ledger: one membership row per (user email, recipe)."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.errors import NotFound
from src.models.favorite import Favorite

logger = logging.getLogger(__name__)


class FavoritesService:
    """Idempotent add/remove plus listing of a user's favorite recipes."""

    def __init__(self, db: Session):
        self.db = db

    def add(self, user_email: str, recipe_id: int) -> bool:
        """Favorite a recipe.

        Returns False when the pair already existed. The unique constraint on
        (user_email, recipe_id) is what detects duplicates, so concurrent adds
        still leave a single row.
        """
        self.db.add(Favorite(user_email=user_email, recipe_id=recipe_id))
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.info(f"Recipe {recipe_id} already in favorites for {user_email}")
            return False

        logger.info(f"Recipe {recipe_id} added to favorites for {user_email}")
        return True

    def remove(self, user_email: str, recipe_id: int) -> None:
        """Unfavorite a recipe. Raises NotFound if it was not a favorite."""
        deleted = (
            self.db.query(Favorite)
            .filter(Favorite.user_email == user_email, Favorite.recipe_id == recipe_id)
            .delete(synchronize_session=False)
        )
        if deleted == 0:
            self.db.rollback()
            raise NotFound("Favorite not found")

        self.db.commit()
        logger.info(f"Recipe {recipe_id} removed from favorites for {user_email}")

    def list_favorites(self, user_email: str) -> list[Favorite]:
        """Favorites newest first."""
        return (
            self.db.query(Favorite)
            .filter(Favorite.user_email == user_email)
            .order_by(Favorite.created_at.desc(), Favorite.id.desc())
            .all()
        )

    def count(self, user_email: str) -> int:
        return self.db.query(Favorite).filter(Favorite.user_email == user_email).count()
