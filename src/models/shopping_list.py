"""Shopping list model."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import JSONDocument, TimestampMixin


class ShoppingList(Base, TimestampMixin):
    """Shopping list owned by a single user.

    Items are an embedded JSON array addressed by position. ``version`` is
    bumped on every write so clients can opt into lost-update detection.
    """

    __tablename__ = "shopping_lists"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False, default="Shopping List")
    # [{"itemId": "...", "ingredientName": "Flour", "amount": "2 cups",
    #   "purchased": false, "addedAt": "2024-01-01T00:00:00+00:00"}, ...]
    items = Column(JSONDocument, nullable=False, default=list)
    version = Column(Integer, nullable=False, default=1)

    # Relationships
    owner = relationship("User", backref="shopping_lists")
