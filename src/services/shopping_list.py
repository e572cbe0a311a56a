"""Shopping list engine.

Items live in an embedded array and are addressed by position. Removing and
replacing items rewrites the whole array from a fresh read, so two concurrent
writers on the same list can lose one another's change unless they pass the
list version they last saw.
"""

import logging
import uuid
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from src.errors import Conflict, NotFound, ValidationError
from src.models.shopping_list import ShoppingList

logger = logging.getLogger(__name__)

DEFAULT_LIST_NAME = "Shopping List"


def _new_item_id() -> str:
    return uuid.uuid4().hex


def stamp_new_item(item: dict, now: datetime) -> dict:
    """Shape an incoming item for storage: unpurchased, timestamped, with a stable id."""
    return {
        "itemId": _new_item_id(),
        "ingredientName": item["ingredientName"],
        "amount": item.get("amount"),
        "purchased": False,
        "addedAt": now.isoformat(),
    }


class ShoppingListService:
    """Create, read and edit a user's shopping lists."""

    def __init__(self, db: Session):
        self.db = db

    def get_owned_list(self, list_id: int, owner_id: int) -> ShoppingList:
        """Fetch a list by id and owner.

        Lists owned by someone else are reported as missing.
        """
        shopping_list = (
            self.db.query(ShoppingList)
            .populate_existing()
            .filter(ShoppingList.id == list_id, ShoppingList.owner_id == owner_id)
            .first()
        )
        if shopping_list is None:
            raise NotFound("List not found")
        return shopping_list

    def create(self, owner_id: int, items: list[dict], name: str | None = None) -> ShoppingList:
        now = datetime.now(UTC)
        shopping_list = ShoppingList(
            owner_id=owner_id,
            name=name or DEFAULT_LIST_NAME,
            items=[stamp_new_item(item, now) for item in items],
            version=1,
        )
        self.db.add(shopping_list)
        self.db.commit()
        self.db.refresh(shopping_list)
        logger.info(f"Created shopping list {shopping_list.id} for user {owner_id}")
        return shopping_list

    def list_all(self, owner_id: int) -> list[ShoppingList]:
        """All of a user's lists, newest first."""
        return (
            self.db.query(ShoppingList)
            .filter(ShoppingList.owner_id == owner_id)
            .order_by(ShoppingList.created_at.desc(), ShoppingList.id.desc())
            .all()
        )

    def append_items(self, list_id: int, owner_id: int, items: list[dict]) -> ShoppingList:
        """Add items to the end of a list; existing items are left untouched."""
        if not items:
            raise ValidationError("Invalid items format")

        shopping_list = self.get_owned_list(list_id, owner_id)
        now = datetime.now(UTC)
        new_items = [stamp_new_item(item, now) for item in items]
        self._write(shopping_list, list(shopping_list.items or []) + new_items, now)
        logger.info(f"Added {len(new_items)} items to shopping list {list_id}")
        return shopping_list

    def remove_item_at(
        self,
        list_id: int,
        owner_id: int,
        index: int,
        expected_version: int | None = None,
    ) -> ShoppingList:
        """Drop whichever item currently sits at ``index``."""
        shopping_list = self.get_owned_list(list_id, owner_id)
        self._check_version(shopping_list, expected_version)

        items = list(shopping_list.items or [])
        if index < 0 or index >= len(items):
            raise ValidationError("Item index out of range")

        remaining = [item for position, item in enumerate(items) if position != index]
        self._write(shopping_list, remaining, datetime.now(UTC))
        logger.info(f"Removed item {index} from shopping list {list_id}")
        return shopping_list

    def replace_items(
        self,
        list_id: int,
        owner_id: int,
        items: list[dict],
        expected_version: int | None = None,
    ) -> ShoppingList:
        """Overwrite the whole item array, e.g. after toggling purchased or editing an amount."""
        shopping_list = self.get_owned_list(list_id, owner_id)
        self._check_version(shopping_list, expected_version)

        now = datetime.now(UTC)
        replacement = []
        for item in items:
            item = dict(item)
            if not item.get("itemId"):
                item["itemId"] = _new_item_id()
            if not item.get("addedAt"):
                item["addedAt"] = now.isoformat()
            replacement.append(item)

        self._write(shopping_list, replacement, now)
        logger.info(f"Replaced items on shopping list {list_id} ({len(replacement)} items)")
        return shopping_list

    def _check_version(self, shopping_list: ShoppingList, expected_version: int | None) -> None:
        if expected_version is not None and expected_version != shopping_list.version:
            raise Conflict("Shopping list was modified by another request")

    def _write(self, shopping_list: ShoppingList, items: list[dict], now: datetime) -> None:
        shopping_list.items = items
        shopping_list.version = (shopping_list.version or 0) + 1
        shopping_list.updated_at = now
        self.db.commit()
        self.db.refresh(shopping_list)
