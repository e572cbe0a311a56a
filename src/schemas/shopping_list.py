"""Shopping list schemas."""

from datetime import datetime

from pydantic import ConfigDict, Field, StrictInt

from src.schemas.base import CamelModel, RequestModel


class ItemCreate(RequestModel):
    """New item to put on a list. Purchase state and timestamps are server-assigned."""

    ingredient_name: str = Field(..., min_length=1, max_length=255)
    amount: str | int | float | None = None


class ShoppingItem(RequestModel):
    """Full item as sent back by clients when replacing a list's items."""

    item_id: str | None = Field(None, max_length=64)
    ingredient_name: str = Field(..., min_length=1, max_length=255)
    amount: str | int | float | None = None
    purchased: bool = False
    added_at: datetime | None = None


class ShoppingListCreate(RequestModel):
    items: list[ItemCreate] = []
    name: str | None = Field(None, min_length=1, max_length=255)


class AppendItemsRequest(RequestModel):
    items: list[ItemCreate]


class RemoveItemRequest(RequestModel):
    index: StrictInt = Field(..., ge=0)
    expected_version: int | None = None


class ReplaceItemsRequest(RequestModel):
    items: list[ShoppingItem]
    expected_version: int | None = None


class ShoppingItemResponse(CamelModel):
    item_id: str | None = None
    ingredient_name: str
    amount: str | int | float | None = None
    purchased: bool
    added_at: datetime | None = None


class ShoppingListResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_id: int
    name: str
    items: list[ShoppingItemResponse]
    version: int
    created_at: datetime
    updated_at: datetime


class ShoppingListCreated(CamelModel):
    id: int


class ShoppingListMutationResponse(CamelModel):
    success: bool = True
    version: int
