"""Shopping list API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_current_user, get_shopping_list_service
from src.models.user import User
from src.schemas.shopping_list import (
    AppendItemsRequest,
    RemoveItemRequest,
    ReplaceItemsRequest,
    ShoppingListCreate,
    ShoppingListCreated,
    ShoppingListMutationResponse,
    ShoppingListResponse,
)
from src.services.shopping_list import ShoppingListService

router = APIRouter(prefix="/api/v1/shopping-list", tags=["shopping-list"])


@router.get("", response_model=list[ShoppingListResponse])
def get_shopping_lists(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ShoppingListService, Depends(get_shopping_list_service)],
):
    """Get all of the current user's shopping lists."""
    return service.list_all(current_user.id)


@router.post("", response_model=ShoppingListCreated, status_code=status.HTTP_201_CREATED)
def create_shopping_list(
    list_data: ShoppingListCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ShoppingListService, Depends(get_shopping_list_service)],
):
    """Create a shopping list, optionally with initial items."""
    shopping_list = service.create(
        current_user.id,
        [item.model_dump(by_alias=True) for item in list_data.items],
        name=list_data.name,
    )
    return ShoppingListCreated(id=shopping_list.id)


@router.post("/{list_id}/items", response_model=ShoppingListResponse)
def append_items(
    list_id: int,
    request: AppendItemsRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ShoppingListService, Depends(get_shopping_list_service)],
):
    """Append items to the end of a list."""
    return service.append_items(
        list_id, current_user.id, [item.model_dump(by_alias=True) for item in request.items]
    )


@router.delete("/{list_id}/items", response_model=ShoppingListMutationResponse)
def remove_item(
    list_id: int,
    request: RemoveItemRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ShoppingListService, Depends(get_shopping_list_service)],
):
    """Remove the item at a position in the list."""
    shopping_list = service.remove_item_at(
        list_id, current_user.id, request.index, expected_version=request.expected_version
    )
    return ShoppingListMutationResponse(version=shopping_list.version)


@router.patch("/{list_id}", response_model=ShoppingListMutationResponse)
def replace_items(
    list_id: int,
    request: ReplaceItemsRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ShoppingListService, Depends(get_shopping_list_service)],
):
    """Replace a list's items wholesale (toggle purchased, edit amounts, reorder)."""
    shopping_list = service.replace_items(
        list_id,
        current_user.id,
        [item.model_dump(mode="json", by_alias=True) for item in request.items],
        expected_version=request.expected_version,
    )
    return ShoppingListMutationResponse(version=shopping_list.version)
