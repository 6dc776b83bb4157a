"""Items router for the catalog server.

Read-only endpoints over the injected `ItemStore`. Only GET is registered,
so any other method is answered with 405 by the application's exception
handlers.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from catalog.server.dependencies import get_item_store
from catalog.server.item_store import ItemStore
from catalog.server.models import Item, SuccessResponse


items_router = APIRouter(prefix="/items", tags=["Items"])

ITEM_ID_REQUIRED = "Item ID is required"
ITEM_NOT_FOUND = "Item not found"


@items_router.get("")
def list_items(
    store: ItemStore = Depends(get_item_store),
) -> SuccessResponse[list[Item]]:
    """List every item in store order."""
    return SuccessResponse(data=store.list_items())


@items_router.get("/{item_id:path}")
def get_item(
    item_id: str,
    store: ItemStore = Depends(get_item_store),
) -> SuccessResponse[Item]:
    """Get a single item by id.

    The whole remainder of the path is the id, so ids with extra segments
    such as `1/extra` are looked up verbatim and end up as 404.
    """
    if not item_id:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail=ITEM_ID_REQUIRED)

    item = store.get_item(item_id)
    if item is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail=ITEM_NOT_FOUND)
    return SuccessResponse(data=item)
