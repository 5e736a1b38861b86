"""Item API routes, nested under a collection."""

from typing import Any

from fastapi import APIRouter, Body, Query, status
from fastapi.responses import JSONResponse

from itemvault.infrastructure.api.dependencies import Catalog, Context
from itemvault.infrastructure.api.responses import error_body, error_response
from itemvault.infrastructure.api.schemas import ItemSearchResponse, MessageResponse

router = APIRouter()

_NOT_FOUND = {404: {"description": "Collection or item not found"}}


@router.get("", status_code=status.HTTP_200_OK, response_model=None, responses=_NOT_FOUND)
async def list_items(
    collection_id: str,
    catalog: Catalog,
    context: Context,
) -> list[dict[str, Any]] | JSONResponse:
    """List every item of a collection in insertion order."""
    result = await catalog.execute("listItems", {"collectionId": collection_id}, context)
    if not result.success:
        return error_response(result)
    return result.payload["items"]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=None,
    responses={400: {"description": "Item does not match the collection schema"}, **_NOT_FOUND},
)
async def add_item(
    collection_id: str,
    catalog: Catalog,
    context: Context,
    data: dict[str, Any] = Body(...),
) -> dict[str, Any] | JSONResponse:
    """Validate and add an item. Any supplied id is replaced."""
    result = await catalog.execute(
        "addItem", {"collectionId": collection_id, "data": data}, context
    )
    if not result.success:
        return error_response(result)
    return result.payload["item"]


@router.get(
    "/search",
    status_code=status.HTTP_200_OK,
    response_model=ItemSearchResponse,
    responses={400: {"description": "Missing query parameter"}, **_NOT_FOUND},
)
async def search_items(
    collection_id: str,
    catalog: Catalog,
    context: Context,
    q: str | None = Query(default=None, description="Fuzzy search query"),
) -> ItemSearchResponse | JSONResponse:
    """Fuzzy-search the items of a collection, best match first."""
    if q is None or not q.strip():
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body("Missing query parameter: q"),
        )

    result = await catalog.execute(
        "searchItems", {"collectionId": collection_id, "query": q}, context
    )
    if not result.success:
        return error_response(result)
    return ItemSearchResponse(
        query=result.payload["query"],
        count=result.payload["count"],
        results=result.payload["results"],
    )


@router.get(
    "/{item_id}", status_code=status.HTTP_200_OK, response_model=None, responses=_NOT_FOUND
)
async def get_item(
    collection_id: str,
    item_id: str,
    catalog: Catalog,
    context: Context,
) -> dict[str, Any] | JSONResponse:
    """Get a single item by ID."""
    result = await catalog.execute(
        "getItem", {"collectionId": collection_id, "itemId": item_id}, context
    )
    if not result.success:
        return error_response(result)
    return result.payload["item"]


@router.put(
    "/{item_id}",
    status_code=status.HTTP_200_OK,
    response_model=None,
    responses={400: {"description": "Item does not match the collection schema"}, **_NOT_FOUND},
)
async def update_item(
    collection_id: str,
    item_id: str,
    catalog: Catalog,
    context: Context,
    data: dict[str, Any] = Body(...),
) -> dict[str, Any] | JSONResponse:
    """Replace every field of an item, keeping its ID."""
    result = await catalog.execute(
        "updateItem",
        {"collectionId": collection_id, "itemId": item_id, "data": data},
        context,
    )
    if not result.success:
        return error_response(result)
    return result.payload["item"]


@router.delete(
    "/{item_id}",
    status_code=status.HTTP_200_OK,
    response_model=MessageResponse,
    responses=_NOT_FOUND,
)
async def delete_item(
    collection_id: str,
    item_id: str,
    catalog: Catalog,
    context: Context,
) -> MessageResponse | JSONResponse:
    """Delete an item."""
    result = await catalog.execute(
        "deleteItem", {"collectionId": collection_id, "itemId": item_id}, context
    )
    if not result.success:
        return error_response(result)
    return MessageResponse(message=result.payload["message"])
