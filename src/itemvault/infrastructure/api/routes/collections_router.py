"""Collections API routes.

Provides endpoints for managing collections. Every endpoint delegates to
the tool catalog so HTTP and tool callers share one code path.
"""

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from itemvault.infrastructure.api.dependencies import Catalog, Context
from itemvault.infrastructure.api.responses import error_response
from itemvault.infrastructure.api.schemas import (
    CollectionResponse,
    CreateCollectionRequest,
    MessageResponse,
    UpdateCollectionRequest,
)

router = APIRouter()


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=list[CollectionResponse],
)
async def list_collections(
    catalog: Catalog,
    context: Context,
    search: str | None = Query(default=None, description="Case-insensitive title filter"),
) -> list[CollectionResponse] | JSONResponse:
    """List all collections, optionally filtered by title."""
    if search:
        result = await catalog.execute("searchCollections", {"query": search}, context)
    else:
        result = await catalog.execute("listCollections", {}, context)

    if not result.success:
        return error_response(result)
    return result.payload["collections"]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=CollectionResponse,
    responses={400: {"description": "Invalid title or JSON Schema"}},
)
async def create_collection(
    request: CreateCollectionRequest,
    catalog: Catalog,
    context: Context,
) -> CollectionResponse | JSONResponse:
    """Create a new collection."""
    result = await catalog.execute("createCollection", request.to_arguments(), context)
    if not result.success:
        return error_response(result)
    return result.payload["collection"]


@router.get(
    "/{collection_id}",
    status_code=status.HTTP_200_OK,
    response_model=CollectionResponse,
    responses={404: {"description": "Collection not found"}},
)
async def get_collection(
    collection_id: str,
    catalog: Catalog,
    context: Context,
) -> CollectionResponse | JSONResponse:
    """Get a single collection by ID."""
    result = await catalog.execute("getCollection", {"collectionId": collection_id}, context)
    if not result.success:
        return error_response(result)
    return result.payload["collection"]


@router.put(
    "/{collection_id}",
    status_code=status.HTTP_200_OK,
    response_model=CollectionResponse,
    responses={
        400: {"description": "Invalid title or JSON Schema"},
        404: {"description": "Collection not found"},
    },
)
async def update_collection(
    collection_id: str,
    request: UpdateCollectionRequest,
    catalog: Catalog,
    context: Context,
) -> CollectionResponse | JSONResponse:
    """Update a collection's title, description or schema.

    Existing items are kept as they are even if they no longer satisfy a
    changed schema.
    """
    result = await catalog.execute(
        "updateCollection", request.to_arguments(collection_id), context
    )
    if not result.success:
        return error_response(result)
    return result.payload["collection"]


@router.delete(
    "/{collection_id}",
    status_code=status.HTTP_200_OK,
    response_model=MessageResponse,
    responses={404: {"description": "Collection not found"}},
)
async def delete_collection(
    collection_id: str,
    catalog: Catalog,
    context: Context,
) -> MessageResponse | JSONResponse:
    """Delete a collection together with all of its items."""
    result = await catalog.execute("deleteCollection", {"collectionId": collection_id}, context)
    if not result.success:
        return error_response(result)
    return MessageResponse(message=result.payload["message"])
