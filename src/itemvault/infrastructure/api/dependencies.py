"""FastAPI dependencies shared by the API routes.

Provides the item store held on application state and the tool context
assembled for each request.
"""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from itemvault.application.services import ToolCatalog, ToolContext, get_tool_catalog
from itemvault.core.config import get_settings
from itemvault.infrastructure.persistence.database import get_db_session
from itemvault.infrastructure.storage import ItemStore, build_item_store


def get_item_store(request: Request) -> ItemStore:
    """Get the item store from app state, building it on first use.

    Args:
        request: FastAPI request object.

    Returns:
        ItemStore shared by all requests of the application.
    """
    item_store = getattr(request.app.state, "item_store", None)
    if item_store is None:
        item_store = build_item_store(get_settings())
        request.app.state.item_store = item_store
    return item_store


async def get_tool_context(
    session: Annotated[AsyncSession, Depends(get_db_session)],
    item_store: Annotated[ItemStore, Depends(get_item_store)],
) -> ToolContext:
    """Assemble the handles a tool call needs for this request."""
    return ToolContext(
        session=session,
        item_store=item_store,
        search_threshold=get_settings().search_threshold,
    )


# Type aliases for dependency injection
Catalog = Annotated[ToolCatalog, Depends(get_tool_catalog)]
Context = Annotated[ToolContext, Depends(get_tool_context)]
