"""API Routes for ItemVault."""

from itemvault.infrastructure.api.routes.collections_router import router as collections_router
from itemvault.infrastructure.api.routes.items_router import router as items_router
from itemvault.infrastructure.api.routes.tools_router import router as tools_router

__all__ = [
    "collections_router",
    "items_router",
    "tools_router",
]
