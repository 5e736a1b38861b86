"""Application services for ItemVault."""

from itemvault.application.services.tool_catalog import (
    DEFAULT_TOOLS,
    ToolCatalog,
    ToolContext,
    ToolDefinition,
    ToolResult,
    get_tool_catalog,
)

__all__ = [
    "DEFAULT_TOOLS",
    "ToolCatalog",
    "ToolContext",
    "ToolDefinition",
    "ToolResult",
    "get_tool_catalog",
]
