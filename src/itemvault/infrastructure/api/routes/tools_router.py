"""Tool API routes.

Lists the function declarations of the tool catalog and executes tools by
name. Execution always answers 200 with the tagged result; callers read
success and error_type from the body.
"""

from typing import Any

from fastapi import APIRouter, Body, status

from itemvault.core.logging import get_logger
from itemvault.infrastructure.api.dependencies import Catalog, Context
from itemvault.infrastructure.api.schemas import ToolListResponse

logger = get_logger(__name__)

router = APIRouter()


@router.get("", status_code=status.HTTP_200_OK, response_model=ToolListResponse)
async def list_tools(catalog: Catalog) -> ToolListResponse:
    """List the function declarations of every tool."""
    schemas = catalog.function_schemas()
    return ToolListResponse(tools=schemas, count=len(schemas))


@router.post("/{name}", status_code=status.HTTP_200_OK)
async def call_tool(
    name: str,
    catalog: Catalog,
    context: Context,
    arguments: dict[str, Any] | None = Body(default=None),
) -> dict[str, Any]:
    """Execute a tool with the JSON object body as its arguments."""
    result = await catalog.execute(name, arguments, context)
    logger.info("Tool called", tool=name, success=result.success, error_type=result.error_type)
    return result.to_dict()
