"""Conversion of tool results and errors into HTTP responses."""

from typing import Any

from fastapi import status
from fastapi.responses import JSONResponse

from itemvault.application.services import ToolResult
from itemvault.core.exceptions import ItemVaultError, NotFoundError, ValidationError

STATUS_BY_ERROR_TYPE = {
    "not_found": status.HTTP_404_NOT_FOUND,
    "unknown_tool": status.HTTP_404_NOT_FOUND,
    "validation": status.HTTP_400_BAD_REQUEST,
    "invalid_arguments": status.HTTP_400_BAD_REQUEST,
    "internal": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_body(message: str, errors: list[str] | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"error": message}
    if errors and len(errors) > 1:
        body["errors"] = errors
    return body


def error_response(result: ToolResult) -> JSONResponse:
    """Build the error response for a failed tool result."""
    return JSONResponse(
        status_code=STATUS_BY_ERROR_TYPE.get(
            result.error_type or "internal", status.HTTP_500_INTERNAL_SERVER_ERROR
        ),
        content=error_body(result.error or "Internal server error", result.errors),
    )


def status_for_exception(exc: ItemVaultError) -> int:
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_500_INTERNAL_SERVER_ERROR
