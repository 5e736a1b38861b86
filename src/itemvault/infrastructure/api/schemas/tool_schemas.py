"""Pydantic schemas for tool endpoints."""

from typing import Any

from pydantic import BaseModel


class FunctionSchema(BaseModel):
    """Function declaration of one tool."""

    name: str
    description: str
    parameters: dict[str, Any]


class ToolListResponse(BaseModel):
    """Response listing the declarations of every tool."""

    tools: list[FunctionSchema]
    count: int
