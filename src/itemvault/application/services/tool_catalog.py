"""Tool catalog exposing collection and item operations as callable functions.

Each tool has a name, a description, a strict argument model and an async
handler. The catalog is the boundary used by the HTTP routes, the CLI and
any conversational agent: execute() always returns a tagged ToolResult and
never raises.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel
from sqlalchemy.ext.asyncio import AsyncSession

from itemvault.core.exceptions import ItemVaultError, NotFoundError, ValidationError
from itemvault.core.logging import get_logger
from itemvault.domain.entities import Collection
from itemvault.domain.services import DEFAULT_THRESHOLD, CollectionService, ItemService
from itemvault.infrastructure.storage.item_store import ItemStore

logger = get_logger(__name__)

ErrorType = Literal["invalid_arguments", "unknown_tool", "not_found", "validation", "internal"]


@dataclass
class ToolContext:
    """Handles injected into every tool call."""

    session: AsyncSession
    item_store: ItemStore
    search_threshold: float = DEFAULT_THRESHOLD


@dataclass
class ToolResult:
    """Tagged outcome of a tool call.

    Attributes:
        success: Whether the tool completed.
        payload: Tool-specific fields returned on success.
        error: Failure message.
        error_type: Failure kind, used by callers to pick a status code.
        errors: Individual messages when validation reported several.
    """

    success: bool
    payload: dict[str, Any] = field(default_factory=dict)
    error: str | None = None
    error_type: ErrorType | None = None
    errors: list[str] = field(default_factory=list)

    @classmethod
    def ok(cls, **payload: Any) -> "ToolResult":
        return cls(success=True, payload=payload)

    @classmethod
    def failure(
        cls, error: str, error_type: ErrorType, errors: list[str] | None = None
    ) -> "ToolResult":
        return cls(success=False, error=error, error_type=error_type, errors=errors or [])

    def to_dict(self) -> dict[str, Any]:
        """Flatten into the JSON shape returned to clients."""
        if self.success:
            return {"success": True, **self.payload}
        data: dict[str, Any] = {
            "success": False,
            "error": self.error,
            "error_type": self.error_type,
        }
        if len(self.errors) > 1:
            data["errors"] = self.errors
        return data


class ToolArguments(BaseModel):
    """Base for tool argument models: camelCase names, no coercion, no extras."""

    model_config = ConfigDict(
        extra="forbid",
        strict=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class NoArguments(ToolArguments):
    pass


class CollectionIdArguments(ToolArguments):
    collection_id: str = Field(description="The UUID of the collection")


class CreateCollectionArguments(ToolArguments):
    title: str = Field(description="The title of the collection")
    description: str = Field(description="A description of what this collection is for")
    schema_: dict[str, Any] = Field(
        alias="schema",
        description=(
            'JSON Schema object that defines the structure of items. Must include "type": '
            '"object" and "properties" with field definitions.'
        ),
    )


class UpdateCollectionArguments(ToolArguments):
    collection_id: str = Field(description="The UUID of the collection to update")
    title: str | None = Field(default=None, description="The new title for the collection")
    description: str | None = Field(
        default=None, description="The new description for the collection"
    )
    schema_: dict[str, Any] | None = Field(
        default=None, alias="schema", description="The new JSON Schema for the collection"
    )


class QueryArguments(ToolArguments):
    query: str = Field(description="The search query string")


class ItemIdArguments(ToolArguments):
    collection_id: str = Field(description="The UUID of the collection")
    item_id: str = Field(description="The ULID of the item")


class AddItemArguments(ToolArguments):
    collection_id: str = Field(description="The UUID of the collection")
    data: dict[str, Any] = Field(
        description="The item data as a JSON object that conforms to the collection schema"
    )


class UpdateItemArguments(ToolArguments):
    collection_id: str = Field(description="The UUID of the collection")
    item_id: str = Field(description="The ULID of the item to update")
    data: dict[str, Any] = Field(description="The updated item data as a JSON object")


class SearchItemsArguments(ToolArguments):
    collection_id: str = Field(description="The UUID of the collection")
    query: str = Field(description="The search query string")


ToolHandler = Callable[[Any, ToolContext], Awaitable[ToolResult]]


@dataclass(frozen=True)
class ToolDefinition:
    """A named operation with its argument model and handler."""

    name: str
    description: str
    arguments: type[ToolArguments]
    handler: ToolHandler

    def function_schema(self) -> dict[str, Any]:
        """Render as a function declaration: name, description, parameters."""
        parameters = self.arguments.model_json_schema(by_alias=True)
        parameters.pop("title", None)
        for prop in parameters.get("properties", {}).values():
            prop.pop("title", None)
        parameters.setdefault("properties", {})
        return {
            "name": self.name,
            "description": self.description,
            "parameters": parameters,
        }


def _collections(context: ToolContext) -> CollectionService:
    return CollectionService(context.session, item_store=context.item_store)


async def _item_service(context: ToolContext, collection_id: str) -> tuple[Collection, ItemService]:
    collection = await _collections(context).get(collection_id)
    return collection, ItemService(
        collection, context.item_store, search_threshold=context.search_threshold
    )


async def list_collections(args: NoArguments, context: ToolContext) -> ToolResult:
    collections = await _collections(context).get_all()
    return ToolResult.ok(
        collections=[c.to_dict() for c in collections],
        count=len(collections),
    )


async def get_collection(args: CollectionIdArguments, context: ToolContext) -> ToolResult:
    collection = await _collections(context).get(args.collection_id)
    return ToolResult.ok(collection=collection.to_dict())


async def create_collection(args: CreateCollectionArguments, context: ToolContext) -> ToolResult:
    collection = await _collections(context).create(
        title=args.title,
        description=args.description,
        schema=args.schema_,
    )
    return ToolResult.ok(
        collection=collection.to_dict(),
        message=f'Collection "{collection.title}" created successfully with ID: {collection.id}',
    )


async def update_collection(args: UpdateCollectionArguments, context: ToolContext) -> ToolResult:
    collection = await _collections(context).update(
        args.collection_id,
        title=args.title,
        description=args.description,
        schema=args.schema_,
    )
    return ToolResult.ok(
        collection=collection.to_dict(),
        message=f'Collection "{collection.title}" updated successfully',
    )


async def delete_collection(args: CollectionIdArguments, context: ToolContext) -> ToolResult:
    await _collections(context).delete(args.collection_id)
    return ToolResult.ok(message="Collection deleted successfully")


async def search_collections(args: QueryArguments, context: ToolContext) -> ToolResult:
    collections = await _collections(context).search(args.query)
    return ToolResult.ok(
        collections=[c.to_dict() for c in collections],
        count=len(collections),
    )


async def list_items(args: CollectionIdArguments, context: ToolContext) -> ToolResult:
    collection, items = await _item_service(context, args.collection_id)
    records = await items.get_all()
    return ToolResult.ok(items=records, count=len(records), collectionTitle=collection.title)


async def get_item(args: ItemIdArguments, context: ToolContext) -> ToolResult:
    _, items = await _item_service(context, args.collection_id)
    return ToolResult.ok(item=await items.get(args.item_id))


async def add_item(args: AddItemArguments, context: ToolContext) -> ToolResult:
    _, items = await _item_service(context, args.collection_id)
    item = await items.add(args.data)
    return ToolResult.ok(item=item, message="Item added successfully")


async def update_item(args: UpdateItemArguments, context: ToolContext) -> ToolResult:
    _, items = await _item_service(context, args.collection_id)
    item = await items.update(args.item_id, args.data)
    return ToolResult.ok(item=item, message="Item updated successfully")


async def delete_item(args: ItemIdArguments, context: ToolContext) -> ToolResult:
    _, items = await _item_service(context, args.collection_id)
    await items.remove(args.item_id)
    return ToolResult.ok(message="Item deleted successfully")


async def search_items(args: SearchItemsArguments, context: ToolContext) -> ToolResult:
    _, items = await _item_service(context, args.collection_id)
    results = await items.search(args.query)
    return ToolResult.ok(results=results, count=len(results), query=args.query)


DEFAULT_TOOLS: tuple[ToolDefinition, ...] = (
    ToolDefinition(
        "listCollections",
        "List all collections. Returns an array of collections with their id, title, "
        "description, schema, and timestamps.",
        NoArguments,
        list_collections,
    ),
    ToolDefinition(
        "getCollection",
        "Get a specific collection by ID. Returns the collection details including id, "
        "title, description, schema, and timestamps.",
        CollectionIdArguments,
        get_collection,
    ),
    ToolDefinition(
        "createCollection",
        "Create a new collection with a title, description, and JSON schema. The schema "
        "defines the structure that items in this collection must follow.",
        CreateCollectionArguments,
        create_collection,
    ),
    ToolDefinition(
        "updateCollection",
        "Update an existing collection's title, description, or schema. Warning: Changing "
        "the schema may affect existing items.",
        UpdateCollectionArguments,
        update_collection,
    ),
    ToolDefinition(
        "deleteCollection",
        "Delete a collection and all its items. This action cannot be undone.",
        CollectionIdArguments,
        delete_collection,
    ),
    ToolDefinition(
        "searchCollections",
        "Search for collections by title. Returns an array of collections with their id, "
        "title, description, schema, and timestamps.",
        QueryArguments,
        search_collections,
    ),
    ToolDefinition(
        "listItems",
        "List all items in a collection. Returns an array of items with their data.",
        CollectionIdArguments,
        list_items,
    ),
    ToolDefinition(
        "getItem",
        "Get a specific item from a collection by its ID.",
        ItemIdArguments,
        get_item,
    ),
    ToolDefinition(
        "addItem",
        "Add a new item to a collection. The item must conform to the collection's JSON schema.",
        AddItemArguments,
        add_item,
    ),
    ToolDefinition(
        "updateItem",
        "Update an existing item in a collection. The updated data must conform to the "
        "collection's JSON schema.",
        UpdateItemArguments,
        update_item,
    ),
    ToolDefinition(
        "deleteItem",
        "Delete an item from a collection. This action cannot be undone.",
        ItemIdArguments,
        delete_item,
    ),
    ToolDefinition(
        "searchItems",
        "Search for items in a collection using fuzzy search. Searches across all fields "
        "in the items.",
        SearchItemsArguments,
        search_items,
    ),
)


def _format_argument_errors(exc: PydanticValidationError) -> list[str]:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])
    return messages


class ToolCatalog:
    """Registry of tools, looked up and executed by name."""

    def __init__(self, tools: tuple[ToolDefinition, ...] | list[ToolDefinition] = DEFAULT_TOOLS):
        self._tools: dict[str, ToolDefinition] = {}
        for tool in tools:
            if tool.name in self._tools:
                raise ValueError(f"Duplicate tool name: {tool.name}")
            self._tools[tool.name] = tool

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    @property
    def names(self) -> list[str]:
        return list(self._tools)

    def get(self, name: str) -> ToolDefinition | None:
        return self._tools.get(name)

    def function_schemas(self) -> list[dict[str, Any]]:
        """Return the function declarations of every tool, in registration order."""
        return [tool.function_schema() for tool in self._tools.values()]

    async def execute(
        self,
        name: str,
        arguments: dict[str, Any] | None,
        context: ToolContext,
    ) -> ToolResult:
        """Validate arguments and run a tool.

        Every failure, including unexpected exceptions, is returned as a
        ToolResult with success=False and an error_type.
        """
        tool = self._tools.get(name)
        if tool is None:
            logger.info("Unknown tool requested", tool=name)
            return ToolResult.failure(f"Unknown tool: {name}", "unknown_tool")

        try:
            args = tool.arguments.model_validate(arguments if arguments is not None else {})
        except PydanticValidationError as e:
            errors = _format_argument_errors(e)
            logger.info("Invalid tool arguments", tool=name, errors=errors)
            return ToolResult.failure(
                f"Invalid arguments for {name}: {'; '.join(errors)}",
                "invalid_arguments",
                errors,
            )

        try:
            return await tool.handler(args, context)
        except NotFoundError as e:
            logger.info("Tool target not found", tool=name, error=e.message)
            return ToolResult.failure(e.message, "not_found")
        except ValidationError as e:
            logger.info("Tool validation failed", tool=name, errors=e.errors)
            return ToolResult.failure(e.message, "validation", e.errors)
        except ItemVaultError as e:
            await _rollback(name, context)
            logger.error("Tool failed", tool=name, error_type="internal", error=e.message)
            return ToolResult.failure(e.message, "internal")
        except Exception as e:
            await _rollback(name, context)
            logger.exception("Tool raised unexpectedly", tool=name, error_type="internal")
            return ToolResult.failure(str(e) or type(e).__name__, "internal")


async def _rollback(name: str, context: ToolContext) -> None:
    try:
        await context.session.rollback()
    except Exception as e:
        logger.error("Rollback failed", tool=name, error=str(e))


@lru_cache
def get_tool_catalog() -> ToolCatalog:
    """Return the shared catalog of built-in tools."""
    return ToolCatalog()
